from __future__ import annotations

from typing import List

from .models import Action, Bet, Call, Check, Fold, Raise, Street, TableState


def legal_actions(state: TableState, seat_index: int) -> List[Action]:
    """Actions ``seat_index`` may take right now; empty when it cannot act.

    Sizes are minimums for BET/RAISE. Anything above the minimum is validated
    by ``apply_action``.
    """
    if not 0 <= seat_index < len(state.players):
        return []
    player = state.players[seat_index]
    if player.has_folded or player.all_in:
        return []
    if seat_index != state.to_act_index or state.street == Street.SHOWDOWN:
        return []

    to_call = state.to_call(seat_index)
    if to_call <= 0:
        return [Check(), Bet(max(state.big_blind, state.min_raise))]
    return [
        Fold(),
        Call(min(to_call, player.stack)),
        Raise(to_call + state.min_raise),
    ]
