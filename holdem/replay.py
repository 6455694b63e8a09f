from __future__ import annotations

from typing import Dict, Iterable

from .game import apply_action, settle_streets
from .models import ActionRecord, ActionType, TableState, action_from_kind


def replay_hand(start: TableState, history: Iterable[ActionRecord]) -> TableState:
    """Re-apply the recorded voluntary actions of ``start.hand_id``.

    ``start`` is the state right after blinds were posted (it carries the
    deck for the hand). Blind records and records of other hands are skipped.
    """
    seats: Dict[str, int] = {player.id: idx for idx, player in enumerate(start.players)}
    state = start
    for record in history:
        if record.hand_id != start.hand_id or record.blind:
            continue
        seat_idx = seats[record.actor]
        size = record.size
        if record.kind in (ActionType.BET, ActionType.RAISE) and size is not None:
            # Histories store chips actually posted; a capped all-in may be
            # smaller than the minimum that was requested.
            player = state.players[seat_idx]
            if size >= player.stack:
                to_call = state.to_call(seat_idx)
                floor = state.big_blind if to_call <= 0 else to_call + state.min_raise
                size = max(size, floor)
        state = settle_streets(apply_action(state, seat_idx, action_from_kind(record.kind, size)))
    return state
