from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Sequence, Tuple

from holdem.game import apply_action, create_table, deal_hole, post_blinds, settle_streets
from holdem.legal import legal_actions
from holdem.models import Action, Call, Check, Fold, Player, Street, TableState


def make_players(count: int = 3, stack: int = 1_000, stacks: Sequence[int] = ()) -> List[Player]:
    """Build ``count`` seated players; seat 0 is the human."""
    players = []
    for idx in range(count):
        chips = stacks[idx] if idx < len(stacks) else stack
        players.append(Player(id=f"P{idx}", name=f"Player{idx}", seat=idx, stack=chips, is_human=idx == 0))
    return players


def start_hand(
    count: int = 3,
    *,
    stack: int = 1_000,
    stacks: Sequence[int] = (),
    sb: int = 5,
    bb: int = 10,
    button: int = 0,
    seed: str = "test-seed",
) -> TableState:
    """Create a table, deal and post blinds."""
    state = create_table(
        make_players(count, stack, stacks),
        small_blind=sb,
        big_blind=bb,
        button_index=button,
        seed=seed,
    )
    return post_blinds(deal_hole(state))


def perform_actions(state: TableState, actions: Iterable[Tuple[int, Action]]) -> TableState:
    """Apply a scripted sequence of (seat, action), advancing streets after each."""
    for seat_idx, action in actions:
        state = settle_streets(apply_action(state, seat_idx, action))
    return state


def passive_action(state: TableState, seat_idx: int) -> Action:
    legal = legal_actions(state, seat_idx)
    for candidate in legal:
        if isinstance(candidate, Check):
            return candidate
    for candidate in legal:
        if isinstance(candidate, Call):
            return candidate
    return Fold()


def auto_complete_hand(state: TableState, limit: int = 200) -> TableState:
    """Check/call every seat until showdown."""
    for _ in range(limit):
        if state.street == Street.SHOWDOWN:
            break
        seat_idx = state.to_act_index
        state = settle_streets(apply_action(state, seat_idx, passive_action(state, seat_idx)))
    return state


def with_player(state: TableState, seat_idx: int, **changes) -> TableState:
    players = list(state.players)
    players[seat_idx] = replace(players[seat_idx], **changes)
    return replace(state, players=tuple(players))
