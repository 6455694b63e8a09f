from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from .cards import deal, hash_seed, shuffled_deck
from .errors import BelowMinimumError, InvalidConfigError, InvalidSizeError
from .evaluator import label7, rank7
from .models import (
    DEFAULT_RULES,
    Action,
    ActionRecord,
    ActionType,
    Bet,
    Call,
    Check,
    Fold,
    Player,
    PlayerResult,
    Raise,
    ShowdownSummary,
    Street,
    TableState,
)

# Every public function here takes a TableState and returns a new one. The
# input is never modified; hard failures raise before anything is built.

LOGGER = logging.getLogger(__name__)

DEFAULT_SEED = "12345"

NEXT_STREET = {
    Street.PREFLOP: Street.FLOP,
    Street.FLOP: Street.TURN,
    Street.TURN: Street.RIVER,
}
BOARD_CARDS = {
    Street.PREFLOP: 3,
    Street.FLOP: 1,
    Street.TURN: 1,
}


# Helpers -------------------------------------------------------------------


def _next_active_index(players: Sequence[Player], start: int, fallback: int) -> int:
    """First seat from ``start`` (wrapping) that is neither folded nor all-in."""
    count = len(players)
    for offset in range(count):
        idx = (start + offset) % count
        if players[idx].can_act:
            return idx
    return fallback


def _next_live_index(players: Sequence[Player], start: int) -> int:
    count = len(players)
    for offset in range(count):
        idx = (start + offset) % count
        if not players[idx].has_folded:
            return idx
    return start % count


def _post(player: Player, size: int) -> Tuple[Player, int]:
    # Capped at the stack; committing the whole stack makes the seat all-in.
    if size >= player.stack:
        posted = player.stack
        return replace(player, committed=player.committed + posted, stack=0, all_in=True), posted
    return replace(player, committed=player.committed + size, stack=player.stack - size), size


def _record(
    state: TableState,
    player: Player,
    kind: ActionType,
    size: Optional[int] = None,
    blind: bool = False,
) -> ActionRecord:
    return ActionRecord(
        hand_id=state.hand_id,
        actor=player.id,
        street=state.street,
        kind=kind,
        size=size,
        blind=blind,
    )


def _everyone_acted(state: TableState) -> bool:
    required = [player.id for player in state.players if player.can_act]
    if not required:
        return True
    acted = {
        record.actor
        for record in state.hand_history
        if record.hand_id == state.hand_id and record.street == state.street and not record.blind
    }
    return all(player_id in acted for player_id in required)


# Table setup ----------------------------------------------------------------


def create_table(
    players: Sequence[Player],
    *,
    small_blind: int,
    big_blind: int,
    button_index: int = 0,
    seed: Optional[str] = None,
) -> TableState:
    if len(players) < DEFAULT_RULES.min_players:
        raise InvalidConfigError(f"Need at least {DEFAULT_RULES.min_players} players")
    if small_blind <= 0 or big_blind <= 0 or small_blind > big_blind:
        raise InvalidConfigError("Blinds must be positive with small blind <= big blind")
    if len({player.id for player in players}) != len(players):
        raise InvalidConfigError("Player ids must be unique")

    seed = DEFAULT_SEED if seed is None else seed
    seated = tuple(
        replace(player, has_folded=False, all_in=False, committed=0, hole=None) for player in players
    )
    count = len(seated)
    button = button_index % count
    return TableState(
        hand_id=1,
        players=seated,
        button_index=button,
        small_blind=small_blind,
        big_blind=big_blind,
        pot=0,
        board=(),
        deck=tuple(shuffled_deck(hash_seed(seed))),
        street=Street.PREFLOP,
        # Blinds are posted separately, so under-the-gun is button + 3.
        to_act_index=(button + 3) % count,
        min_raise=big_blind,
        rng_seed=seed,
    )


def deal_hole(state: TableState) -> TableState:
    """Deal two cards round-robin to every live player without hole cards."""
    waiting = [idx for idx, player in enumerate(state.players) if not player.has_folded and player.hole is None]
    if not waiting:
        return state

    deck = list(state.deck)
    dealt: Dict[int, List] = {idx: [] for idx in waiting}
    for _ in range(2):
        for idx in waiting:
            dealt[idx].extend(deal(deck, 1))

    players = list(state.players)
    for idx, cards in dealt.items():
        players[idx] = replace(players[idx], hole=(cards[0], cards[1]))
    return replace(state, players=tuple(players), deck=tuple(deck))


def post_blinds(state: TableState) -> TableState:
    """Blinds go to the first two live seats after the button.

    With every seat funded that is button+1 and button+2. Seats sitting out
    are skipped, and nothing is posted when fewer than two seats are live.
    """
    if sum(1 for player in state.players if not player.has_folded) < 2:
        return state
    sb_idx = _next_live_index(state.players, state.button_index + 1)
    bb_idx = _next_live_index(state.players, sb_idx + 1)

    players = list(state.players)
    players[sb_idx], sb_posted = _post(players[sb_idx], state.small_blind)
    players[bb_idx], bb_posted = _post(players[bb_idx], state.big_blind)
    records = (
        _record(state, players[sb_idx], ActionType.BET, sb_posted, blind=True),
        _record(state, players[bb_idx], ActionType.BET, bb_posted, blind=True),
    )
    # Blinds stay in ``committed``; the pot only grows when a street closes.
    return replace(
        state,
        players=tuple(players),
        hand_history=state.hand_history + records,
        to_act_index=_next_active_index(players, bb_idx + 1, state.to_act_index),
        min_raise=state.big_blind,
    )


# Actions --------------------------------------------------------------------


def apply_action(state: TableState, seat_index: int, action: Action) -> TableState:
    """Apply one action for ``seat_index``.

    Acting out of turn, while folded or all-in, or after showdown is ignored
    and the same state is returned. Invalid BET/RAISE sizes raise.
    """
    if not 0 <= seat_index < len(state.players):
        return state
    player = state.players[seat_index]
    if player.has_folded or player.all_in:
        return state
    if seat_index != state.to_act_index or state.street == Street.SHOWDOWN:
        return state

    to_call = state.to_call(seat_index)
    players = list(state.players)
    min_raise = state.min_raise
    aggressor = state.last_aggressor_index

    if isinstance(action, Fold):
        players[seat_index] = replace(player, has_folded=True)
        record = _record(state, player, ActionType.FOLD)
    elif isinstance(action, Check) or (isinstance(action, Call) and to_call <= 0):
        record = _record(state, player, ActionType.CHECK)
    elif isinstance(action, Call):
        players[seat_index], posted = _post(player, min(to_call, player.stack))
        record = _record(state, player, ActionType.CALL, posted)
    elif isinstance(action, (Bet, Raise)):
        size = action.size
        if size is None or size <= 0:
            raise InvalidSizeError("Bet/raise size must be positive")
        if to_call <= 0:
            if size < state.big_blind:
                raise BelowMinimumError(f"Opening bet must be at least {state.big_blind}")
            players[seat_index], posted = _post(player, size)
            min_raise = max(min_raise, posted)
        else:
            minimum = to_call + state.min_raise
            if size < minimum:
                raise BelowMinimumError(f"Raise must post at least {minimum}")
            players[seat_index], posted = _post(player, size)
            min_raise = max(min_raise, posted - to_call)
        aggressor = seat_index
        record = _record(state, player, action.kind, posted)
    else:
        raise ValueError(f"Unsupported action {action!r}")

    return replace(
        state,
        players=tuple(players),
        hand_history=state.hand_history + (record,),
        to_act_index=_next_active_index(players, seat_index + 1, state.to_act_index),
        min_raise=min_raise,
        last_aggressor_index=aggressor,
    )


# Streets --------------------------------------------------------------------


def maybe_advance_street(state: TableState) -> TableState:
    """Close the betting round if it is finished, otherwise return ``state``."""
    if state.street == Street.SHOWDOWN:
        return state

    live = [player for player in state.players if not player.has_folded]
    if len(live) <= 1:
        return showdown(state)

    high = state.max_committed()
    equalized = all(p.has_folded or p.all_in or p.committed == high for p in state.players)
    if not equalized or not _everyone_acted(state):
        return state

    swept = sum(player.committed for player in state.players)
    players = [replace(player, committed=0) for player in state.players]
    if state.street == Street.RIVER:
        return showdown(replace(state, players=tuple(players), pot=state.pot + swept))

    deck = list(state.deck)
    board = state.board + tuple(deal(deck, BOARD_CARDS[state.street]))
    street = NEXT_STREET[state.street]
    LOGGER.debug("Hand %s: %s -> %s, pot %s", state.hand_id, state.street.value, street.value, state.pot + swept)
    return replace(
        state,
        players=tuple(players),
        pot=state.pot + swept,
        board=board,
        deck=tuple(deck),
        street=street,
        to_act_index=_next_active_index(players, state.button_index + 1, state.to_act_index),
        min_raise=state.big_blind,
        last_aggressor_index=None,
    )


# Showdown -------------------------------------------------------------------


def split_pot(total: int, winners: Sequence[int]) -> Dict[int, int]:
    """Equal shares; odd chips go one each to the lowest seat indices."""
    if not winners:
        return {}
    share, remainder = divmod(total, len(winners))
    payouts: Dict[int, int] = {}
    for idx, seat_idx in enumerate(sorted(winners)):
        payouts[seat_idx] = share + (1 if idx < remainder else 0)
    return payouts


def showdown(state: TableState) -> TableState:
    total = state.pot + sum(player.committed for player in state.players)
    players = [replace(player, committed=0) for player in state.players]

    contenders = [idx for idx, player in enumerate(players) if not player.has_folded]
    if not contenders:
        return replace(state, players=tuple(players), pot=total, street=Street.SHOWDOWN)

    scores = {idx: rank7(players[idx].hole, state.board) for idx in contenders}
    best = max(scores.values())
    winners = [idx for idx in contenders if scores[idx] == best]
    payouts = split_pot(total, winners)
    for idx, amount in payouts.items():
        players[idx] = replace(players[idx], stack=players[idx].stack + amount)

    summary = ShowdownSummary(
        results=tuple(
            PlayerResult(
                player_id=players[idx].id,
                seat=players[idx].seat,
                score=scores[idx],
                label=label7(players[idx].hole, state.board),
                payout=payouts.get(idx, 0),
            )
            for idx in contenders
        ),
        winners=tuple(players[idx].id for idx in winners),
        total_pot=total,
    )
    LOGGER.debug("Hand %s showdown: winners=%s pot=%s", state.hand_id, list(summary.winners), total)
    return replace(state, players=tuple(players), pot=0, street=Street.SHOWDOWN, showdown=summary)


# Hand lifecycle -------------------------------------------------------------


def start_next_hand(state: TableState) -> TableState:
    if state.pot or any(player.committed for player in state.players):
        LOGGER.warning("Hand %s restarted with %s chips still in play", state.hand_id, state.pot)

    hand_id = state.hand_id + 1
    count = len(state.players)
    button = (state.button_index + 1) % count
    seed = f"{state.rng_seed}-{hand_id}"
    # Busted seats sit out the hand: folded before the deal, no blinds.
    players = tuple(
        replace(player, committed=0, all_in=False, has_folded=player.stack == 0, hole=None)
        for player in state.players
    )
    fresh = replace(
        state,
        hand_id=hand_id,
        players=players,
        button_index=button,
        pot=0,
        side_pots=(),
        board=(),
        deck=tuple(shuffled_deck(hash_seed(seed))),
        street=Street.PREFLOP,
        to_act_index=(button + 3) % count,
        min_raise=state.big_blind,
        last_aggressor_index=None,
        rng_seed=seed,
        showdown=None,
    )
    return maybe_advance_street(post_blinds(deal_hole(fresh)))


def settle_streets(state: TableState) -> TableState:
    """Advance street by street while betting rounds keep closing.

    Stops at the first round that still needs a decision, so after an all-in
    call it runs the board out to showdown.
    """
    while state.street != Street.SHOWDOWN:
        advanced = maybe_advance_street(state)
        if advanced is state:
            break
        state = advanced
    return state
