from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, FrozenSet, Optional, Tuple, Union

from .cards import Card


class Street(str, Enum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"


class ActionType(str, Enum):
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    BET = "BET"
    RAISE = "RAISE"


# Actions ------------------------------------------------------------------
# BET/RAISE sizes are the chips posted by this action, not a raise-to total.


@dataclass(frozen=True)
class Fold:
    kind: ClassVar[ActionType] = ActionType.FOLD


@dataclass(frozen=True)
class Check:
    kind: ClassVar[ActionType] = ActionType.CHECK


@dataclass(frozen=True)
class Call:
    size: Optional[int] = None
    kind: ClassVar[ActionType] = ActionType.CALL


@dataclass(frozen=True)
class Bet:
    size: int
    kind: ClassVar[ActionType] = ActionType.BET


@dataclass(frozen=True)
class Raise:
    size: int
    kind: ClassVar[ActionType] = ActionType.RAISE


Action = Union[Fold, Check, Call, Bet, Raise]


def action_from_kind(kind: Union[str, ActionType], size: Optional[int] = None) -> Action:
    action_type = ActionType(kind)
    if action_type == ActionType.FOLD:
        return Fold()
    if action_type == ActionType.CHECK:
        return Check()
    if action_type == ActionType.CALL:
        return Call(size)
    if size is None:
        raise ValueError(f"{action_type.value} requires a size")
    if action_type == ActionType.BET:
        return Bet(int(size))
    return Raise(int(size))


# Table state --------------------------------------------------------------


@dataclass(frozen=True)
class Rules:
    min_players: int = 2
    max_players: int = 9
    small_blind: int = 50
    big_blind: int = 100
    allow_side_pots: bool = False


DEFAULT_RULES = Rules()


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    seat: int
    stack: int
    is_human: bool = False
    has_folded: bool = False
    all_in: bool = False
    committed: int = 0  # current betting round only
    hole: Optional[Tuple[Card, Card]] = None

    @property
    def can_act(self) -> bool:
        return not self.has_folded and not self.all_in


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class ActionRecord:
    hand_id: int
    actor: str
    street: Street
    kind: ActionType
    size: Optional[int] = None
    ts: int = field(default_factory=_now_ms)
    blind: bool = False


@dataclass(frozen=True)
class SidePot:
    # Reserved; the engine only ever settles a single pot.
    amount: int
    eligible: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class PlayerResult:
    player_id: str
    seat: int
    score: int
    label: str
    payout: int


@dataclass(frozen=True)
class ShowdownSummary:
    results: Tuple[PlayerResult, ...]
    winners: Tuple[str, ...]
    total_pot: int


@dataclass(frozen=True)
class TableState:
    """Authoritative table snapshot. Every engine call returns a new one."""

    hand_id: int
    players: Tuple[Player, ...]
    button_index: int
    small_blind: int
    big_blind: int
    pot: int
    board: Tuple[Card, ...]
    deck: Tuple[Card, ...]
    street: Street
    to_act_index: int
    min_raise: int
    rng_seed: str
    side_pots: Tuple[SidePot, ...] = ()
    last_aggressor_index: Optional[int] = None
    hand_history: Tuple[ActionRecord, ...] = ()
    showdown: Optional[ShowdownSummary] = None

    def max_committed(self) -> int:
        return max(player.committed for player in self.players)

    def to_call(self, seat_index: int) -> int:
        return self.max_committed() - self.players[seat_index].committed

    def total_chips(self) -> int:
        return self.pot + sum(p.stack + p.committed for p in self.players)
