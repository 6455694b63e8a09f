"""No-limit Hold'em rules engine for a single practice table."""

from .cards import RANKS, SUITS, Card, deal, hash_seed, parse_cards, shuffled_deck
from .errors import BelowMinimumError, DeckExhaustedError, EngineError, InvalidConfigError, InvalidSizeError
from .evaluator import label7, rank7
from .game import (
    apply_action,
    create_table,
    deal_hole,
    maybe_advance_street,
    post_blinds,
    settle_streets,
    showdown,
    split_pot,
    start_next_hand,
)
from .legal import legal_actions
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
    Rules,
    ShowdownSummary,
    SidePot,
    Street,
    TableState,
    action_from_kind,
)
from .replay import replay_hand
from .serialization import public_view, state_from_dict, state_to_dict

__all__ = [
    "RANKS",
    "SUITS",
    "Card",
    "deal",
    "hash_seed",
    "parse_cards",
    "shuffled_deck",
    "BelowMinimumError",
    "DeckExhaustedError",
    "EngineError",
    "InvalidConfigError",
    "InvalidSizeError",
    "label7",
    "rank7",
    "apply_action",
    "create_table",
    "deal_hole",
    "maybe_advance_street",
    "post_blinds",
    "settle_streets",
    "showdown",
    "split_pot",
    "start_next_hand",
    "legal_actions",
    "DEFAULT_RULES",
    "Action",
    "ActionRecord",
    "ActionType",
    "Bet",
    "Call",
    "Check",
    "Fold",
    "Player",
    "PlayerResult",
    "Raise",
    "Rules",
    "ShowdownSummary",
    "SidePot",
    "Street",
    "TableState",
    "action_from_kind",
    "replay_hand",
    "public_view",
    "state_from_dict",
    "state_to_dict",
]
