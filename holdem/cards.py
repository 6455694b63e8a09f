from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .errors import DeckExhaustedError

RANKS = "23456789TJQKA"
SUITS = "cdhs"

FNV_OFFSET = 0x811C9DC5
FNV_PRIME = 0x01000193


@dataclass(frozen=True)
class Card:
    rank: str
    suit: str

    def __post_init__(self) -> None:
        if len(self.rank) != 1 or self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")
        if len(self.suit) != 1 or self.suit not in SUITS:
            raise ValueError(f"Invalid suit: {self.suit}")

    @property
    def label(self) -> str:
        return f"{self.rank}{self.suit}"

    def __str__(self) -> str:
        return self.label


def hash_seed(seed: str) -> int:
    """FNV-1a over the UTF-8 bytes of ``seed``, reduced mod 2**32 - 1."""
    h = FNV_OFFSET
    for byte in seed.encode("utf-8"):
        h ^= byte
        h = (h * FNV_PRIME) & 0xFFFFFFFF
    return h % 0xFFFFFFFF


def shuffled_deck(seed: int) -> List[Card]:
    """Fisher-Yates shuffle driven by ``random.Random(seed)``.

    The same seed always gives the same deck on any interpreter, but the
    order is specific to this generator: decks recorded by other poker
    tools under the same seed string will not match.
    """
    rng = random.Random(seed)
    deck = [Card(rank, suit) for rank in RANKS for suit in SUITS]
    for i in range(len(deck) - 1, 0, -1):
        j = rng.randint(0, i)
        deck[i], deck[j] = deck[j], deck[i]
    return deck


def deal(deck: List[Card], count: int) -> List[Card]:
    # Top of the deck is the end of the list.
    if len(deck) < count:
        raise DeckExhaustedError("Not enough cards left in deck")
    return [deck.pop() for _ in range(count)]


def cards_to_labels(cards: Iterable[Card]) -> List[str]:
    return [card.label for card in cards]


def parse_label(label: str) -> Card:
    if len(label) != 2:
        raise ValueError(f"Invalid card label: {label}")
    return Card(label[0], label[1])


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]
