from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from .cards import Card

RANK_ORDER = "23456789TJQKA"
RANK_VALUE = {rank: idx for idx, rank in enumerate(RANK_ORDER, start=2)}

# Category occupies the top digits, the grouped ranks the next ones and the
# kickers are packed base 16 underneath.
CATEGORY_WEIGHT = 10**10
PRIMARY_WEIGHT = 10**6
SECONDARY_WEIGHT = 10**4

HIGH_CARD = 0
PAIR = 1
TWO_PAIR = 2
THREE_OF_A_KIND = 3
FULL_HOUSE = 4
FOUR_OF_A_KIND = 5

CATEGORY_LABELS = {
    HIGH_CARD: "High Card",
    PAIR: "Pair",
    TWO_PAIR: "Two Pair",
    THREE_OF_A_KIND: "Three of a Kind",
    FULL_HOUSE: "Full House",
    FOUR_OF_A_KIND: "Four of a Kind",
}

NO_HAND_SCORE = -1
NO_HAND_LABEL = "-"


def _encode(ranks: Sequence[int]) -> int:
    value = 0
    for rank in ranks:
        value = value * 16 + rank
    return value


def _group(cards: Sequence[Card]) -> Tuple[List[int], List[int], List[int], List[int]]:
    counts: Dict[int, int] = {}
    for card in cards:
        value = RANK_VALUE[card.rank]
        counts[value] = counts.get(value, 0) + 1

    quads, trips, pairs, singles = [], [], [], []
    for value, count in counts.items():
        if count >= 4:
            quads.append(value)
        elif count == 3:
            trips.append(value)
        elif count == 2:
            pairs.append(value)
        else:
            singles.append(value)
    for bucket in (quads, trips, pairs, singles):
        bucket.sort(reverse=True)
    return quads, trips, pairs, singles


def _classify(cards: Sequence[Card]) -> Tuple[int, int]:
    """Return (category, score) for up to 7 cards."""
    quads, trips, pairs, singles = _group(cards)

    if quads:
        top = quads[0]
        kickers = sorted((r for r in singles + pairs + trips if r != top), reverse=True)
        return FOUR_OF_A_KIND, FOUR_OF_A_KIND * CATEGORY_WEIGHT + top * PRIMARY_WEIGHT + _encode(kickers[:1])
    if trips and pairs:
        return FULL_HOUSE, FULL_HOUSE * CATEGORY_WEIGHT + trips[0] * PRIMARY_WEIGHT + pairs[0] * SECONDARY_WEIGHT
    if trips:
        top = trips[0]
        kickers = sorted((r for r in singles + pairs if r != top), reverse=True)
        return THREE_OF_A_KIND, THREE_OF_A_KIND * CATEGORY_WEIGHT + top * PRIMARY_WEIGHT + _encode(kickers[:2])
    if len(pairs) >= 2:
        high, low = pairs[0], pairs[1]
        kickers = sorted((r for r in singles + trips if r not in (high, low)), reverse=True)
        return (
            TWO_PAIR,
            TWO_PAIR * CATEGORY_WEIGHT + high * PRIMARY_WEIGHT + low * SECONDARY_WEIGHT + _encode(kickers[:1]),
        )
    if pairs:
        top = pairs[0]
        kickers = sorted((r for r in singles + trips if r != top), reverse=True)
        return PAIR, PAIR * CATEGORY_WEIGHT + top * PRIMARY_WEIGHT + _encode(kickers[:3])
    top_five = sorted(singles + pairs + trips, reverse=True)[:5]
    return HIGH_CARD, _encode(top_five)


def rank7(hole: Optional[Sequence[Card]], board: Sequence[Card]) -> int:
    """Score hole + board (first 7 cards only). Higher is better.

    Straights and flushes are not recognised; the best category is four of a
    kind.
    """
    if not hole:
        return NO_HAND_SCORE
    cards = (list(hole) + list(board))[:7]
    return _classify(cards)[1]


def category_of(score: int) -> Optional[int]:
    if score < 0:
        return None
    return score // CATEGORY_WEIGHT


def label7(hole: Optional[Sequence[Card]], board: Sequence[Card]) -> str:
    if not hole:
        return NO_HAND_LABEL
    cards = (list(hole) + list(board))[:7]
    category, _ = _classify(cards)
    return CATEGORY_LABELS[category]
