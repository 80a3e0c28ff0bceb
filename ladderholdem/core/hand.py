"""
Showdown hand ranking.

The betting engine only needs two things from a hand evaluator: a total
order over 7-card hands and a way to pick the winner(s) among several hands,
ties included. ``HandEvaluator`` is that contract; ``StandardEvaluator`` is
the pure-Python implementation used by default.

Ranks are integers where lower is better:
    (10 - hand_type) * RANK_MULTIPLIER + kicker_value
so a Royal Flush scores in [0, M) and a High Card in [9M, 10M).

Note: Ace can be low in A-2-3-4-5 straight (wheel).
"""

from __future__ import annotations
from typing import List, NamedTuple, Optional, Protocol, Sequence, Tuple
from itertools import combinations
from enum import IntEnum
from collections import Counter

from ladderholdem.core.card import Card, Rank


class HandRank(IntEnum):
    """Hand categories, higher value is a better category."""
    ROYAL_FLUSH = 10
    STRAIGHT_FLUSH = 9
    FOUR_OF_A_KIND = 8
    FULL_HOUSE = 7
    FLUSH = 6
    STRAIGHT = 5
    THREE_OF_A_KIND = 4
    TWO_PAIR = 3
    ONE_PAIR = 2
    HIGH_CARD = 1


HAND_RANK_NAMES = {
    HandRank.ROYAL_FLUSH: "Royal Flush",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FLUSH: "Flush",
    HandRank.STRAIGHT: "Straight",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.HIGH_CARD: "High Card",
}

RANK_NAMES = {
    Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
    Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
    Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
    Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
    Rank.ACE: "Ace",
}

RANK_MULTIPLIER = 1000000

WHEEL = [Rank.ACE, Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO]


class HandValue(NamedTuple):
    """Result of evaluating a hand."""
    rank: int
    hand_type: HandRank
    best_cards: List[Card]

    @property
    def name(self) -> str:
        return HAND_RANK_NAMES[self.hand_type]


class HandEvaluator(Protocol):
    """What the betting engine needs at showdown."""

    def rank(self, cards: Sequence[Card]) -> int:
        """Total order over hands, lower is better."""
        ...

    def winners(self, hands: Sequence[Sequence[Card]]) -> List[int]:
        """Indices of every hand sharing the best rank."""
        ...

    def describe(self, cards: Sequence[Card]) -> str:
        """Human-readable name of the hand."""
        ...


def evaluate_hand(cards: Sequence[Card]) -> HandValue:
    """
    Evaluate a poker hand of 5-7 cards and return its best 5-card value.

    Raises:
        ValueError: If not 5-7 cards provided
    """
    if not 5 <= len(cards) <= 7:
        raise ValueError(f"Need 5-7 cards, got {len(cards)}")

    return min(
        (_evaluate_5_cards(list(combo)) for combo in combinations(cards, 5)),
        key=lambda value: value.rank,
    )


def _evaluate_5_cards(cards: List[Card]) -> HandValue:
    """Evaluate exactly 5 cards."""
    ordered = sorted(cards, key=lambda c: c.rank, reverse=True)
    ranks = [c.rank for c in ordered]
    counts = Counter(ranks)
    shape = sorted(counts.values(), reverse=True)

    is_flush = len({c.suit for c in ordered}) == 1
    straight_high = _straight_high(ranks)

    # Groups ordered by size, then rank: quads/trips/pairs first, kickers last
    grouped = sorted(counts, key=lambda r: (counts[r], r), reverse=True)
    by_count = sorted(ordered, key=lambda c: (counts[c.rank], c.rank), reverse=True)

    if straight_high is not None and is_flush:
        hand_type = HandRank.ROYAL_FLUSH if straight_high == Rank.ACE else HandRank.STRAIGHT_FLUSH
        return HandValue(_score(hand_type, [straight_high]), hand_type, _straight_order(ordered, straight_high))
    if shape == [4, 1]:
        return HandValue(_score(HandRank.FOUR_OF_A_KIND, grouped), HandRank.FOUR_OF_A_KIND, by_count)
    if shape == [3, 2]:
        return HandValue(_score(HandRank.FULL_HOUSE, grouped), HandRank.FULL_HOUSE, by_count)
    if is_flush:
        return HandValue(_score(HandRank.FLUSH, ranks), HandRank.FLUSH, ordered)
    if straight_high is not None:
        return HandValue(_score(HandRank.STRAIGHT, [straight_high]), HandRank.STRAIGHT, _straight_order(ordered, straight_high))
    if shape == [3, 1, 1]:
        return HandValue(_score(HandRank.THREE_OF_A_KIND, grouped), HandRank.THREE_OF_A_KIND, by_count)
    if shape == [2, 2, 1]:
        return HandValue(_score(HandRank.TWO_PAIR, grouped), HandRank.TWO_PAIR, by_count)
    if shape == [2, 1, 1, 1]:
        return HandValue(_score(HandRank.ONE_PAIR, grouped), HandRank.ONE_PAIR, by_count)
    return HandValue(_score(HandRank.HIGH_CARD, ranks), HandRank.HIGH_CARD, ordered)


def _straight_high(ranks: List[Rank]) -> Optional[Rank]:
    """High card of the straight formed by five descending ranks, if any."""
    if len(set(ranks)) != 5:
        return None
    if ranks[0] - ranks[4] == 4:
        return ranks[0]
    if ranks == WHEEL:
        return Rank.FIVE
    return None


def _straight_order(cards: List[Card], high: Rank) -> List[Card]:
    """Wheel straights list the ace last (5-4-3-2-A)."""
    if high != Rank.FIVE:
        return cards
    return cards[1:] + cards[:1]


def _score(hand_type: HandRank, kickers: Sequence[Rank]) -> int:
    """Absolute rank for a category and its ordered kickers, lower is better."""
    kicker_value = 0
    for rank in kickers:
        kicker_value = kicker_value * 13 + (Rank.ACE - rank)
    return (10 - int(hand_type)) * RANK_MULTIPLIER + kicker_value


def compare_hands(cards1: Sequence[Card], cards2: Sequence[Card]) -> int:
    """
    Compare two hands.

    Returns:
        -1 if cards1 wins, 1 if cards2 wins, 0 if tie
    """
    rank1 = evaluate_hand(cards1).rank
    rank2 = evaluate_hand(cards2).rank
    return (rank1 > rank2) - (rank1 < rank2)


def _plural(rank: Rank) -> str:
    return "Sixes" if rank == Rank.SIX else f"{RANK_NAMES[rank]}s"


def get_hand_description(cards: Sequence[Card]) -> str:
    """Get a human-readable description of the hand."""
    if len(cards) < 5:
        return "Incomplete hand"

    value = evaluate_hand(cards)
    best = value.best_cards
    counts = Counter(c.rank for c in best)
    top = max(counts, key=lambda r: (counts[r], r))
    high = max(c.rank for c in best)

    if value.hand_type == HandRank.ROYAL_FLUSH:
        return "Royal Flush"
    if value.hand_type == HandRank.STRAIGHT_FLUSH:
        return f"Straight Flush, {RANK_NAMES[best[0].rank]} high"
    if value.hand_type == HandRank.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(top)}"
    if value.hand_type == HandRank.FULL_HOUSE:
        pair = min(counts, key=counts.get)
        return f"Full House, {_plural(top)} full of {_plural(pair)}"
    if value.hand_type == HandRank.FLUSH:
        return f"Flush, {RANK_NAMES[high]} high"
    if value.hand_type == HandRank.STRAIGHT:
        if best[0].rank == Rank.FIVE:
            return "Straight, Five high (Wheel)"
        return f"Straight, {RANK_NAMES[high]} high"
    if value.hand_type == HandRank.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(top)}"
    if value.hand_type == HandRank.TWO_PAIR:
        pairs = sorted((r for r, c in counts.items() if c == 2), reverse=True)
        return f"Two Pair, {_plural(pairs[0])} and {_plural(pairs[1])}"
    if value.hand_type == HandRank.ONE_PAIR:
        return f"Pair of {_plural(top)}"
    return f"High Card, {RANK_NAMES[high]}"


class StandardEvaluator:
    """Default ``HandEvaluator`` built on ``evaluate_hand``."""

    def rank(self, cards: Sequence[Card]) -> int:
        return evaluate_hand(cards).rank

    def winners(self, hands: Sequence[Sequence[Card]]) -> List[int]:
        ranks: List[Tuple[int, int]] = [(self.rank(cards), i) for i, cards in enumerate(hands)]
        if not ranks:
            return []
        best = min(rank for rank, _ in ranks)
        return [i for rank, i in ranks if rank == best]

    def describe(self, cards: Sequence[Card]) -> str:
        return get_hand_description(cards)
