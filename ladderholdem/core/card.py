"""
Card and Deck classes for heads-up Hold'em.

Cards print as rank + suit symbol ("A♠", "T♦") and parse from either the
symbol or the letter form ("As", "Td"). The deck never touches the global
``random`` module: it is shuffled by the match's seeded LCG so that a seed
fully determines every card dealt.
"""

from __future__ import annotations
from typing import Callable, Iterable, List
from enum import IntEnum

from ladderholdem.core.errors import DeckExhausted


class Suit(IntEnum):
    """Card suits with integer values for fast comparison."""
    CLUBS = 0     # ♣
    DIAMONDS = 1  # ♦
    HEARTS = 2    # ♥
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card ranks from 2 (lowest) to Ace (highest)."""
    TWO = 0
    THREE = 1
    FOUR = 2
    FIVE = 3
    SIX = 4
    SEVEN = 5
    EIGHT = 6
    NINE = 7
    TEN = 8
    JACK = 9
    QUEEN = 10
    KING = 11
    ACE = 12


# (letter, symbol) per suit
_SUIT_FACES = {
    Suit.CLUBS: ("c", "♣"),
    Suit.DIAMONDS: ("d", "♦"),
    Suit.HEARTS: ("h", "♥"),
    Suit.SPADES: ("s", "♠"),
}

SUIT_CHARS = {suit: letter for suit, (letter, _) in _SUIT_FACES.items()}
SUIT_SYMBOLS = {suit: symbol for suit, (_, symbol) in _SUIT_FACES.items()}
RANK_CHARS = dict(zip(Rank, "23456789TJQKA"))

CHAR_TO_RANK = {char: rank for rank, char in RANK_CHARS.items()}
CHAR_TO_SUIT = {char: suit for suit, char in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {symbol: suit for suit, symbol in SUIT_SYMBOLS.items()}

# Deck build order: suit-major, spades first, ranks ascending within a suit.
DECK_SUIT_ORDER = (Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS)


class Card:
    """
    A playing card represented as (rank, suit).

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("As") or Card.from_string("A♠")
    """

    __slots__ = ("rank", "suit", "_int")

    def __init__(self, rank: Rank, suit: Suit):
        self.rank = Rank(rank)
        self.suit = Suit(suit)
        self._int = int(self.rank) * 4 + int(self.suit)

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts "As", "Kh", "Td", "10d" and the symbol forms "A♠", "K♥".
        """
        s = s.strip()
        if s.startswith("10"):
            s = "T" + s[2:]
        if len(s) != 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_char, suit_part = s[0].upper(), s[1]
        if rank_char not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_char}")

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(CHAR_TO_RANK[rank_char], suit)

    def to_int(self) -> int:
        """Return the integer representation (0-51)."""
        return self._int

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self._int == other._int
        return False

    def __hash__(self) -> int:
        return self._int

    def __lt__(self, other: Card) -> bool:
        """Compare by rank only (for sorting)."""
        return self.rank < other.rank

    def __repr__(self) -> str:
        return f"Card({RANK_CHARS[self.rank]}{SUIT_CHARS[self.suit]})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    @property
    def rank_char(self) -> str:
        return RANK_CHARS[self.rank]

    @property
    def short_str(self) -> str:
        """Short string like 'As', 'Kh'."""
        return f"{RANK_CHARS[self.rank]}{SUIT_CHARS[self.suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self.suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": RANK_CHARS[self.rank],
            "suit": SUIT_SYMBOLS[self.suit],
            "text": str(self),
            "color": self.color,
        }


def ordered_cards() -> List[Card]:
    """All 52 cards in deck build order."""
    return [Card(rank, suit) for suit in DECK_SUIT_ORDER for rank in Rank]


def fisher_yates(cards: Iterable[Card], rng: Callable[[], float]) -> List[Card]:
    """Return a shuffled copy of ``cards``, walking from the last index down."""
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


class Deck:
    """
    A standard 52-card deck driven by an injected RNG.

    Usage:
        deck = Deck(LCG(seed))
        hole_cards = deck.deal(2)
        flop = deck.deal(3)
    """

    def __init__(self, rng: Callable[[], float], shuffle: bool = True):
        self._rng = rng
        self.reset()
        if shuffle:
            self.shuffle()

    def reset(self) -> None:
        """Reset the deck to a full 52 cards in build order."""
        self._cards: List[Card] = ordered_cards()
        self._dealt: List[Card] = []

    def shuffle(self) -> None:
        """Shuffle the remaining cards in the deck."""
        self._cards = fisher_yates(self._cards, self._rng)

    def reshuffle(self, exclude: Iterable[Card] = ()) -> None:
        """Rebuild the deck from every card not in ``exclude`` and shuffle it."""
        in_play = set(exclude)
        self._cards = [card for card in ordered_cards() if card not in in_play]
        self._dealt = list(in_play)
        self.shuffle()

    def deal(self, n: int = 1) -> List[Card]:
        """
        Deal n cards from the front of the deck.

        Raises:
            DeckExhausted: If not enough cards remain.
        """
        if n > len(self._cards):
            raise DeckExhausted(f"Cannot deal {n} cards, only {len(self._cards)} remain")

        dealt = self._cards[:n]
        self._cards = self._cards[n:]
        self._dealt.extend(dealt)
        return dealt

    def deal_one(self) -> Card:
        """Deal a single card."""
        return self.deal(1)[0]

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    @property
    def dealt_cards(self) -> List[Card]:
        """List of cards that have been dealt."""
        return self._dealt.copy()

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a string.

    Accepts "As Kh Td" (space-separated) or "AsKhTd" (2 chars each).
    """
    cards_str = cards_str.strip()

    if " " in cards_str:
        return [Card.from_string(s) for s in cards_str.split()]

    if len(cards_str) % 2:
        raise ValueError(f"Cannot parse cards: {cards_str}")
    return [Card.from_string(cards_str[i:i + 2]) for i in range(0, len(cards_str), 2)]
