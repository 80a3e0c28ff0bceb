"""
Heads-up Hold'em rules and constants.

Key rules:

1. Heads-up: the button posts the small blind and acts first preflop;
   the big blind acts first on the flop, turn and river.

2. Minimum raise: one big blind above the current bet. A raise that would
   cost the whole stack becomes an all-in.

3. No side pots: with two players, the uncalled part of an all-in bet goes
   back to its owner and the rest of the pot is contested at showdown.

4. Blind ladder: the level rises every two hands. Entering a new level
   resets both stacks to the level's starting stack.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Tuple


class GamePhase(Enum):
    """Streets of a hand."""
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"


class ActionType(Enum):
    """Possible actions."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"
    ALL_IN = "ALL_IN"


class Actor(Enum):
    """The two seats at a heads-up table."""
    PLAYER = "player"
    CPU = "cpu"

    @property
    def opponent(self) -> "Actor":
        return Actor.CPU if self is Actor.PLAYER else Actor.PLAYER


class Winner(Enum):
    """Outcome of a single hand."""
    PLAYER = "player"
    CPU = "cpu"
    TIE = "tie"

    @classmethod
    def of(cls, actor: Actor) -> "Winner":
        return cls(actor.value)


@dataclass(frozen=True)
class BlindLevel:
    """One rung of the blind ladder."""
    small_blind: int
    big_blind: int
    stack_chips: int

    def __post_init__(self):
        if self.small_blind <= 0 or self.big_blind < self.small_blind:
            raise ValueError(f"Invalid blinds {self.small_blind}/{self.big_blind}")
        if self.stack_chips <= 0:
            raise ValueError(f"Invalid starting stack {self.stack_chips}")


# Starting stacks of 1000 everywhere, so effective depth shrinks from 10BB
# at level 0 to 1BB at the last level.
BLIND_LADDER: Tuple[BlindLevel, ...] = (
    BlindLevel(50, 100, 1000),
    BlindLevel(75, 150, 1000),
    BlindLevel(100, 200, 1000),
    BlindLevel(150, 300, 1000),
    BlindLevel(200, 400, 1000),
    BlindLevel(250, 500, 1000),
    BlindLevel(300, 600, 1000),
    BlindLevel(400, 800, 1000),
    BlindLevel(500, 1000, 1000),
)

HANDS_PER_LEVEL = 2
FINAL_BLIND_LEVEL = len(BLIND_LADDER) - 1

# Cards per phase
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

NEXT_PHASE = {
    GamePhase.PREFLOP: (GamePhase.FLOP, FLOP_CARDS),
    GamePhase.FLOP: (GamePhase.TURN, TURN_CARDS),
    GamePhase.TURN: (GamePhase.RIVER, RIVER_CARDS),
}


def blind_level_for_hand(hands_played: int) -> int:
    """Ladder index for the next hand: up one level every two hands, capped."""
    if hands_played < 0:
        raise ValueError("hands_played cannot be negative")
    return min(hands_played // HANDS_PER_LEVEL, FINAL_BLIND_LEVEL)


def button_for_hand(hand_number: int) -> Actor:
    """The CPU holds the button on even hands, the player on odd ones."""
    return Actor.CPU if hand_number % 2 == 0 else Actor.PLAYER


def calculate_min_raise(current_bet: int, big_blind: int) -> int:
    """Smallest legal raise-to total: one big blind above the current bet."""
    return current_bet + big_blind


def first_to_act(phase: GamePhase, button: Actor) -> Actor:
    """
    Who opens the betting on a street.

    Heads-up: the button (small blind) acts first preflop, the big blind
    acts first on every later street.
    """
    if phase == GamePhase.PREFLOP:
        return button
    return button.opponent
