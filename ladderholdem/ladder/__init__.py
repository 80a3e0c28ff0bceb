"""
Ladder Hold'em Ladder - Matches, Unlocks and Tokens

Blind-ladder matches against the CPU roster and the progression that
decides who the player faces next.
"""

from ladderholdem.ladder.match import LadderMatch, MatchOutcome
from ladderholdem.ladder.progression import (
    LadderProgressState,
    ProgressionManager,
    base_reward,
    entry_fee,
    streak_bonus,
)

__all__ = [
    "LadderMatch",
    "MatchOutcome",
    "LadderProgressState",
    "ProgressionManager",
    "base_reward",
    "entry_fee",
    "streak_bonus",
]
