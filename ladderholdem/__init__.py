"""
Ladder Hold'em - Heads-up No-Limit Hold'em Against CPU Opponents

A heads-up poker engine with:
- Pure Python betting engine driven by a seeded RNG
- Personality-driven CPU opponents on a five-tier ladder
- Blind ladder matches and a token economy for unlocking opponents
- FastAPI + WebSocket host layer

Usage:
    from ladderholdem.core import BettingEngine, LCG
    from ladderholdem.ladder import LadderMatch, ProgressionManager
"""

__version__ = "0.2.0"

from ladderholdem.core.card import Card, Deck
from ladderholdem.core.engine import BettingEngine
from ladderholdem.core.hand import HandRank, evaluate_hand
from ladderholdem.ladder.match import LadderMatch
from ladderholdem.ladder.progression import ProgressionManager

__all__ = [
    "Card",
    "Deck",
    "BettingEngine",
    "HandRank",
    "evaluate_hand",
    "LadderMatch",
    "ProgressionManager",
    "__version__",
]
