"""
Ladder Hold'em Core - Pure Python Heads-up Game Logic

This module contains all game logic without any network dependencies.
"""

from ladderholdem.core.rng import LCG
from ladderholdem.core.card import Card, Deck
from ladderholdem.core.hand import HandRank, StandardEvaluator, evaluate_hand
from ladderholdem.core.rules import Actor, ActionType, BlindLevel, BLIND_LADDER, GamePhase, Winner
from ladderholdem.core.state import MatchState
from ladderholdem.core.engine import ActionResult, BettingEngine
from ladderholdem.core.errors import CorruptedProgressState, DeckExhausted, InvalidAction

__all__ = [
    "LCG",
    "Card",
    "Deck",
    "HandRank",
    "StandardEvaluator",
    "evaluate_hand",
    "Actor",
    "ActionType",
    "BlindLevel",
    "BLIND_LADDER",
    "GamePhase",
    "Winner",
    "MatchState",
    "ActionResult",
    "BettingEngine",
    "CorruptedProgressState",
    "DeckExhausted",
    "InvalidAction",
]
