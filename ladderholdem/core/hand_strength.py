"""
Static starting-hand strength table.

Two hole cards reduce to a canonical notation: the higher rank first, then
the lower, then "s" (suited) or "o" (offsuit). Pairs carry no suffix. The
notation indexes a table of (win probability, odds multiplier) used both by
the CPU decision model and by the UI's hand preview.
"""

from __future__ import annotations
from typing import Dict, Sequence, Tuple

from ladderholdem.core.card import Card


DEFAULT_WIN_PROBABILITY = 0.5
DEFAULT_MULTIPLIER = 1.0

# notation -> (win probability 0..1, odds multiplier)
HAND_ODDS: Dict[str, Tuple[float, float]] = {
    "AA": (0.85, 1.176), "KK": (0.82, 1.219), "QQ": (0.80, 1.25),
    "JJ": (0.77, 1.299), "TT": (0.75, 1.333), "99": (0.72, 1.389),
    "88": (0.69, 1.449), "77": (0.66, 1.515), "66": (0.63, 1.587),
    "55": (0.60, 1.667), "44": (0.57, 1.754), "33": (0.55, 1.818),
    "22": (0.53, 1.887),

    "AKs": (0.67, 1.493), "AQs": (0.65, 1.538), "AJs": (0.64, 1.563),
    "ATs": (0.62, 1.613), "KQs": (0.60, 1.667), "KJs": (0.58, 1.724),
    "QJs": (0.57, 1.754), "JTs": (0.54, 1.852), "T9s": (0.53, 1.887),
    "98s": (0.52, 1.923), "87s": (0.51, 1.961), "76s": (0.50, 2.0),

    "AKo": (0.65, 1.538), "AQo": (0.63, 1.587), "AJo": (0.61, 1.639),
    "ATo": (0.59, 1.695), "KQo": (0.57, 1.754), "KJo": (0.55, 1.818),
    "QJo": (0.54, 1.852), "JTo": (0.50, 2.0), "T9o": (0.48, 2.083),
    "98o": (0.47, 2.128), "87o": (0.46, 2.174), "76o": (0.45, 2.222),

    "A9s": (0.60, 1.667), "A8s": (0.59, 1.695), "A7s": (0.58, 1.724),
    "A6s": (0.57, 1.754), "A5s": (0.57, 1.754), "A4s": (0.56, 1.786),
    "A3s": (0.56, 1.786), "A2s": (0.55, 1.818),

    "A9o": (0.57, 1.754), "A8o": (0.56, 1.786), "A7o": (0.55, 1.818),
    "A6o": (0.54, 1.852), "A5o": (0.54, 1.852), "A4o": (0.53, 1.887),
    "A3o": (0.53, 1.887), "A2o": (0.52, 1.923),

    "KTs": (0.56, 1.786), "K9s": (0.54, 1.852), "K8s": (0.52, 1.923),
    "K7s": (0.51, 1.961), "K6s": (0.50, 2.0), "K5s": (0.49, 2.041),
    "K4s": (0.48, 2.083), "K3s": (0.48, 2.083), "K2s": (0.47, 2.128),

    "KTo": (0.53, 1.887), "K9o": (0.51, 1.961), "K8o": (0.49, 2.041),
    "K7o": (0.48, 2.083), "K6o": (0.47, 2.128), "K5o": (0.46, 2.174),
    "K4o": (0.45, 2.222), "K3o": (0.45, 2.222), "K2o": (0.44, 2.273),

    "QTs": (0.55, 1.818), "Q9s": (0.53, 1.887), "Q8s": (0.51, 1.961),
    "Q7s": (0.49, 2.041), "Q6s": (0.48, 2.083), "Q5s": (0.47, 2.128),
    "Q4s": (0.46, 2.174), "Q3s": (0.46, 2.174), "Q2s": (0.45, 2.222),

    "QTo": (0.52, 1.923), "Q9o": (0.50, 2.0), "Q8o": (0.48, 2.083),
    "Q7o": (0.46, 2.174), "Q6o": (0.45, 2.222), "Q5o": (0.44, 2.273),
    "Q4o": (0.43, 2.326), "Q3o": (0.43, 2.326), "Q2o": (0.42, 2.381),

    "J9s": (0.52, 1.923), "J8s": (0.50, 2.0), "J7s": (0.48, 2.083),
    "J6s": (0.47, 2.128), "J5s": (0.46, 2.174), "J4s": (0.45, 2.222),
    "J3s": (0.44, 2.273), "J2s": (0.44, 2.273),

    "J9o": (0.49, 2.041), "J8o": (0.47, 2.128), "J7o": (0.45, 2.222),
    "J6o": (0.44, 2.273), "J5o": (0.43, 2.326), "J4o": (0.42, 2.381),
    "J3o": (0.42, 2.381), "J2o": (0.41, 2.439),

    "T8s": (0.49, 2.041), "T7s": (0.47, 2.128), "T6s": (0.46, 2.174),
    "T5s": (0.45, 2.222), "T4s": (0.44, 2.273), "T3s": (0.43, 2.326),
    "T2s": (0.42, 2.381),

    "T8o": (0.46, 2.174), "T7o": (0.44, 2.273), "T6o": (0.43, 2.326),
    "T5o": (0.42, 2.381), "T4o": (0.41, 2.439), "T3o": (0.40, 2.5),
    "T2o": (0.39, 2.564),

    "97s": (0.48, 2.083), "96s": (0.46, 2.174), "95s": (0.45, 2.222),
    "94s": (0.44, 2.273), "93s": (0.43, 2.326), "92s": (0.42, 2.381),

    "97o": (0.45, 2.222), "96o": (0.43, 2.326), "95o": (0.42, 2.381),
    "94o": (0.41, 2.439), "93o": (0.40, 2.5), "92o": (0.39, 2.564),

    "86s": (0.47, 2.128), "85s": (0.45, 2.222), "84s": (0.44, 2.273),
    "83s": (0.43, 2.326), "82s": (0.42, 2.381),

    "86o": (0.44, 2.273), "85o": (0.42, 2.381), "84o": (0.41, 2.439),
    "83o": (0.40, 2.5), "82o": (0.39, 2.564),

    "75s": (0.46, 2.174), "74s": (0.44, 2.273), "73s": (0.43, 2.326),
    "72s": (0.39, 2.564),

    "75o": (0.43, 2.326), "74o": (0.41, 2.439), "73o": (0.40, 2.5),
    "72o": (0.39, 2.564),

    "64s": (0.45, 2.222), "63s": (0.43, 2.326), "62s": (0.38, 2.632),
    "64o": (0.42, 2.381), "63o": (0.40, 2.5), "62o": (0.38, 2.632),

    "53s": (0.44, 2.273), "52s": (0.37, 2.703),
    "53o": (0.41, 2.439), "52o": (0.37, 2.703),

    "43s": (0.43, 2.326), "42s": (0.36, 2.778),
    "43o": (0.40, 2.5), "42o": (0.36, 2.778),

    "32s": (0.40, 2.5), "32o": (0.35, 2.857),
}


def hand_notation(cards: Sequence[Card]) -> str:
    """
    Canonical two-card notation, e.g. "AKs", "T9o", "77".

    Returns an empty string unless exactly two cards are given.
    """
    if len(cards) != 2:
        return ""
    high, low = sorted(cards, key=lambda c: c.rank, reverse=True)
    ranks = high.rank_char + low.rank_char
    if high.rank == low.rank:
        return ranks
    return ranks + ("s" if high.suit == low.suit else "o")


def win_probability(notation: str) -> float:
    """Table win probability for a notation, 0.5 when unlisted."""
    odds = HAND_ODDS.get(notation)
    return odds[0] if odds else DEFAULT_WIN_PROBABILITY


def odds_multiplier(notation: str) -> float:
    """Table payout multiplier for a notation, 1.0 when unlisted."""
    odds = HAND_ODDS.get(notation)
    return odds[1] if odds else DEFAULT_MULTIPLIER


def strength_score(cards: Sequence[Card]) -> int:
    """Starting-hand strength on a 0-100 scale (win probability x 100)."""
    return int(round(win_probability(hand_notation(cards)) * 100))


def preview(cards: Sequence[Card]) -> dict:
    """Everything the UI shows about a starting hand."""
    notation = hand_notation(cards)
    return {
        "notation": notation,
        "win_probability": win_probability(notation),
        "multiplier": odds_multiplier(notation),
        "strength": strength_score(cards),
        "listed": notation in HAND_ODDS,
    }
