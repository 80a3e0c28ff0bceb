"""
Tests for the starting-hand strength table.
"""

from ladderholdem.core.card import parse_cards
from ladderholdem.core.hand_strength import (
    DEFAULT_MULTIPLIER, DEFAULT_WIN_PROBABILITY, HAND_ODDS,
    hand_notation, odds_multiplier, preview, strength_score, win_probability,
)


class TestHandNotation:
    """Canonical two-card notation."""

    def test_pairs_have_no_suffix(self):
        assert hand_notation(parse_cards("Ah Ad")) == "AA"
        assert hand_notation(parse_cards("7c 7s")) == "77"

    def test_suited_and_offsuit(self):
        assert hand_notation(parse_cards("Ks As")) == "AKs"
        assert hand_notation(parse_cards("Th 9c")) == "T9o"

    def test_order_invariant(self):
        assert hand_notation(parse_cards("2c Kd")) == hand_notation(parse_cards("Kd 2c")) == "K2o"

    def test_needs_two_cards(self):
        assert hand_notation(parse_cards("As")) == ""
        assert hand_notation(parse_cards("As Ks Qs")) == ""


class TestLookup:
    """Table lookups and defaults."""

    def test_known_hands(self):
        assert win_probability("AA") == 0.85
        assert odds_multiplier("AA") == 1.176
        assert win_probability("32o") == 0.35

    def test_unlisted_hand_defaults(self):
        assert "65s" not in HAND_ODDS
        assert win_probability("65s") == DEFAULT_WIN_PROBABILITY
        assert odds_multiplier("65s") == DEFAULT_MULTIPLIER

    def test_strength_score(self):
        assert strength_score(parse_cards("As Ad")) == 85
        assert strength_score(parse_cards("3c 2d")) == 35
        assert strength_score(parse_cards("6h 5h")) == 50

    def test_preview(self):
        assert preview(parse_cards("Ks As")) == {
            "notation": "AKs",
            "win_probability": 0.67,
            "multiplier": 1.493,
            "strength": 67,
            "listed": True,
        }
