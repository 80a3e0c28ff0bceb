"""
Tests for hand evaluation.
"""

import pytest
from ladderholdem.core.card import parse_cards
from ladderholdem.core.hand import (
    HandRank, StandardEvaluator, compare_hands, evaluate_hand, get_hand_description,
)


class TestHandRanking:
    """Each category is recognised from five cards."""

    @pytest.mark.parametrize("cards, expected", [
        ("As Ks Qs Js Ts", HandRank.ROYAL_FLUSH),
        ("9h 8h 7h 6h 5h", HandRank.STRAIGHT_FLUSH),
        ("As Ah Ad Ac Ks", HandRank.FOUR_OF_A_KIND),
        ("As Ah Ad Kc Ks", HandRank.FULL_HOUSE),
        ("As Ks Js 9s 2s", HandRank.FLUSH),
        ("As Kh Qd Jc Ts", HandRank.STRAIGHT),
        ("As Ah Ad Kc Qs", HandRank.THREE_OF_A_KIND),
        ("As Ah Kd Kc Qs", HandRank.TWO_PAIR),
        ("As Ah Kd Qc Js", HandRank.ONE_PAIR),
        ("As Kh Jd 9c 2s", HandRank.HIGH_CARD),
    ])
    def test_categories(self, cards, expected):
        assert evaluate_hand(parse_cards(cards)).hand_type == expected

    def test_royal_flush_is_best_rank(self, royal_flush):
        """Royal flush has the lowest rank value."""
        assert evaluate_hand(royal_flush).rank == 0

    def test_wheel_straight(self, wheel_straight):
        """A-2-3-4-5 is a five-high straight."""
        value = evaluate_hand(wheel_straight)
        assert value.hand_type == HandRank.STRAIGHT
        assert "Five high" in get_hand_description(wheel_straight)
        assert compare_hands(parse_cards("6s 5h 4d 3c 2s"), wheel_straight) == -1

    def test_wrong_card_count(self):
        with pytest.raises(ValueError):
            evaluate_hand(parse_cards("As Ks Qs Js"))


class TestHandComparison:
    """Tests for comparing hands."""

    def test_flush_beats_straight(self):
        assert compare_hands(parse_cards("Ks Js 9s 7s 2s"), parse_cards("As Kh Qd Jc Th")) == -1

    def test_kicker_decides(self):
        """Same pair, different kicker."""
        assert compare_hands(parse_cards("As Ah Kd 5c 2s"), parse_cards("Ad Ac Qh 5s 2h")) == -1

    def test_full_house_trips_first(self):
        """Threes full of aces lose to fours full of twos."""
        assert compare_hands(parse_cards("3s 3h 3d Ac As"), parse_cards("4s 4h 4d 2c 2s")) == 1

    def test_tie(self):
        assert compare_hands(parse_cards("As Kh Qd Jc 9s"), parse_cards("Ah Kd Qc Js 9h")) == 0


class TestSevenCardEvaluation:
    """The best five of seven cards count."""

    def test_best_five_from_seven(self):
        value = evaluate_hand(parse_cards("As Ah Ad Kc Ks 2h 3d"))
        assert value.hand_type == HandRank.FULL_HOUSE
        assert len(value.best_cards) == 5

    def test_flush_from_six_suited(self):
        assert evaluate_hand(parse_cards("As Ks Qs Js 9s 2s 3h")).hand_type == HandRank.FLUSH


class TestStandardEvaluator:
    """The evaluator the engine uses at showdown."""

    def test_single_winner(self):
        board = "2h 7d 9c Js 4h"
        hands = [parse_cards("As Ad " + board), parse_cards("Kc Kd " + board)]
        assert StandardEvaluator().winners(hands) == [0]

    def test_board_plays_for_both(self):
        """Both players play the board: every hand wins."""
        board = "As Ks Qs Js Ts"
        hands = [parse_cards("2c 3d " + board), parse_cards("2d 3c " + board)]
        assert StandardEvaluator().winners(hands) == [0, 1]

    def test_rank_orders_hands(self):
        evaluator = StandardEvaluator()
        assert evaluator.rank(parse_cards("As Ah Kd Kc Qs")) < evaluator.rank(parse_cards("As Ah Kd Qc Js"))

    def test_no_hands(self):
        assert StandardEvaluator().winners([]) == []


class TestHandDescription:
    """Tests for hand description."""

    def test_royal_flush_description(self, royal_flush):
        assert get_hand_description(royal_flush) == "Royal Flush"

    def test_pair_description(self, sample_hand):
        assert get_hand_description(sample_hand) == "Pair of Aces"

    def test_full_house_description(self):
        assert get_hand_description(parse_cards("6s 6h 6d Kc Ks")) == "Full House, Sixes full of Kings"

    def test_two_pair_description(self):
        assert get_hand_description(parse_cards("As Ah Kd Kc Qs")) == "Two Pair, Aces and Kings"
