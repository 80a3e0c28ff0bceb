"""
Pytest configuration and shared fixtures for Ladder Hold'em tests.
"""

import pytest
from ladderholdem.agents.profiles import CPUProfile
from ladderholdem.core.card import Card, Rank, Suit, parse_cards
from ladderholdem.core.engine import BettingEngine
from ladderholdem.core.rng import LCG
from ladderholdem.core.rules import Actor


class ScriptedRNG:
    """Returns a fixed list of draws; fails loudly when asked for more."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = 0

    def __call__(self):
        if not self.values:
            raise AssertionError("RNG drawn more often than scripted")
        self.calls += 1
        return self.values.pop(0)


def rig_hand(engine, player, cpu, board):
    """Replace the dealt hole cards and stack the deck with a known board."""
    engine.state.player_cards = parse_cards(player)
    engine.state.cpu_cards = parse_cards(cpu)
    engine.deck._cards = parse_cards(board)


def make_profile(**overrides):
    """A neutral test profile: no aggression offset, never bluffs."""
    values = dict(
        id="tester", name="Tester", tier=1,
        aggression=50, bluff_frequency=0, call_frequency=60,
        raise_frequency=90, hand_strength_threshold=100,
    )
    values.update(overrides)
    return CPUProfile(**values)


@pytest.fixture
def scripted_rng():
    """Factory for RNGs with a fixed list of draws."""
    return ScriptedRNG


@pytest.fixture
def rig():
    """Stack hole cards and board of a dealt hand."""
    return rig_hand


@pytest.fixture
def profile_factory():
    """Factory for test CPU profiles."""
    return make_profile


@pytest.fixture
def rng():
    """A seeded match RNG."""
    return LCG(12345)


@pytest.fixture
def engine(rng):
    """An engine with no hand dealt yet."""
    return BettingEngine(rng)


@pytest.fixture
def hand(engine):
    """A fresh 50/100 hand, 1000 each, CPU on the button."""
    engine.start_hand(
        small_blind=50,
        big_blind=100,
        player_stack=1000,
        cpu_stack=1000,
        button=Actor.CPU,
    )
    return engine


@pytest.fixture
def sample_hand():
    """Create a sample 5-card hand (pair of aces)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
        Card(Rank.KING, Suit.DIAMONDS),
        Card(Rank.QUEEN, Suit.CLUBS),
        Card(Rank.JACK, Suit.SPADES),
    ]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
