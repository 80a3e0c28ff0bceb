"""
Tests for the opponent roster and simple agents.
"""

import pytest
from ladderholdem.agents.base import CallAgent
from ladderholdem.agents.profiles import (
    CPUProfile, DEFAULT_OPPONENT_ID, MAX_TIER, ROSTER,
    get_profile, profile_for_tier, unlocked_profiles,
)


class TestRoster:
    """The five ladder opponents."""

    def test_one_opponent_per_tier(self):
        assert [p.tier for p in ROSTER] == [1, 2, 3, 4, 5]
        assert MAX_TIER == 5

    def test_lookup(self):
        assert get_profile("theNorm").name == "The Norm"
        assert get_profile("mrMark").tier == 5
        assert profile_for_tier(3).id == "redTheRiot"
        assert DEFAULT_OPPONENT_ID == "theNorm"

    def test_unknown_opponent(self):
        with pytest.raises(ValueError):
            get_profile("nobody")
        with pytest.raises(ValueError):
            profile_for_tier(6)

    def test_unlocked_profiles(self):
        assert [p.id for p in unlocked_profiles(2)] == ["theNorm", "anyAceNick"]
        assert len(unlocked_profiles(5)) == 5

    def test_cautious_opponents(self):
        """Call frequency under 50 marks a cautious opponent."""
        cautious = {p.id for p in ROSTER if p.is_cautious}
        assert cautious == {"redTheRiot", "crazyHorse", "mrMark"}

    def test_to_dict(self):
        data = get_profile("crazyHorse").to_dict()
        assert data["aggression"] == 85
        assert data["portrait"] == "🤪"


class TestProfileValidation:
    """Tendencies stay within 0-100."""

    def test_out_of_range(self, profile_factory):
        with pytest.raises(ValueError):
            profile_factory(aggression=101)
        with pytest.raises(ValueError):
            profile_factory(bluff_frequency=-1)

    def test_bad_tier(self, profile_factory):
        with pytest.raises(ValueError):
            profile_factory(tier=0)

    def test_frozen(self, profile_factory):
        profile = profile_factory()
        with pytest.raises(AttributeError):
            profile.aggression = 90
        assert isinstance(profile, CPUProfile)


class TestSimpleAgents:
    """Baseline agents."""

    def test_call_agent_checks(self):
        legal = [{"type": "FOLD"}, {"type": "CHECK"}]
        assert CallAgent().act({}, legal) == {"action": "CHECK", "amount": 0}

    def test_call_agent_calls(self):
        legal = [{"type": "FOLD"}, {"type": "CALL", "amount": 50}]
        assert CallAgent().act({}, legal) == {"action": "CALL", "amount": 50}

    def test_call_agent_folds_otherwise(self):
        assert CallAgent().act({}, [{"type": "FOLD"}]) == {"action": "FOLD", "amount": 0}

    def test_agent_exports(self):
        """Simulations drive seats with CallAgent or CPUAgent; the human seat has no agent."""
        import ladderholdem.agents as agents
        assert [name for name in agents.__all__ if name.endswith("Agent")] == [
            "BaseAgent", "CallAgent", "CPUAgent",
        ]
        assert all(hasattr(agents, name) for name in agents.__all__)
