"""
Tests for ladder progression and the token economy.
"""

import json

import pytest
from ladderholdem.agents.base import CallAgent
from ladderholdem.core.errors import CorruptedProgressState, InsufficientTokens
from ladderholdem.core.rules import Actor
from ladderholdem.ladder.match import MatchOutcome
from ladderholdem.ladder.progression import (
    DEFAULT_TOKENS, SEED_RANGE, LadderProgressState, ProgressionManager,
    base_reward, entry_fee, streak_bonus, validate_snapshot,
)


@pytest.fixture
def progression():
    return ProgressionManager(LadderProgressState(seed=12345, tokens=100))


def finished(progression, outcome):
    """Start a match and mark it finished without playing it."""
    match = progression.start_match(seed=1)
    match.outcome = outcome
    return match


class TestTables:
    """Fee, reward and bonus tables."""

    def test_entry_fees(self):
        assert [entry_fee(t) for t in range(1, 6)] == [1, 2, 3, 5, 8]

    def test_base_rewards(self):
        assert [base_reward(t) for t in range(1, 6)] == [3, 5, 8, 12, 20]

    @pytest.mark.parametrize("wins, bonus", [(1, 0), (2, 0), (3, 2), (4, 2), (5, 5), (9, 5)])
    def test_streak_bonus(self, wins, bonus):
        assert streak_bonus(wins) == bonus


class TestDefaults:
    """A fresh ladder."""

    def test_fresh_state(self):
        progression = ProgressionManager()
        assert progression.tokens == DEFAULT_TOKENS
        assert progression.state.unlocked_tiers == 1
        assert progression.current_opponent.id == "theNorm"
        assert 0 <= progression.state.seed < SEED_RANGE


class TestStartMatch:
    """Entry fees and seeds."""

    def test_fee_charged(self, progression):
        match = progression.start_match()
        assert match.profile.id == "theNorm"
        assert progression.tokens == 99
        assert progression.state.stats.total_tokens_lost == 1
        assert progression.state.stats.matches_played == 1

    def test_stored_seed_advances(self, progression):
        match = progression.start_match()
        assert match.seed == 12345
        assert progression.state.seed == 87628868
        assert progression.start_match().seed == 87628868

    def test_explicit_seed_kept(self, progression):
        match = progression.start_match(seed=42)
        assert match.seed == 42
        assert progression.state.seed == 12345

    def test_insufficient_tokens(self):
        progression = ProgressionManager(LadderProgressState(tokens=0))
        with pytest.raises(InsufficientTokens):
            progression.start_match()
        assert progression.state.stats.matches_played == 0

    def test_fee_follows_tier(self, progression):
        progression.state.unlocked_tiers = 5
        progression.select_opponent("mrMark")
        progression.start_match()
        assert progression.tokens == 92


class TestSettlement:
    """Booking match results."""

    def test_win_pays_reward(self, progression):
        reward = progression.settle_match(finished(progression, MatchOutcome.PLAYER_WON))
        assert reward == 3
        assert progression.tokens == 99 + 3
        assert progression.wins_against("theNorm") == 1
        assert progression.state.stats.matches_won == 1
        assert progression.state.stats.total_tokens_won == 3

    def test_streak_bonus_on_third_win(self, progression):
        rewards = [
            progression.settle_match(finished(progression, MatchOutcome.PLAYER_WON))
            for _ in range(3)
        ]
        assert rewards == [3, 3, 5]

    def test_loss_resets_streak(self, progression):
        progression.settle_match(finished(progression, MatchOutcome.PLAYER_WON))
        progression.settle_match(finished(progression, MatchOutcome.PLAYER_WON))
        assert progression.settle_match(finished(progression, MatchOutcome.CPU_WON)) == 0
        assert progression.wins_against("theNorm") == 0
        assert progression.state.stats.longest_streak == 2

    def test_deadlock_only_counts(self, progression):
        progression.settle_match(finished(progression, MatchOutcome.PLAYER_WON))
        tokens = progression.tokens - entry_fee(1)

        assert progression.settle_match(finished(progression, MatchOutcome.DEADLOCK)) == 0

        assert progression.tokens == tokens
        assert progression.wins_against("theNorm") == 1
        assert progression.state.stats.deadlocks == 1

    def test_running_match_rejected(self, progression):
        match = progression.start_match()
        with pytest.raises(ValueError):
            progression.settle_match(match)

    def test_settle_once(self, progression):
        match = finished(progression, MatchOutcome.PLAYER_WON)
        progression.settle_match(match)
        with pytest.raises(ValueError):
            progression.settle_match(match)

    def test_played_match(self, progression):
        match = progression.start_match()
        match.play_out(CallAgent(Actor.PLAYER))
        reward = progression.settle_match(match)
        assert progression.tokens == 99 + reward


class TestUnlocking:
    """Five straight wins open the next tier."""

    def win(self, progression, times):
        for _ in range(times):
            progression.settle_match(finished(progression, MatchOutcome.PLAYER_WON))

    def test_fifth_win_unlocks(self, progression):
        self.win(progression, 4)
        assert progression.state.unlocked_tiers == 1

        self.win(progression, 1)
        assert progression.state.unlocked_tiers == 2
        assert progression.current_opponent.id == "anyAceNick"
        assert progression.is_unlocked("anyAceNick")
        assert progression.state.stats.highest_tier_beaten == 1

    def test_fifth_win_pays_big_bonus(self, progression):
        self.win(progression, 4)
        assert progression.settle_match(finished(progression, MatchOutcome.PLAYER_WON)) == 3 + 5

    def test_loss_breaks_the_run(self, progression):
        """Eight wins with a loss in between never make five in a row."""
        self.win(progression, 4)
        progression.settle_match(finished(progression, MatchOutcome.CPU_WON))
        self.win(progression, 4)

        assert progression.state.unlocked_tiers == 1
        assert progression.wins_against("theNorm") == 4
        assert progression.current_opponent.id == "theNorm"
        assert not progression.is_unlocked("anyAceNick")

        self.win(progression, 1)
        assert progression.state.unlocked_tiers == 2

    def test_later_wins_do_not_unlock_again(self, progression):
        self.win(progression, 5)
        progression.select_opponent("theNorm")
        self.win(progression, 1)
        assert progression.wins_against("theNorm") == 6
        assert progression.state.unlocked_tiers == 2
        assert progression.current_opponent.id == "theNorm"

    def test_replaying_lower_tier_never_relocks(self, progression):
        progression.state.unlocked_tiers = 4
        self.win(progression, 5)
        assert progression.state.unlocked_tiers == 4

    def test_top_tier_has_nothing_to_unlock(self, progression):
        progression.state.unlocked_tiers = 5
        progression.select_opponent("mrMark")
        self.win(progression, 5)
        assert progression.state.unlocked_tiers == 5
        assert progression.current_opponent.id == "mrMark"

    def test_locked_opponent(self, progression):
        with pytest.raises(ValueError):
            progression.select_opponent("crazyHorse")
        with pytest.raises(ValueError):
            progression.select_opponent("nobody")


class TestSnapshots:
    """Persisting and restoring progress."""

    def test_round_trip(self, progression):
        self.play_some(progression)
        restored = ProgressionManager.from_snapshot(progression.to_snapshot())
        assert restored.to_snapshot() == progression.to_snapshot()

    def test_round_trip_through_json(self, progression):
        self.play_some(progression)
        restored = ProgressionManager.from_snapshot(json.dumps(progression.to_snapshot()))
        assert restored.state == progression.state

    def play_some(self, progression):
        for outcome in (MatchOutcome.PLAYER_WON, MatchOutcome.DEADLOCK, MatchOutcome.PLAYER_WON):
            progression.settle_match(finished(progression, outcome))

    @pytest.mark.parametrize("data", [
        "{not json",
        {"tokens": -5},
        {"unlocked_tiers": 9},
        {"wins": {"nobody": 2}},
        {"wins": {"theNorm": -1}},
        {"current_opponent_id": "mrMark", "unlocked_tiers": 1},
        {"stats": {"deadlocks": "many"}},
    ])
    def test_invalid_snapshot(self, data):
        with pytest.raises(CorruptedProgressState):
            validate_snapshot(data)

    def test_corrupted_snapshot_falls_back(self, caplog):
        progression = ProgressionManager.from_snapshot('{"tokens": "lots"}')
        assert progression.tokens == DEFAULT_TOKENS
        assert progression.state.unlocked_tiers == 1
        assert "corrupted" in caplog.text

    def test_missing_snapshot(self):
        assert ProgressionManager.from_snapshot(None).tokens == DEFAULT_TOKENS


class TestViews:
    """Ladder screen and leaderboard."""

    def test_leaderboard_sorted(self, progression):
        board = progression.leaderboard()
        assert len(board) == 6
        tokens = [entry["tokens_won"] for entry in board]
        assert tokens == sorted(tokens, reverse=True)
        assert board[0]["name"] == "Mr. Mark"
        assert board[-1]["is_player"]

    def test_overview(self, progression):
        overview = progression.overview()
        assert overview["tokens"] == 100
        assert [o["unlocked"] for o in overview["opponents"]] == [True, False, False, False, False]
        assert overview["opponents"][4]["entry_fee"] == 8
        assert overview["stats"]["matches_played"] == 0
