"""
Ladder progression and token economy.

Tracks consecutive wins against each opponent, unlocks the next tier after
five straight wins, charges entry fees and pays rewards. The whole state
round-trips through a JSON-ready snapshot validated with pydantic; a
snapshot that fails validation is logged and replaced by a fresh start.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass, field, asdict
import json
import logging
import random

from pydantic import BaseModel, Field, ValidationError, field_validator

from ladderholdem.agents.profiles import (
    DEFAULT_OPPONENT_ID, MAX_TIER, PROFILES, ROSTER, CPUProfile,
    get_profile, profile_for_tier,
)
from ladderholdem.core.errors import CorruptedProgressState, InsufficientTokens
from ladderholdem.core.hand import HandEvaluator
from ladderholdem.core.rng import LCG, LCG_MODULUS
from ladderholdem.ladder.match import LadderMatch, MatchOutcome


logger = logging.getLogger(__name__)

# Indexed by tier - 1
ENTRY_FEES = (1, 2, 3, 5, 8)
BASE_REWARDS = (3, 5, 8, 12, 20)

UNLOCK_WINS = 5
STREAK_BONUSES = ((5, 5), (3, 2))  # (consecutive wins at least, bonus)

DEFAULT_TOKENS = 10
SEED_RANGE = 1_000_000


def entry_fee(tier: int) -> int:
    """Tokens charged to start a match at ``tier``."""
    if 1 <= tier <= len(ENTRY_FEES):
        return ENTRY_FEES[tier - 1]
    return ENTRY_FEES[0]


def base_reward(tier: int) -> int:
    """Tokens paid for beating an opponent at ``tier`` before the streak bonus."""
    if 1 <= tier <= len(BASE_REWARDS):
        return BASE_REWARDS[tier - 1]
    return BASE_REWARDS[0]


def streak_bonus(wins: int) -> int:
    """Extra tokens for a run of consecutive wins."""
    for threshold, bonus in STREAK_BONUSES:
        if wins >= threshold:
            return bonus
    return 0


@dataclass
class PlayerStats:
    total_tokens_won: int = 0
    total_tokens_lost: int = 0
    highest_tier_beaten: int = 0
    longest_streak: int = 0
    matches_played: int = 0
    matches_won: int = 0
    deadlocks: int = 0


@dataclass
class LadderProgressState:
    """
    Everything the ladder remembers between matches.

    Attributes:
        unlocked_tiers: Highest tier the player may challenge
        wins: Opponent id -> consecutive wins against that opponent
        current_opponent_id: Opponent the next match is played against
        seed: Seed of the next match
        tokens: Token balance
        stats: Cumulative career numbers
    """
    unlocked_tiers: int = 1
    wins: Dict[str, int] = field(default_factory=dict)
    current_opponent_id: str = DEFAULT_OPPONENT_ID
    seed: int = 0
    tokens: int = DEFAULT_TOKENS
    stats: PlayerStats = field(default_factory=PlayerStats)


# ============= Snapshot validation =============

class StatsSnapshot(BaseModel):
    total_tokens_won: int = Field(ge=0, default=0)
    total_tokens_lost: int = Field(ge=0, default=0)
    highest_tier_beaten: int = Field(ge=0, le=MAX_TIER, default=0)
    longest_streak: int = Field(ge=0, default=0)
    matches_played: int = Field(ge=0, default=0)
    matches_won: int = Field(ge=0, default=0)
    deadlocks: int = Field(ge=0, default=0)


class ProgressSnapshot(BaseModel):
    """Persisted form of LadderProgressState."""
    unlocked_tiers: int = Field(ge=1, le=MAX_TIER, default=1)
    wins: Dict[str, int] = Field(default_factory=dict)
    current_opponent_id: str = DEFAULT_OPPONENT_ID
    seed: int = Field(ge=0, lt=LCG_MODULUS, default=0)
    tokens: int = Field(ge=0, default=DEFAULT_TOKENS)
    stats: StatsSnapshot = Field(default_factory=StatsSnapshot)

    @field_validator("wins")
    @classmethod
    def _known_opponents(cls, wins: Dict[str, int]) -> Dict[str, int]:
        for opponent_id, count in wins.items():
            if opponent_id not in PROFILES:
                raise ValueError(f"unknown opponent {opponent_id!r}")
            if count < 0:
                raise ValueError(f"negative win count for {opponent_id!r}")
        return wins

    @field_validator("current_opponent_id")
    @classmethod
    def _known_opponent(cls, opponent_id: str) -> str:
        if opponent_id not in PROFILES:
            raise ValueError(f"unknown opponent {opponent_id!r}")
        return opponent_id


def validate_snapshot(data: Union[str, bytes, Dict[str, Any]]) -> LadderProgressState:
    """
    Parse and validate a progression snapshot.

    Raises:
        CorruptedProgressState: On malformed JSON or invalid content
    """
    try:
        if isinstance(data, (str, bytes)):
            data = json.loads(data)
        snapshot = ProgressSnapshot.model_validate(data)
    except (ValueError, ValidationError) as e:
        # json.JSONDecodeError is a ValueError
        raise CorruptedProgressState(str(e)) from e

    opponent = PROFILES[snapshot.current_opponent_id]
    if opponent.tier > snapshot.unlocked_tiers:
        raise CorruptedProgressState(
            f"{opponent.id} is tier {opponent.tier} but only {snapshot.unlocked_tiers} unlocked"
        )

    return LadderProgressState(
        unlocked_tiers=snapshot.unlocked_tiers,
        wins=dict(snapshot.wins),
        current_opponent_id=snapshot.current_opponent_id,
        seed=snapshot.seed,
        tokens=snapshot.tokens,
        stats=PlayerStats(**snapshot.stats.model_dump()),
    )


# ============= Manager =============

class ProgressionManager:
    """
    Owns the ladder progress and books match results.

    Usage:
        progression = ProgressionManager()
        match = progression.start_match()
        ...play the match...
        progression.settle_match(match)
        saved = progression.to_snapshot()
    """

    def __init__(
        self,
        state: Optional[LadderProgressState] = None,
        evaluator: Optional[HandEvaluator] = None,
    ):
        self.state = state or LadderProgressState(seed=random.randrange(SEED_RANGE))
        self.evaluator = evaluator

    # Read-only helpers ------------------------------------------------

    @property
    def current_opponent(self) -> CPUProfile:
        return get_profile(self.state.current_opponent_id)

    @property
    def tokens(self) -> int:
        return self.state.tokens

    def wins_against(self, opponent_id: str) -> int:
        return self.state.wins.get(opponent_id, 0)

    def is_unlocked(self, opponent_id: str) -> bool:
        return get_profile(opponent_id).tier <= self.state.unlocked_tiers

    def can_afford(self, tier: Optional[int] = None) -> bool:
        tier = tier or self.current_opponent.tier
        return self.state.tokens >= entry_fee(tier)

    # Streak bookkeeping -----------------------------------------------

    def record_win(self, opponent_id: str) -> int:
        """
        Count a win against ``opponent_id``.

        The fifth consecutive win unlocks the next tier and makes its
        opponent the current one.

        Returns:
            The new consecutive-win count
        """
        opponent = get_profile(opponent_id)
        wins = self.wins_against(opponent_id) + 1
        self.state.wins[opponent_id] = wins

        stats = self.state.stats
        stats.longest_streak = max(stats.longest_streak, wins)
        stats.highest_tier_beaten = max(stats.highest_tier_beaten, opponent.tier)

        if wins == UNLOCK_WINS and opponent.tier < MAX_TIER:
            next_opponent = profile_for_tier(opponent.tier + 1)
            self.state.unlocked_tiers = max(self.state.unlocked_tiers, next_opponent.tier)
            self.state.current_opponent_id = next_opponent.id
            logger.info(f"Unlocked tier {next_opponent.tier}: {next_opponent.id}")

        return wins

    def record_loss(self, opponent_id: str) -> None:
        """Reset the consecutive-win count against ``opponent_id``."""
        get_profile(opponent_id)
        self.state.wins[opponent_id] = 0

    def select_opponent(self, opponent_id: str) -> None:
        """
        Make an unlocked opponent the current one.

        Raises:
            ValueError: If the opponent is unknown or still locked
        """
        if not self.is_unlocked(opponent_id):
            raise ValueError(f"{opponent_id} is not unlocked")
        self.state.current_opponent_id = opponent_id

    # Token economy -----------------------------------------------------

    def start_match(self, seed: Optional[int] = None) -> LadderMatch:
        """
        Charge the entry fee and set up a match against the current opponent.

        Args:
            seed: Match seed; defaults to the stored seed, which then advances

        Raises:
            InsufficientTokens: If the balance is below the entry fee
        """
        opponent = self.current_opponent
        fee = entry_fee(opponent.tier)
        if self.state.tokens < fee:
            raise InsufficientTokens(f"Entry to {opponent.id} costs {fee}, balance is {self.state.tokens}")

        if seed is None:
            seed = self.state.seed
            rng = LCG(seed)
            rng()
            self.state.seed = rng.state

        self.state.tokens -= fee
        self.state.stats.total_tokens_lost += fee
        self.state.stats.matches_played += 1
        logger.info(f"Match vs {opponent.id} (tier {opponent.tier}), fee {fee}, seed {seed}")

        return LadderMatch(opponent, seed, self.evaluator)

    def settle_match(self, match: LadderMatch) -> int:
        """
        Book a finished match.

        A win counts toward the streak and pays the tier reward plus the
        streak bonus; a loss resets the streak; a deadlock only counts.

        Returns:
            Tokens paid out

        Raises:
            ValueError: If the match is still running or was already settled
        """
        if not match.is_over:
            raise ValueError("Match is still in progress")
        if match.settled:
            raise ValueError("Match already settled")
        match.settled = True

        opponent = match.profile
        if match.outcome == MatchOutcome.DEADLOCK:
            self.state.stats.deadlocks += 1
            return 0
        if match.outcome == MatchOutcome.CPU_WON:
            self.record_loss(opponent.id)
            return 0

        wins = self.record_win(opponent.id)
        reward = base_reward(opponent.tier) + streak_bonus(wins)
        self.state.tokens += reward
        self.state.stats.total_tokens_won += reward
        self.state.stats.matches_won += 1
        logger.info(f"Beat {opponent.id}, streak {wins}, reward {reward}")
        return reward

    # Views ------------------------------------------------------------

    def leaderboard(self) -> List[Dict[str, Any]]:
        """Roster career tokens plus the player's winnings, best first."""
        entries = [
            {
                "name": profile.name,
                "portrait": profile.portrait,
                "tokens_won": profile.career_tokens_won,
                "win_streak": profile.streak_record,
                "tier": profile.tier,
                "is_player": False,
            }
            for profile in ROSTER
        ]
        entries.append({
            "name": "Player",
            "portrait": "🎮",
            "tokens_won": self.state.stats.total_tokens_won,
            "win_streak": self.state.stats.longest_streak,
            "tier": 0,
            "is_player": True,
        })
        return sorted(entries, key=lambda e: e["tokens_won"], reverse=True)

    def overview(self) -> Dict[str, Any]:
        """Ladder screen: balance, roster with lock state and streaks."""
        return {
            "tokens": self.state.tokens,
            "unlocked_tiers": self.state.unlocked_tiers,
            "current_opponent": self.state.current_opponent_id,
            "opponents": [
                {
                    **profile.to_dict(),
                    "unlocked": profile.tier <= self.state.unlocked_tiers,
                    "wins": self.wins_against(profile.id),
                    "entry_fee": entry_fee(profile.tier),
                    "reward": base_reward(profile.tier),
                }
                for profile in ROSTER
            ],
            "stats": asdict(self.state.stats),
        }

    # Persistence --------------------------------------------------------

    def to_snapshot(self) -> Dict[str, Any]:
        """JSON-ready copy of the progression state."""
        return asdict(self.state)

    @classmethod
    def from_snapshot(
        cls,
        data: Union[str, bytes, Dict[str, Any], None],
        evaluator: Optional[HandEvaluator] = None,
    ) -> ProgressionManager:
        """
        Restore a manager from a snapshot.

        A missing or corrupted snapshot yields a fresh default state.
        """
        if data is None:
            return cls(evaluator=evaluator)
        try:
            state = validate_snapshot(data)
        except CorruptedProgressState as e:
            logger.warning(f"Discarding corrupted progression snapshot: {e}")
            return cls(evaluator=evaluator)
        return cls(state, evaluator)
