"""
Session state shared by the HTTP routes and the WebSocket endpoint.

One LadderManager holds the player's progression and the match being
played. Host settings come from environment variables so that ``run.py``
can configure the server before uvicorn imports the app, reload mode
included.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging
import os
import random

from ladderholdem.core.engine import ActionResult
from ladderholdem.core.rules import Actor, ActionType
from ladderholdem.ladder.match import LadderMatch
from ladderholdem.ladder.progression import (
    DEFAULT_TOKENS, SEED_RANGE, LadderProgressState, ProgressionManager,
)


logger = logging.getLogger(__name__)

ENV_SEED = "LADDERHOLDEM_SEED"
ENV_CPU_DELAY = "LADDERHOLDEM_CPU_DELAY"
ENV_TOKENS = "LADDERHOLDEM_TOKENS"

DEFAULT_CPU_DELAY = 0.5


class NoActiveMatch(LookupError):
    """A match operation was requested before any match was started."""


class LadderManager:
    """
    Single-player session: progression plus the current match.

    Usage:
        manager = LadderManager(cpu_delay=0.0, seed=42)
        manager.start_match()
        manager.play_cpu_turns()
        manager.player_action(ActionType.CALL)
    """

    def __init__(
        self,
        cpu_delay: float = DEFAULT_CPU_DELAY,
        seed: Optional[int] = None,
        tokens: int = DEFAULT_TOKENS,
    ):
        """
        Args:
            cpu_delay: Seconds the WebSocket waits before revealing a CPU action
            seed: Seed of the first match; random when omitted
            tokens: Starting token balance
        """
        self.cpu_delay = cpu_delay
        self.seed = seed
        self.starting_tokens = tokens
        self.progression = self._fresh_progression()
        self.match: Optional[LadderMatch] = None
        self.last_reward: Optional[int] = None

    @classmethod
    def from_env(cls) -> LadderManager:
        """Build a manager from the LADDERHOLDEM_* environment variables."""
        seed = os.environ.get(ENV_SEED)
        return cls(
            cpu_delay=float(os.environ.get(ENV_CPU_DELAY, DEFAULT_CPU_DELAY)),
            seed=int(seed) if seed else None,
            tokens=int(os.environ.get(ENV_TOKENS, DEFAULT_TOKENS)),
        )

    def _fresh_progression(self) -> ProgressionManager:
        seed = self.seed if self.seed is not None else random.randrange(SEED_RANGE)
        return ProgressionManager(LadderProgressState(seed=seed, tokens=self.starting_tokens))

    def reset(self) -> None:
        """Drop the match and start the ladder over."""
        self.progression = self._fresh_progression()
        self.match = None
        self.last_reward = None
        logger.info("Ladder reset")

    # Match flow ---------------------------------------------------------

    def require_match(self) -> LadderMatch:
        if self.match is None:
            raise NoActiveMatch("No match started")
        return self.match

    def start_match(self, seed: Optional[int] = None, opponent_id: Optional[str] = None) -> LadderMatch:
        """
        Pay the entry fee and deal the first hand.

        Raises:
            ValueError: If a match is still running or the opponent is locked
            InsufficientTokens: If the balance does not cover the fee
        """
        if self.match is not None and not self.match.is_over:
            raise ValueError("A match is already in progress")
        if opponent_id is not None:
            self.progression.select_opponent(opponent_id)

        self.match = self.progression.start_match(seed)
        self.last_reward = None
        self.match.start_hand()
        self._settle_if_over()
        return self.match

    def next_hand(self) -> LadderMatch:
        """
        Deal the next hand of the current match.

        Raises:
            ValueError: If the hand is still running or the match is over
        """
        match = self.require_match()
        if match.is_over:
            raise ValueError(f"Match is over ({match.outcome.value})")
        match.start_hand()
        self._settle_if_over()
        return match

    def player_action(self, action_type: ActionType, amount: int = 0) -> ActionResult:
        result = self.require_match().player_action(action_type, amount)
        self._settle_if_over()
        return result

    def cpu_to_act(self) -> bool:
        match = self.match
        return (match is not None and not match.hand_over
                and match.state.to_act is Actor.CPU)

    def play_cpu_turn(self) -> Optional[ActionResult]:
        result = self.require_match().play_cpu_turn()
        self._settle_if_over()
        return result

    def play_cpu_turns(self) -> List[ActionResult]:
        results = self.require_match().play_cpu_turns()
        self._settle_if_over()
        return results

    def _settle_if_over(self) -> None:
        match = self.match
        if match is not None and match.is_over and not match.settled:
            self.last_reward = self.progression.settle_match(match)

    # Views ----------------------------------------------------------------

    def state(self) -> Dict[str, Any]:
        """Player's view of the match plus the token balance."""
        snapshot = self.require_match().snapshot()
        snapshot["tokens"] = self.progression.tokens
        snapshot["reward"] = self.last_reward
        return snapshot

    def import_progress(self, data: Any) -> None:
        """Replace the progression from a snapshot, falling back to defaults."""
        self.progression = ProgressionManager.from_snapshot(data)
        self.match = None
        self.last_reward = None


# Global manager instance
ladder_manager = LadderManager.from_env()
