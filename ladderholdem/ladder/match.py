"""
Blind-ladder match against one CPU opponent.

A match is a sequence of heads-up hands played on a single seeded RNG. The
blinds climb one rung of BLIND_LADDER every two hands; stepping onto a new
rung resets both stacks to that rung's starting stack. The match ends when
a hand leaves either side with no chips, or as a deadlock once the next hand
would be dealt on the final rung with both sides still holding chips. The
final rung itself is never played.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
from enum import Enum
import logging

from ladderholdem.agents.base import BaseAgent
from ladderholdem.agents.cpu_agent import CPUAgent
from ladderholdem.agents.profiles import CPUProfile
from ladderholdem.core.engine import ActionResult, BettingEngine
from ladderholdem.core.hand import HandEvaluator
from ladderholdem.core.rng import LCG
from ladderholdem.core.rules import (
    Actor, ActionType, BLIND_LADDER, FINAL_BLIND_LEVEL,
    blind_level_for_hand, button_for_hand,
)
from ladderholdem.core.state import MatchState


logger = logging.getLogger(__name__)

# Upper bound on steps in a simulated match
MAX_SIMULATED_ACTIONS = 10_000


class MatchOutcome(Enum):
    """How a ladder match ended."""
    PLAYER_WON = "player_won"
    CPU_WON = "cpu_won"
    DEADLOCK = "deadlock"


class LadderMatch:
    """
    One match on the blind ladder.

    The engine and the CPU agent share the match RNG, so a seed together
    with the player's actions reproduces every card and every CPU choice.

    Usage:
        match = LadderMatch(profile, seed=12345)
        match.start_hand()
        match.play_cpu_turns()
        match.player_action(ActionType.CALL)
        match.play_cpu_turns()
        ...
        if match.hand_over:
            match.start_hand()
    """

    def __init__(
        self,
        profile: CPUProfile,
        seed: int,
        evaluator: Optional[HandEvaluator] = None,
    ):
        """
        Args:
            profile: CPU opponent for the whole match
            seed: Seed of the match RNG
            evaluator: Showdown ranking passed to the engine
        """
        self.profile = profile
        self.seed = seed
        self.rng = LCG(seed)
        self.engine = BettingEngine(self.rng, evaluator)
        self.cpu = CPUAgent(profile, self.rng)

        self.hands_played = 0
        self.current_level: Optional[int] = None
        self.player_stack = 0
        self.cpu_stack = 0
        self.outcome: Optional[MatchOutcome] = None
        self.settled = False
        self.hand_results: List[Dict[str, Any]] = []

        self._hand_open = False
        self.engine.subscribe(self._on_engine_event)

    # Properties ------------------------------------------------------

    @property
    def state(self) -> Optional[MatchState]:
        return self.engine.state

    @property
    def is_over(self) -> bool:
        return self.outcome is not None

    @property
    def hand_over(self) -> bool:
        """True between hands (including before the first one)."""
        return not self.engine.is_hand_running()

    @property
    def winner(self) -> Optional[Actor]:
        """Match winner, None while running or after a deadlock."""
        if self.outcome == MatchOutcome.PLAYER_WON:
            return Actor.PLAYER
        if self.outcome == MatchOutcome.CPU_WON:
            return Actor.CPU
        return None

    @property
    def is_deadlock(self) -> bool:
        return self.outcome == MatchOutcome.DEADLOCK

    # Hands -----------------------------------------------------------

    def start_hand(self) -> Optional[MatchState]:
        """
        Deal the next hand at the current blind level.

        Returns:
            The new hand's state, or None when the match is already over

        Raises:
            ValueError: If the previous hand is still being played
        """
        if self.is_over:
            logger.info(f"Match already over ({self.outcome.value}), no new hand")
            return None
        if self.engine.is_hand_running():
            raise ValueError("Current hand is still in progress")

        level_index = blind_level_for_hand(self.hands_played)
        level = BLIND_LADDER[level_index]
        if level_index != self.current_level:
            logger.info(f"Blind level {level_index}: {level.small_blind}/{level.big_blind}, stacks reset")
            self.current_level = level_index
            self.player_stack = level.stack_chips
            self.cpu_stack = level.stack_chips

        self._hand_open = True
        self.cpu.on_hand_start(self.hands_played)
        return self.engine.start_hand(
            small_blind=level.small_blind,
            big_blind=level.big_blind,
            player_stack=self.player_stack,
            cpu_stack=self.cpu_stack,
            button=button_for_hand(self.hands_played),
            hand_number=self.hands_played,
            blind_level=level_index,
        )

    def _on_engine_event(self, event: str, state: MatchState) -> None:
        if self._hand_open and state is not None and state.game_over:
            self._complete_hand(state)

    def _complete_hand(self, state: MatchState) -> None:
        """Carry stacks forward and decide whether the match continues."""
        self._hand_open = False
        self.hands_played += 1
        self.player_stack = state.player_stack
        self.cpu_stack = state.cpu_stack

        result = {
            "hand_number": state.hand_number,
            "blind_level": state.blind_level,
            "winner": state.winner.value if state.winner else None,
            "player_stack": state.player_stack,
            "cpu_stack": state.cpu_stack,
            "showdown": self.engine.get_showdown(),
        }
        self.hand_results.append(result)
        self.cpu.on_hand_end(result)

        if self.cpu_stack == 0:
            self.outcome = MatchOutcome.PLAYER_WON
        elif self.player_stack == 0:
            self.outcome = MatchOutcome.CPU_WON
        elif blind_level_for_hand(self.hands_played) >= FINAL_BLIND_LEVEL:
            self.outcome = MatchOutcome.DEADLOCK

        if self.outcome:
            logger.info(f"Match vs {self.profile.id} over after {self.hands_played} hands: {self.outcome.value}")

    # Actions ---------------------------------------------------------

    def player_action(self, action_type: ActionType, amount: int = 0) -> ActionResult:
        """Apply the human player's action."""
        return self.engine.take_action(Actor.PLAYER, action_type, amount)

    def play_cpu_turn(self) -> Optional[ActionResult]:
        """
        Let the CPU act if it is its turn.

        Returns:
            The engine's result, or None when the CPU is not to act
        """
        state = self.engine.state
        if not self.engine.is_hand_running() or state.to_act is not Actor.CPU:
            return None

        decision = self.cpu.decide(state)
        result = self.engine.take_action(Actor.CPU, decision.action_type, decision.amount)
        if not result.success:
            logger.warning(f"CPU decision {decision} rejected: {result.message}")
            fallback = ActionType.CHECK if state.to_call(Actor.CPU) == 0 else ActionType.FOLD
            result = self.engine.take_action(Actor.CPU, fallback)
        return result

    def play_cpu_turns(self) -> List[ActionResult]:
        """Let the CPU act until the player must act or the hand ends."""
        results = []
        while True:
            result = self.play_cpu_turn()
            if result is None:
                return results
            results.append(result)

    def play_out(self, player: BaseAgent) -> MatchOutcome:
        """
        Drive both seats with agents until the match ends.

        Args:
            player: Agent answering for the player seat
        """
        for _ in range(MAX_SIMULATED_ACTIONS):
            if self.is_over:
                return self.outcome
            if self.hand_over:
                self.start_hand()
                continue
            if self.state.to_act is Actor.CPU:
                self.play_cpu_turn()
                continue
            snapshot = self.engine.snapshot(Actor.PLAYER)
            choice = player.act(snapshot, snapshot["legal_actions"])
            result = self.player_action(ActionType(choice["action"]), choice.get("amount", 0))
            if not result.success:
                raise ValueError(f"{player!r} chose an illegal action: {result.message}")
        raise RuntimeError("Match did not finish")

    def snapshot(self) -> Dict[str, Any]:
        """Player's view of the current hand plus the match standing."""
        snapshot = self.engine.snapshot(Actor.PLAYER)
        snapshot["match"] = {
            "opponent": self.profile.id,
            "seed": self.seed,
            "hands_played": self.hands_played,
            "blind_level": self.current_level,
            "is_over": self.is_over,
            "outcome": self.outcome.value if self.outcome else None,
        }
        return snapshot

    def __repr__(self) -> str:
        return f"LadderMatch({self.profile.id}, seed={self.seed}, hands={self.hands_played})"
