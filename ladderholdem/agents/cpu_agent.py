"""
Personality-driven CPU opponent.

The decision is a pure function of the CPU's hole cards, the betting
situation, its CPUProfile and the match RNG. Draws are taken in a fixed
order so that a seeded match replays exactly:

1. Hand strength from the starting-hand table, adjusted for the street.
2. Shallow stacks (two big blinds or less) shove or fold.
3. A personality score: strength, an aggression offset, a bluff bonus and
   a street multiplier.
4. Check or bet when unopposed; fold, call or raise when facing a bet.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence
import logging

from ladderholdem.agents.base import BaseAgent
from ladderholdem.agents.profiles import CPUProfile
from ladderholdem.core.card import Card
from ladderholdem.core.hand_strength import strength_score
from ladderholdem.core.rules import Actor, ActionType, GamePhase, calculate_min_raise
from ladderholdem.core.state import MatchState


logger = logging.getLogger(__name__)

PREFLOP_AGGRESSION_BONUS = 10
AGGRESSIVE_ABOVE = 50
# Late-street trims for cautious profiles are tuned for this model
CAUTIOUS_TRIMS = {GamePhase.TURN: 5, GamePhase.RIVER: 10}

SHALLOW_STACK_BB = 2
SHALLOW_SHOVE_STRENGTH = 30
SHALLOW_SHOVE_CHANCE = 0.3

BLUFF_BONUS = 25
AGGRESSION_WEIGHT = 0.3
PHASE_MULTIPLIERS = {
    GamePhase.PREFLOP: 1.1,
    GamePhase.FLOP: 1.0,
    GamePhase.TURN: 0.9,
    GamePhase.RIVER: 0.8,
}

SHORT_STACK_BB = 5
FOLD_MARGIN = 20
MARGINAL_CALL_CHANCE = 0.4


class Decision(NamedTuple):
    """An action the CPU has settled on. ``amount`` is a raise-to total."""
    action_type: ActionType
    amount: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"action": self.action_type.value, "amount": self.amount}


class Situation(NamedTuple):
    """The part of the table the decision depends on."""
    cards: Sequence[Card]
    phase: GamePhase
    stack: int
    own_bet: int
    current_bet: int
    pot: int
    big_blind: int

    @property
    def to_call(self) -> int:
        return max(0, self.current_bet - self.own_bet)

    @property
    def pot_odds(self) -> float:
        """Share of the final pot the call would represent."""
        if self.pot <= 0:
            return 0.0
        return self.to_call / (self.pot + self.to_call)

    @classmethod
    def from_state(cls, state: MatchState, seat: Actor = Actor.CPU) -> Situation:
        return cls(
            cards=state.cards(seat),
            phase=state.phase,
            stack=state.stack(seat),
            own_bet=state.bet(seat),
            current_bet=state.current_bet,
            pot=state.pot,
            big_blind=state.big_blind,
        )

    @classmethod
    def from_snapshot(cls, game_state: Dict[str, Any], seat: Actor = Actor.CPU) -> Situation:
        """Rebuild the situation from a BettingEngine.snapshot(seat) dict."""
        own = game_state[seat.value]
        return cls(
            cards=[Card.from_string(c["text"]) for c in own["cards"] or []],
            phase=GamePhase(game_state["phase"]),
            stack=own["stack"],
            own_bet=own["bet"],
            current_bet=game_state["current_bet"],
            pot=game_state["pot"],
            big_blind=game_state["big_blind"],
        )


class CPUAgent(BaseAgent):
    """
    CPU opponent driven by a CPUProfile.

    Usage:
        agent = CPUAgent(profile, rng)
        decision = agent.decide(engine.state)
        engine.take_action(Actor.CPU, decision.action_type, decision.amount)
    """

    def __init__(
        self,
        profile: CPUProfile,
        rng: Callable[[], float],
        seat: Actor = Actor.CPU,
    ):
        """
        Args:
            profile: Personality driving every decision
            rng: Shared match RNG, consumed in call order
            seat: Which side of the table the agent plays
        """
        super().__init__(seat, profile.name)
        self.profile = profile
        self.rng = rng
        self.last_decision: Optional[Decision] = None

    # Model steps -----------------------------------------------------

    def hand_strength(self, cards: Sequence[Card], phase: GamePhase) -> int:
        """
        Starting-hand strength on 0-100 with personality adjustments.

        Aggressive profiles add 10 preflop; cautious profiles trim 5 on the
        turn and 10 on the river.
        """
        strength = strength_score(cards)
        if phase == GamePhase.PREFLOP and self.profile.aggression > AGGRESSIVE_ABOVE:
            strength += PREFLOP_AGGRESSION_BONUS
        if self.profile.is_cautious:
            strength -= CAUTIOUS_TRIMS.get(phase, 0)
        return min(100, max(0, strength))

    def action_score(self, strength: int, phase: GamePhase) -> float:
        """Strength shifted by aggression and a possible bluff, scaled by street."""
        score = strength + (self.profile.aggression - 50) * AGGRESSION_WEIGHT
        if self.rng() * 100 < self.profile.bluff_frequency:
            score += BLUFF_BONUS
        return score * PHASE_MULTIPLIERS.get(phase, 1.0)

    def raise_total(self, situation: Situation) -> int:
        """
        Raise-to total: two to three big blinds scaled by aggression and
        jittered by +/-20%, added to the current bet.

        Floored at the minimum legal raise and capped at the all-in total.
        """
        bb = situation.big_blind
        size = bb * (2 + self.rng()) * (self.profile.aggression / 50)
        size *= 0.8 + self.rng() * 0.4
        total = situation.current_bet + size
        total = max(total, calculate_min_raise(situation.current_bet, bb))
        total = min(total, situation.own_bet + situation.stack)
        return int(total)

    # Decision --------------------------------------------------------

    def decide(self, state: MatchState) -> Decision:
        """Choose an action from the engine's live state."""
        return self.choose(Situation.from_state(state, self.seat))

    def choose(self, situation: Situation) -> Decision:
        """Run the decision model on a situation."""
        strength = self.hand_strength(situation.cards, situation.phase)
        bb = situation.big_blind

        if situation.stack <= bb * SHALLOW_STACK_BB:
            if strength > SHALLOW_SHOVE_STRENGTH or self.rng() < SHALLOW_SHOVE_CHANCE:
                decision = self._shove(situation)
            else:
                decision = Decision(ActionType.FOLD)
            return self._settle(decision, strength, None)

        score = self.action_score(strength, situation.phase)
        aggression = self.profile.aggression / 100

        if situation.to_call == 0:
            if score > self.profile.raise_frequency:
                shove_chance = 0.15 + 0.3 * aggression
                if self.rng() < shove_chance or situation.stack < bb * SHORT_STACK_BB:
                    decision = self._shove(situation)
                else:
                    decision = self._raise(situation)
            else:
                decision = Decision(ActionType.CHECK)
            return self._settle(decision, strength, score)

        call_frequency = self.profile.call_frequency
        if score < call_frequency - FOLD_MARGIN:
            decision = Decision(ActionType.FOLD)
        elif score < call_frequency:
            if (situation.pot_odds < strength / 100
                    or strength >= self.profile.hand_strength_threshold
                    or self.rng() > MARGINAL_CALL_CHANCE):
                decision = Decision(ActionType.CALL)
            else:
                decision = Decision(ActionType.FOLD)
        elif score > self.profile.raise_frequency:
            shove_chance = 0.2 + 0.4 * aggression
            if self.rng() < shove_chance or situation.stack < bb * SHORT_STACK_BB:
                decision = self._shove(situation)
            else:
                decision = self._raise(situation)
        else:
            decision = Decision(ActionType.CALL)
        return self._settle(decision, strength, score)

    def _shove(self, situation: Situation) -> Decision:
        return Decision(ActionType.ALL_IN, situation.own_bet + situation.stack)

    def _raise(self, situation: Situation) -> Decision:
        total = self.raise_total(situation)
        if total >= situation.own_bet + situation.stack:
            return self._shove(situation)
        return Decision(ActionType.RAISE, total)

    def _settle(self, decision: Decision, strength: int, score: Optional[float]) -> Decision:
        self.last_decision = decision
        logger.debug(
            f"{self.profile.id}: strength={strength} score={score} -> "
            f"{decision.action_type.value} {decision.amount}"
        )
        return decision

    # BaseAgent interface ---------------------------------------------

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Decide from a snapshot dict and answer in the action-dict format."""
        if not legal_actions:
            return {"action": ActionType.FOLD.value, "amount": 0}
        return self.choose(Situation.from_snapshot(game_state, self.seat)).to_dict()
