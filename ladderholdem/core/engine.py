"""
Heads-up Betting Engine - State Machine Implementation.

This module implements one hand of heads-up no-limit Hold'em.
It handles:
- Shuffling and dealing from the match's seeded RNG
- Automatic blind posting from the button assignment
- Player actions (fold, check, call, raise, all-in) with turn enforcement
- Street transitions and the all-in run-out
- Showdown through an injected hand evaluator, including split pots

Illegal actions never raise: they come back as a rejected ActionResult and
leave the MatchState untouched.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass
import logging

from ladderholdem.core.card import Card, Deck
from ladderholdem.core.errors import DeckExhausted, InvalidAction
from ladderholdem.core.hand import HandEvaluator, StandardEvaluator
from ladderholdem.core.rng import LCG
from ladderholdem.core.rules import (
    Actor, ActionType, GamePhase, Winner,
    NEXT_PHASE, HOLE_CARDS, TOTAL_COMMUNITY_CARDS,
    calculate_min_raise, first_to_act,
)
from ladderholdem.core.state import MatchState


logger = logging.getLogger(__name__)

Listener = Callable[[str, MatchState], None]


@dataclass
class ActionResult:
    """Result of an action. A rejected action carries the reason in ``message``."""
    success: bool
    message: str
    action_type: Optional[ActionType] = None
    amount: int = 0
    actor: Optional[Actor] = None

    @classmethod
    def rejected(cls, error: InvalidAction, actor: Optional[Actor] = None) -> ActionResult:
        return cls(False, str(error), actor=actor)


class BettingEngine:
    """
    Heads-up betting state machine.

    Usage:
        engine = BettingEngine(LCG(seed))
        engine.start_hand(small_blind=50, big_blind=100,
                          player_stack=1000, cpu_stack=1000, button=Actor.CPU)

        while engine.is_hand_running():
            actor = engine.state.to_act
            result = engine.take_action(actor, ActionType.CALL)

        print(engine.state.winner)
    """

    def __init__(self, rng: Optional[LCG] = None, evaluator: Optional[HandEvaluator] = None):
        """
        Args:
            rng: Seeded stream used for every shuffle
            evaluator: Showdown ranking, StandardEvaluator by default
        """
        self.rng = rng if rng is not None else LCG()
        self.evaluator: HandEvaluator = evaluator or StandardEvaluator()
        self.deck = Deck(self.rng, shuffle=False)
        self.state: Optional[MatchState] = None
        self.hand_history: List[Dict[str, Any]] = []
        self._listeners: List[Listener] = []

    # Observers -------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback fired after every state transition.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(event, self.state)

    # Hand lifecycle --------------------------------------------------

    def is_hand_running(self) -> bool:
        """Check if a hand is currently in progress."""
        return self.state is not None and not self.state.game_over

    def start_hand(
        self,
        small_blind: int,
        big_blind: int,
        player_stack: int,
        cpu_stack: int,
        button: Actor = Actor.CPU,
        hand_number: int = 0,
        blind_level: int = 0,
    ) -> MatchState:
        """
        Shuffle, deal hole cards and post blinds.

        Raises:
            ValueError: On non-positive blinds or an empty stack
        """
        if small_blind <= 0 or big_blind < small_blind:
            raise ValueError(f"Invalid blinds {small_blind}/{big_blind}")
        if player_stack <= 0 or cpu_stack <= 0:
            raise ValueError("Both sides need chips to start a hand")

        logger.info(f"Starting hand #{hand_number} at level {blind_level} ({small_blind}/{big_blind})")

        self.deck = Deck(self.rng)
        self.hand_history = []
        self.state = MatchState(
            player_stack=player_stack,
            cpu_stack=cpu_stack,
            small_blind=small_blind,
            big_blind=big_blind,
            button=button,
            hand_number=hand_number,
            blind_level=blind_level,
        )

        self.state.player_cards = self._draw(HOLE_CARDS)
        self.state.cpu_cards = self._draw(HOLE_CARDS)

        self._post_blinds()
        self.state.to_act = first_to_act(GamePhase.PREFLOP, button)

        self._log_action("HAND_START", {
            "hand_number": hand_number,
            "button": button.value,
            "small_blind": small_blind,
            "big_blind": big_blind,
        })

        # A blind can put a short stack all-in before anyone acts
        if self._is_betting_round_complete():
            self._end_betting_round()

        self._notify("hand_started")
        return self.state

    def _post_blinds(self) -> None:
        """Post small and big blinds, each capped at the poster's stack."""
        state = self.state
        sb_amount = state.commit(state.button, state.small_blind)
        bb_amount = state.commit(state.big_blind_actor, state.big_blind)
        logger.debug(f"Blinds posted: SB={sb_amount} ({state.button.value}) BB={bb_amount}")

    def _draw(self, n: int) -> List[Card]:
        """Deal n cards, reshuffling the unseen cards if the deck runs dry."""
        try:
            return self.deck.deal(n)
        except DeckExhausted as e:
            logger.warning(f"{e}; reshuffling unseen cards")
            self.deck.reshuffle(exclude=self._cards_in_play())
            return self.deck.deal(n)

    def _cards_in_play(self) -> List[Card]:
        if self.state is None:
            return []
        return self.state.player_cards + self.state.cpu_cards + self.state.community_cards

    # Actions ---------------------------------------------------------

    def take_action(self, actor: Actor, action_type: ActionType, amount: int = 0) -> ActionResult:
        """
        Process an action for ``actor``.

        Args:
            action_type: FOLD, CHECK, CALL, RAISE or ALL_IN
            amount: Raise-to total for RAISE, ignored otherwise
        """
        handlers = {
            ActionType.FOLD: lambda: self.fold(actor),
            ActionType.CHECK: lambda: self.check(actor),
            ActionType.CALL: lambda: self.call(actor),
            ActionType.RAISE: lambda: self.raise_to(actor, amount),
            ActionType.ALL_IN: lambda: self.all_in(actor),
        }
        handler = handlers.get(action_type)
        if handler is None:
            return ActionResult.rejected(InvalidAction(f"Unknown action: {action_type}"), actor)
        return handler()

    def _validate_turn(self, actor: Actor) -> None:
        if self.state is None:
            raise InvalidAction("No hand in progress")
        if self.state.game_over or self.state.phase == GamePhase.SHOWDOWN:
            raise InvalidAction("Hand is over")
        if self.state.to_act is not actor:
            raise InvalidAction(f"Not {actor.value}'s turn")

    def fold(self, actor: Actor) -> ActionResult:
        """Give up the hand; the whole pot goes to the other side."""
        try:
            self._validate_turn(actor)
        except InvalidAction as e:
            return ActionResult.rejected(e, actor)

        state = self.state
        other = actor.opponent
        won = state.pot
        state.set_last_action(actor, ActionType.FOLD)
        state.award(other, won)
        self._finish_hand(Winner.of(other))

        self._log_action("WIN_BY_FOLD", {"winner": other.value, "amount": won})
        logger.info(f"{actor.value} folds, {other.value} wins {won}")
        self._notify("fold")
        return ActionResult(True, "Folded", ActionType.FOLD, 0, actor)

    def check(self, actor: Actor) -> ActionResult:
        """Pass without betting; only legal when the actor's bet is matched."""
        try:
            self._validate_turn(actor)
            to_call = self.state.to_call(actor)
            if to_call > 0:
                raise InvalidAction(f"Cannot check, must call {to_call}")
        except InvalidAction as e:
            return ActionResult.rejected(e, actor)

        self._record(actor, ActionType.CHECK, 0)
        self._advance_after(actor)
        return ActionResult(True, "Checked", ActionType.CHECK, 0, actor)

    def call(self, actor: Actor) -> ActionResult:
        """Match the current bet, all-in for less when the stack is short."""
        try:
            self._validate_turn(actor)
            if self.state.to_call(actor) == 0:
                raise InvalidAction("Nothing to call, use CHECK")
        except InvalidAction as e:
            return ActionResult.rejected(e, actor)

        paid = self.state.commit(actor, self.state.to_call(actor))
        self._record(actor, ActionType.CALL, paid)
        message = f"Called {paid}" if self.state.stack(actor) else f"Called all-in for {paid}"
        self._advance_after(actor)
        return ActionResult(True, message, ActionType.CALL, paid, actor)

    def raise_to(self, actor: Actor, amount: int) -> ActionResult:
        """
        Raise the street total to ``amount``.

        Requests below one big blind over the current bet are lifted to that
        minimum. A total the stack cannot cover becomes an all-in. Against an
        opponent with no chips behind there is nothing to raise, so the raise
        collapses into a call.
        """
        try:
            self._validate_turn(actor)
            state = self.state
            if state.stack(actor) == 0:
                raise InvalidAction("No chips left to raise")
            if state.stack(actor.opponent) == 0 or state.stack(actor) <= state.to_call(actor):
                if state.to_call(actor) == 0:
                    raise InvalidAction("Opponent is all-in, nothing to raise")
                return self.call(actor)
        except InvalidAction as e:
            return ActionResult.rejected(e, actor)

        target = max(int(amount), calculate_min_raise(state.current_bet, state.big_blind))
        if target >= state.bet(actor) + state.stack(actor):
            return self.all_in(actor)

        paid = state.commit(actor, target - state.bet(actor))
        state.acted = []
        self._record(actor, ActionType.RAISE, paid)
        self._advance_after(actor)
        return ActionResult(True, f"Raised to {target}", ActionType.RAISE, paid, actor)

    def all_in(self, actor: Actor) -> ActionResult:
        """Commit the entire remaining stack."""
        try:
            self._validate_turn(actor)
            state = self.state
            if state.stack(actor) == 0:
                raise InvalidAction("Already all-in")
            if state.stack(actor.opponent) == 0:
                if state.to_call(actor) == 0:
                    raise InvalidAction("Opponent is all-in, nothing to bet")
                return self.call(actor)
        except InvalidAction as e:
            return ActionResult.rejected(e, actor)

        previous_bet = state.current_bet
        paid = state.commit(actor, state.stack(actor))
        if state.bet(actor) > previous_bet:
            # Reopens the action for the other side
            state.acted = []
        self._record(actor, ActionType.ALL_IN, paid)
        self._advance_after(actor)
        return ActionResult(True, f"All-in for {state.bet(actor)}", ActionType.ALL_IN, paid, actor)

    def _record(self, actor: Actor, action_type: ActionType, amount: int) -> None:
        state = self.state
        state.set_last_action(actor, action_type)
        if actor not in state.acted:
            state.acted.append(actor)
        self._log_action(action_type.value, {"actor": actor.value, "amount": amount})
        logger.debug(f"{actor.value} {action_type.value} {amount} (pot {state.pot})")

    # Street progression ----------------------------------------------

    def _advance_after(self, actor: Actor) -> None:
        """Close the street if betting is done, otherwise pass the turn."""
        if self._is_betting_round_complete():
            self._end_betting_round()
        else:
            self.state.to_act = actor.opponent
        self._notify("action")

    def _is_betting_round_complete(self) -> bool:
        """
        A street is over when:
        - the side trailing in bets has no chips left to continue, or
        - bets are level and either side is all-in, or
        - bets are level and both sides have acted voluntarily.
        """
        state = self.state
        if state.player_bet != state.cpu_bet:
            trailing = Actor.PLAYER if state.player_bet < state.cpu_bet else Actor.CPU
            return state.stack(trailing) == 0
        if state.is_all_in:
            return True
        return all(actor in state.acted for actor in Actor)

    def _end_betting_round(self) -> None:
        """Return uncalled chips, then deal the next street or go to showdown."""
        state = self.state
        refunded = state.refund_uncalled()
        if refunded:
            logger.debug(f"Returned {refunded} uncalled chips")

        if state.is_all_in or state.phase == GamePhase.RIVER:
            self._run_out_board()
            self._go_to_showdown()
            return

        self._deal_next_street()
        state.to_act = first_to_act(state.phase, state.button)

    def _deal_next_street(self) -> None:
        state = self.state
        next_phase, count = NEXT_PHASE[state.phase]
        state.reset_street()
        state.community_cards.extend(self._draw(count))
        state.phase = next_phase
        self._log_action(next_phase.name, {"cards": [str(c) for c in state.community_cards]})

    def _run_out_board(self) -> None:
        """Deal the remaining streets without betting."""
        while len(self.state.community_cards) < TOTAL_COMMUNITY_CARDS:
            self._deal_next_street()

    def _go_to_showdown(self) -> None:
        """Rank both seven-card hands and pay the pot."""
        state = self.state
        state.phase = GamePhase.SHOWDOWN
        state.reset_street()

        hands = [
            state.player_cards + state.community_cards,
            state.cpu_cards + state.community_cards,
        ]
        winning = self.evaluator.winners(hands)
        pot = state.pot

        if len(winning) == 1:
            winner = Actor.PLAYER if winning[0] == 0 else Actor.CPU
            state.award(winner, pot)
            result = Winner.of(winner)
        else:
            # Split; the odd chip goes to the first seat left of the button
            half, odd = divmod(pot, 2)
            state.award(state.big_blind_actor, half + odd)
            state.award(state.button, half)
            result = Winner.TIE

        self._finish_hand(result)
        self._log_action("SHOWDOWN", {
            "winner": result.value,
            "pot": pot,
            "player_hand": self.evaluator.describe(hands[0]),
            "cpu_hand": self.evaluator.describe(hands[1]),
        })
        logger.info(f"Showdown: {result.value} ({pot} chips)")

    def _finish_hand(self, winner: Winner) -> None:
        self.state.game_over = True
        self.state.winner = winner
        self.state.to_act = None

    # Read-only surface -----------------------------------------------

    def legal_actions(self, actor: Optional[Actor] = None) -> List[Dict[str, Any]]:
        """
        Legal actions for ``actor`` (the actor to act by default).

        Returns:
            List of action dicts with type and constraints
        """
        state = self.state
        if state is None:
            return []
        actor = actor or state.to_act
        try:
            self._validate_turn(actor)
        except InvalidAction:
            return []

        stack = state.stack(actor)
        to_call = state.to_call(actor)
        opponent_covered = state.stack(actor.opponent) > 0
        actions: List[Dict[str, Any]] = [{"type": ActionType.FOLD.value}]

        if to_call == 0:
            actions.append({"type": ActionType.CHECK.value})
        else:
            actions.append({"type": ActionType.CALL.value, "amount": min(to_call, stack)})

        max_total = state.bet(actor) + stack
        min_total = calculate_min_raise(state.current_bet, state.big_blind)
        if opponent_covered and max_total > min_total:
            actions.append({"type": ActionType.RAISE.value, "min": min_total, "max": max_total})

        if opponent_covered and stack > 0:
            actions.append({"type": ActionType.ALL_IN.value, "amount": max_total})

        return actions

    def snapshot(self, viewer: Optional[Actor] = Actor.PLAYER) -> Dict[str, Any]:
        """
        JSON-ready view of the hand for ``viewer``.

        The opponent's hole cards stay hidden until the showdown.
        """
        if self.state is None:
            return {"phase": None, "game_over": False}

        snapshot = self.state.to_dict(viewer)
        own_turn = viewer is not None and self.state.to_act is viewer
        snapshot["legal_actions"] = self.legal_actions(viewer) if own_turn else []
        if viewer is not None:
            snapshot["chips_to_call"] = self.state.to_call(viewer)
        snapshot["min_raise"] = calculate_min_raise(self.state.current_bet, self.state.big_blind)
        if self.state.phase == GamePhase.SHOWDOWN:
            snapshot["showdown"] = self.get_showdown()
        return snapshot

    def get_showdown(self) -> Optional[Dict[str, Any]]:
        """Showdown details once the hand went to showdown."""
        for entry in reversed(self.hand_history):
            if entry["action"] == "SHOWDOWN":
                return {k: v for k, v in entry.items() if k not in ("action", "phase")}
        return None

    def _log_action(self, action: str, details: Dict[str, Any]) -> None:
        """Log an action to hand history."""
        self.hand_history.append({
            "action": action,
            "phase": self.state.phase.value if self.state else None,
            **details
        })
