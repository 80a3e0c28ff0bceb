"""
Match state for one heads-up hand.

MatchState is a plain value object owned by the BettingEngine. Everything a
hand needs lives here: stacks, pot, street bets, positions, cards and the
terminal flags. The per-actor accessors keep the engine free of
``if actor is PLAYER`` branches.

The pot includes chips bet on the current street, so
``player_stack + cpu_stack + pot`` stays constant for the whole hand.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from ladderholdem.core.card import Card
from ladderholdem.core.rules import Actor, ActionType, GamePhase, Winner


@dataclass
class MatchState:
    """
    A heads-up hand in progress.

    Attributes:
        phase: Current street
        hand_number: Index of this hand within the match
        blind_level: Ladder index the blinds were taken from
        player_stack/cpu_stack: Chips behind (not yet bet)
        pot: All chips committed this hand, current street included
        current_bet: Highest street total, max(player_bet, cpu_bet)
        player_bet/cpu_bet: Chips each side committed on this street
        button: Actor holding the button (posts the small blind)
        to_act: Actor whose turn it is, None once the hand is over
        acted: Actors who have acted voluntarily on this street
        game_over: Set by a fold or the showdown
        winner: Result once game_over is set
    """
    player_stack: int
    cpu_stack: int
    small_blind: int
    big_blind: int
    button: Actor = Actor.CPU
    phase: GamePhase = GamePhase.PREFLOP
    hand_number: int = 0
    blind_level: int = 0
    pot: int = 0
    current_bet: int = 0
    player_bet: int = 0
    cpu_bet: int = 0
    player_cards: List[Card] = field(default_factory=list)
    cpu_cards: List[Card] = field(default_factory=list)
    community_cards: List[Card] = field(default_factory=list)
    player_action: Optional[ActionType] = None
    cpu_action: Optional[ActionType] = None
    to_act: Optional[Actor] = None
    acted: List[Actor] = field(default_factory=list)
    game_over: bool = False
    winner: Optional[Winner] = None

    # Per-actor access -------------------------------------------------

    def stack(self, actor: Actor) -> int:
        return self.player_stack if actor is Actor.PLAYER else self.cpu_stack

    def bet(self, actor: Actor) -> int:
        return self.player_bet if actor is Actor.PLAYER else self.cpu_bet

    def cards(self, actor: Actor) -> List[Card]:
        return self.player_cards if actor is Actor.PLAYER else self.cpu_cards

    def last_action(self, actor: Actor) -> Optional[ActionType]:
        return self.player_action if actor is Actor.PLAYER else self.cpu_action

    def set_last_action(self, actor: Actor, action: Optional[ActionType]) -> None:
        if actor is Actor.PLAYER:
            self.player_action = action
        else:
            self.cpu_action = action

    def commit(self, actor: Actor, amount: int) -> int:
        """
        Move chips from an actor's stack into the pot.

        Args:
            amount: Chips requested

        Returns:
            Chips actually moved (capped at the stack)
        """
        actual = max(0, min(amount, self.stack(actor)))
        if actor is Actor.PLAYER:
            self.player_stack -= actual
            self.player_bet += actual
        else:
            self.cpu_stack -= actual
            self.cpu_bet += actual
        self.pot += actual
        self.current_bet = max(self.player_bet, self.cpu_bet)
        return actual

    def award(self, actor: Actor, amount: int) -> None:
        """Move chips from the pot to an actor's stack."""
        amount = min(amount, self.pot)
        if actor is Actor.PLAYER:
            self.player_stack += amount
        else:
            self.cpu_stack += amount
        self.pot -= amount

    def refund_uncalled(self) -> int:
        """
        Return the part of the larger street bet the other side could not match.

        Returns:
            Chips refunded (0 when bets are already level)
        """
        excess = abs(self.player_bet - self.cpu_bet)
        if excess == 0:
            return 0
        leader = Actor.PLAYER if self.player_bet > self.cpu_bet else Actor.CPU
        if leader is Actor.PLAYER:
            self.player_bet -= excess
        else:
            self.cpu_bet -= excess
        self.award(leader, excess)
        self.current_bet = max(self.player_bet, self.cpu_bet)
        return excess

    def reset_street(self) -> None:
        """Clear street bets and action flags for a new betting round."""
        self.player_bet = 0
        self.cpu_bet = 0
        self.current_bet = 0
        self.player_action = None
        self.cpu_action = None
        self.acted = []

    # Derived values ---------------------------------------------------

    def to_call(self, actor: Actor) -> int:
        """Chips the actor needs to match the current bet."""
        return max(0, self.current_bet - self.bet(actor))

    @property
    def total_chips(self) -> int:
        return self.player_stack + self.cpu_stack + self.pot

    @property
    def big_blind_actor(self) -> Actor:
        return self.button.opponent

    @property
    def is_all_in(self) -> bool:
        """True once either side has no chips behind."""
        return self.player_stack == 0 or self.cpu_stack == 0

    def to_dict(self, viewer: Optional[Actor] = Actor.PLAYER) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            viewer: Whose hole cards are visible. The other side's cards
                stay hidden until the showdown; None reveals nothing.
        """
        reveal = self.phase == GamePhase.SHOWDOWN

        def visible(actor: Actor) -> Optional[List[Dict[str, Any]]]:
            if reveal or actor is viewer:
                return [c.to_dict() for c in self.cards(actor)]
            return None

        return {
            "phase": self.phase.value,
            "hand_number": self.hand_number,
            "blind_level": self.blind_level,
            "small_blind": self.small_blind,
            "big_blind": self.big_blind,
            "pot": self.pot,
            "current_bet": self.current_bet,
            "button": self.button.value,
            "to_act": self.to_act.value if self.to_act else None,
            "game_over": self.game_over,
            "winner": self.winner.value if self.winner else None,
            "board": [c.to_dict() for c in self.community_cards],
            "player": {
                "stack": self.player_stack,
                "bet": self.player_bet,
                "last_action": self.player_action.value if self.player_action else None,
                "cards": visible(Actor.PLAYER),
            },
            "cpu": {
                "stack": self.cpu_stack,
                "bet": self.cpu_bet,
                "last_action": self.cpu_action.value if self.cpu_action else None,
                "cards": visible(Actor.CPU),
            },
        }

    def __repr__(self) -> str:
        return (
            f"MatchState({self.phase.value}, player={self.player_stack}, "
            f"cpu={self.cpu_stack}, pot={self.pot}, bet={self.current_bet})"
        )
