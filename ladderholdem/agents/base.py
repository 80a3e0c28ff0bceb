"""
Base Agent Interface for Ladder Hold'em.

Every seat that acts without the human behind it implements this interface.
Agents receive the engine's snapshot for their own seat (their hole cards
visible, the opponent's hidden) and the legal action list, and answer with
an action dict the engine dispatcher understands.

Usage:
    class MyAgent(BaseAgent):
        def observe(self, game_state):
            pass

        def act(self, game_state, legal_actions):
            return {"action": "CALL", "amount": 0}
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ladderholdem.core.rules import Actor


class BaseAgent(ABC):
    """
    Abstract base class for heads-up agents.

    Attributes:
        seat: Which side of the table this agent plays
        name: Human-readable name
    """

    def __init__(self, seat: Actor = Actor.CPU, name: Optional[str] = None):
        """
        Args:
            seat: Which side of the table this agent plays
            name: Optional human-readable name
        """
        self.seat = seat
        self.name = name or f"Agent-{seat.value}"

    def observe(self, game_state: Dict[str, Any]) -> None:
        """
        Observe the current game state.

        Called whenever the state changes. The default does nothing.
        """

    @abstractmethod
    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Choose an action given the current game state.

        Args:
            game_state: Snapshot from BettingEngine.snapshot(seat)
            legal_actions: List of legal action dicts, each containing:
                - type: FOLD, CHECK, CALL, RAISE or ALL_IN
                - amount: Required amount (for CALL)
                - min/max: Valid raise-to range (for RAISE)

        Returns:
            Action dictionary with:
                - action: Action type string
                - amount: Raise-to total for RAISE (optional, default 0)
        """

    def reset(self) -> None:
        """Reset internal state between matches."""

    def on_hand_start(self, hand_number: int) -> None:
        """Called when a new hand starts."""

    def on_hand_end(self, result: Dict[str, Any]) -> None:
        """Called when a hand ends with the final snapshot."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.seat.value}, {self.name})"


class CallAgent(BaseAgent):
    """
    Always checks or calls.

    A passive baseline used to drive the player seat in simulations.
    """

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        action_types = [a["type"] for a in legal_actions]

        if "CHECK" in action_types:
            return {"action": "CHECK", "amount": 0}

        call_action = next((a for a in legal_actions if a["type"] == "CALL"), None)
        if call_action:
            return {"action": "CALL", "amount": call_action.get("amount", 0)}

        return {"action": "FOLD", "amount": 0}
