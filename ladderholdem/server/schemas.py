"""
Pydantic schemas for API request/response validation.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from ladderholdem.core.engine import ActionResult


# ============= Request Schemas =============

class StartMatchRequest(BaseModel):
    """Request to start a ladder match."""
    seed: Optional[int] = Field(default=None, ge=0, description="Match seed, stored seed when omitted")
    opponent_id: Optional[str] = Field(default=None, description="Switch to this unlocked opponent first")


class ActionRequest(BaseModel):
    """Request to take a game action."""
    action_type: str = Field(..., description="Action type: FOLD, CHECK, CALL, RAISE, ALL_IN")
    amount: Optional[int] = Field(default=0, ge=0, description="Raise-to total for RAISE")


class SelectOpponentRequest(BaseModel):
    """Request to change the current opponent."""
    opponent_id: str


class HandStrengthRequest(BaseModel):
    """Two hole cards, e.g. ["As", "Kd"] or ["A♠", "K♦"]."""
    cards: List[str] = Field(..., min_length=2, max_length=2)


# ============= Response Schemas =============

class ActionResultSchema(BaseModel):
    """Result of an action."""
    success: bool
    message: str
    actor: Optional[str] = None
    action_type: Optional[str] = None
    amount: int = 0

    @classmethod
    def from_result(cls, result: ActionResult) -> "ActionResultSchema":
        return cls(
            success=result.success,
            message=result.message,
            actor=result.actor.value if result.actor else None,
            action_type=result.action_type.value if result.action_type else None,
            amount=result.amount,
        )


class ActionSchema(BaseModel):
    """Available action."""
    type: str
    amount: Optional[int] = None
    min: Optional[int] = None
    max: Optional[int] = None


class HandStrengthSchema(BaseModel):
    """Starting-hand preview."""
    notation: str
    win_probability: float
    multiplier: float
    strength: int
    listed: bool


class LeaderboardEntrySchema(BaseModel):
    name: str
    portrait: str
    tokens_won: int
    win_streak: int
    tier: int
    is_player: bool


# ============= WebSocket Message Schemas =============

class WSMessage(BaseModel):
    """Base WebSocket message."""
    type: str
    data: Optional[Dict[str, Any]] = None


class WSActionMessage(BaseModel):
    """WebSocket action message."""
    type: str = "action"
    action: str  # FOLD, CHECK, CALL, RAISE, ALL_IN
    amount: Optional[int] = 0


class WSStartMatchMessage(BaseModel):
    """WebSocket match start message."""
    type: str = "start_match"
    seed: Optional[int] = Field(default=None, ge=0)
    opponent_id: Optional[str] = None
