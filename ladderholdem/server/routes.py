"""
HTTP API Routes for Ladder Hold'em.

Over HTTP the CPU answers synchronously: every player action returns the
CPU actions that followed it. The WebSocket endpoint reveals them with a
delay instead.
"""

from typing import Any, Dict, List
from fastapi import APIRouter, Body, HTTPException

from ladderholdem.core.card import Card
from ladderholdem.core.errors import InsufficientTokens
from ladderholdem.core.hand_strength import preview
from ladderholdem.core.rules import Actor, ActionType
from ladderholdem.ladder.match import LadderMatch
from ladderholdem.server.manager import LadderManager, NoActiveMatch, ladder_manager
from ladderholdem.server.schemas import (
    ActionRequest, ActionResultSchema, ActionSchema, HandStrengthRequest,
    HandStrengthSchema, LeaderboardEntrySchema, SelectOpponentRequest,
    StartMatchRequest,
)

router = APIRouter()


def get_manager() -> LadderManager:
    """Get the session manager."""
    return ladder_manager


def get_match() -> LadderMatch:
    """Get the current match or answer 404."""
    try:
        return get_manager().require_match()
    except NoActiveMatch as e:
        raise HTTPException(status_code=404, detail=str(e))


def _cpu_replies(manager: LadderManager) -> List[Dict[str, Any]]:
    return [ActionResultSchema.from_result(r).model_dump() for r in manager.play_cpu_turns()]


# ============= Match =============

@router.post("/match/start")
async def start_match(req: StartMatchRequest) -> Dict[str, Any]:
    """
    Pay the entry fee and start a match against the current opponent.

    Deals the first hand and lets the CPU act if it opens.
    """
    manager = get_manager()
    try:
        match = manager.start_match(req.seed, req.opponent_id)
    except InsufficientTokens as e:
        raise HTTPException(status_code=402, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    cpu_actions = _cpu_replies(manager)
    return {
        "success": True,
        "message": f"Match vs {match.profile.name} started",
        "opponent": match.profile.id,
        "seed": match.seed,
        "cpu_actions": cpu_actions,
        "state": manager.state(),
    }


@router.get("/match/state")
async def get_match_state() -> Dict[str, Any]:
    """Get the current hand from the player's seat."""
    get_match()
    return get_manager().state()


@router.get("/match/legal_actions")
async def get_legal_actions() -> Dict[str, Any]:
    """Actions the player may take right now."""
    match = get_match()
    actions = [ActionSchema(**a).model_dump(exclude_none=True)
               for a in match.engine.legal_actions(Actor.PLAYER)]
    return {"legal_actions": actions}


@router.post("/match/action")
async def take_action(req: ActionRequest) -> Dict[str, Any]:
    """
    Take a player action.

    Returns the result, the CPU actions that followed and the new state.
    """
    get_match()
    manager = get_manager()

    try:
        action_type = ActionType(req.action_type.upper())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid action type: {req.action_type}")

    result = manager.player_action(action_type, req.amount or 0)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.message)

    return {
        **ActionResultSchema.from_result(result).model_dump(),
        "cpu_actions": _cpu_replies(manager),
        "state": manager.state(),
    }


@router.post("/match/next_hand")
async def next_hand() -> Dict[str, Any]:
    """Deal the next hand of the running match."""
    get_match()
    manager = get_manager()
    try:
        match = manager.next_hand()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "success": True,
        "message": f"Hand #{match.state.hand_number} started",
        "cpu_actions": _cpu_replies(manager),
        "state": manager.state(),
    }


# ============= Ladder =============

@router.get("/ladder")
async def get_ladder() -> Dict[str, Any]:
    """Token balance, opponents with lock state, and the leaderboard."""
    progression = get_manager().progression
    return {
        **progression.overview(),
        "leaderboard": [LeaderboardEntrySchema(**e).model_dump() for e in progression.leaderboard()],
    }


@router.post("/ladder/opponent")
async def select_opponent(req: SelectOpponentRequest) -> Dict[str, Any]:
    """Switch to another unlocked opponent."""
    manager = get_manager()
    if manager.match is not None and not manager.match.is_over:
        raise HTTPException(status_code=400, detail="Cannot switch opponents mid-match")
    try:
        manager.progression.select_opponent(req.opponent_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "current_opponent": req.opponent_id}


@router.get("/ladder/export")
async def export_progress() -> Dict[str, Any]:
    """Progression snapshot for saving."""
    return get_manager().progression.to_snapshot()


@router.post("/ladder/import")
async def import_progress(snapshot: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """
    Restore a saved progression.

    A corrupted snapshot is discarded and the ladder starts fresh.
    """
    manager = get_manager()
    manager.import_progress(snapshot)
    return {"success": True, "progress": manager.progression.to_snapshot()}


# ============= Misc =============

@router.post("/hand_strength")
async def hand_strength(req: HandStrengthRequest) -> Dict[str, Any]:
    """Preview a starting hand from the strength table."""
    try:
        cards = [Card.from_string(s) for s in req.cards]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if cards[0] == cards[1]:
        raise HTTPException(status_code=400, detail="Duplicate card")
    return HandStrengthSchema(**preview(cards)).model_dump()


@router.post("/reset")
async def reset() -> Dict[str, Any]:
    """Start the ladder over."""
    get_manager().reset()
    return {"success": True, "message": "Ladder reset"}
