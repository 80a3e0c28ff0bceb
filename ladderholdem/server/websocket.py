"""
WebSocket handling for real-time play.

The engine decides CPU actions synchronously; this layer only decides when
the player gets to see them. After each player message, pending CPU actions
are revealed one by one as ``cpu_action`` messages, each after the
configured delay, from an asyncio task.

Protocol:
    client -> {"type": "start_match", "seed": 42, "opponent_id": "theNorm"}
    client -> {"type": "action", "action": "CALL", "amount": 0}
    client -> {"type": "next_hand"}
    client -> {"type": "get_state"}
    server -> {"type": "state" | "match_started" | "action_result" |
               "hand_started" | "cpu_action" | "error", ...}
"""

from __future__ import annotations
from typing import Any, Dict, Optional
from dataclasses import dataclass
import asyncio
import logging

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from ladderholdem.core.errors import InsufficientTokens
from ladderholdem.core.rules import ActionType
from ladderholdem.server.manager import LadderManager, NoActiveMatch, ladder_manager
from ladderholdem.server.schemas import (
    ActionResultSchema, WSActionMessage, WSStartMatchMessage,
)


logger = logging.getLogger(__name__)


@dataclass
class Connection:
    """A connected client and its pending CPU reveal."""
    websocket: WebSocket
    manager: LadderManager
    cpu_task: Optional[asyncio.Task] = None

    def schedule_cpu(self) -> None:
        """Start revealing CPU actions unless a reveal is already running."""
        if self.cpu_task is not None and not self.cpu_task.done():
            return
        if self.manager.cpu_to_act():
            self.cpu_task = asyncio.create_task(self._reveal_cpu_actions())

    async def _reveal_cpu_actions(self) -> None:
        while self.manager.cpu_to_act():
            await asyncio.sleep(self.manager.cpu_delay)
            result = self.manager.play_cpu_turn()
            if result is None:
                return
            await self.websocket.send_json({
                "type": "cpu_action",
                **ActionResultSchema.from_result(result).model_dump(),
                "state": self.manager.state(),
            })

    def cancel(self) -> None:
        if self.cpu_task is not None and not self.cpu_task.done():
            self.cpu_task.cancel()


async def handle_message(manager: LadderManager, message: Dict[str, Any]) -> Dict[str, Any]:
    """
    Handle one client message.

    Args:
        manager: Session the message applies to
        message: The message dict with 'type' and optional data

    Returns:
        Response dict
    """
    msg_type = message.get("type", "")

    try:
        if msg_type == "start_match":
            return _handle_start_match(manager, message)
        elif msg_type == "action":
            return _handle_action(manager, message)
        elif msg_type == "next_hand":
            match = manager.next_hand()
            return {"type": "hand_started", "hand_number": match.state.hand_number, "state": manager.state()}
        elif msg_type == "get_state":
            return {"type": "state", **manager.state()}
        else:
            return {"type": "error", "message": f"Unknown message type: {msg_type}"}
    except NoActiveMatch as e:
        return {"type": "error", "message": str(e)}
    except InsufficientTokens as e:
        return {"type": "error", "message": str(e), "code": 402}
    except (ValueError, ValidationError) as e:
        return {"type": "error", "message": str(e)}


def _handle_start_match(manager: LadderManager, message: Dict[str, Any]) -> Dict[str, Any]:
    req = WSStartMatchMessage.model_validate(message)
    match = manager.start_match(req.seed, req.opponent_id)
    return {
        "type": "match_started",
        "opponent": match.profile.id,
        "seed": match.seed,
        "state": manager.state(),
    }


def _handle_action(manager: LadderManager, message: Dict[str, Any]) -> Dict[str, Any]:
    req = WSActionMessage.model_validate(message)
    try:
        action_type = ActionType(req.action.upper())
    except ValueError:
        return {"type": "error", "message": f"Invalid action: {req.action}"}

    result = manager.player_action(action_type, req.amount or 0)
    if not result.success:
        return {"type": "error", "message": result.message}

    return {
        "type": "action_result",
        **ActionResultSchema.from_result(result).model_dump(),
        "state": manager.state(),
    }


async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket endpoint for a single player.

    Sends the current state on connect (or an empty ladder view when no match
    exists yet), then answers each message and reveals CPU actions.
    """
    await websocket.accept()
    connection = Connection(websocket, ladder_manager)
    logger.info("Player connected")

    try:
        if ladder_manager.match is not None:
            await websocket.send_json({"type": "state", **ladder_manager.state()})
        else:
            await websocket.send_json({"type": "state", "phase": None, "tokens": ladder_manager.progression.tokens})
        connection.schedule_cpu()

        while True:
            message = await websocket.receive_json()
            response = await handle_message(ladder_manager, message)
            await websocket.send_json(response)
            connection.schedule_cpu()

    except WebSocketDisconnect:
        logger.info("WebSocket disconnected")
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
    finally:
        connection.cancel()
