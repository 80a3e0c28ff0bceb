"""
Ladder Hold'em Server - FastAPI + WebSocket host layer
"""

from ladderholdem.server.app import app, create_app
from ladderholdem.server.manager import LadderManager, ladder_manager

__all__ = ["app", "create_app", "LadderManager", "ladder_manager"]
