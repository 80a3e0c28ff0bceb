"""
FastAPI application for Ladder Hold'em.

Wires the match/ladder router, the ``/ws`` endpoint and CORS into one app.
Logging is configured here once; ``run.py`` picks the level through
LADDERHOLDEM_LOG_LEVEL.
"""

import logging
import os
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ladderholdem import __version__
from ladderholdem.server.manager import NoActiveMatch, ladder_manager
from ladderholdem.server.routes import router
from ladderholdem.server.websocket import websocket_endpoint

ENV_LOG_LEVEL = "LADDERHOLDEM_LOG_LEVEL"

logging.basicConfig(
    level=os.environ.get(ENV_LOG_LEVEL, "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def no_active_match_handler(request: Request, exc: NoActiveMatch) -> JSONResponse:
    """Any route touching the match before one is started answers 404."""
    return JSONResponse(status_code=404, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Build the application around the shared ``ladder_manager``."""
    app = FastAPI(
        title="Ladder Hold'em",
        description="Heads-up Hold'em against a ladder of CPU opponents",
        version=__version__,
    )

    # Browser clients are served from elsewhere during development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(NoActiveMatch, no_active_match_handler)
    app.include_router(router)
    app.websocket("/ws")(websocket_endpoint)

    logger.info(
        f"Ladder Hold'em {__version__}: seed={ladder_manager.seed}, "
        f"cpu_delay={ladder_manager.cpu_delay}s, tokens={ladder_manager.starting_tokens}"
    )
    return app


app = create_app()
