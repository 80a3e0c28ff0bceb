#!/usr/bin/env python3
"""
Ladder Hold'em - Server Startup Script

Usage:
    python run.py [--host HOST] [--port PORT] [--reload] [--seed SEED]
                  [--cpu-delay SECONDS] [--tokens N] [--log-level LEVEL]
"""

import argparse
import os
import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Ladder Hold'em Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the first match (random if omitted)")
    parser.add_argument("--cpu-delay", type=float, default=0.5, help="Seconds before a CPU action is revealed")
    parser.add_argument("--tokens", type=int, default=10, help="Starting token balance")
    parser.add_argument(
        "--log-level", default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging level",
    )
    args = parser.parse_args()

    # Read by the server modules at import time, also in the reload worker
    if args.seed is not None:
        os.environ["LADDERHOLDEM_SEED"] = str(args.seed)
    os.environ["LADDERHOLDEM_CPU_DELAY"] = str(args.cpu_delay)
    os.environ["LADDERHOLDEM_TOKENS"] = str(args.tokens)
    os.environ["LADDERHOLDEM_LOG_LEVEL"] = args.log_level

    uvicorn.run(
        "ladderholdem.server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
