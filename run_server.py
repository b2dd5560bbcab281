#!/usr/bin/env python3
"""Launch the Fetch Browser HTTP API with uvicorn."""

import argparse
import os
import sys

import uvicorn
from dotenv import load_dotenv

load_dotenv()

from config.config import load_config  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Fetch Browser HTTP API")
    parser.add_argument("--host", default=os.getenv("FETCH_HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.getenv("FETCH_PORT", "8000")))
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args(argv)

    # Fail before binding the port if FETCH_* settings are invalid
    try:
        load_config()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    uvicorn.run(
        "server.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
