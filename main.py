#!/usr/bin/env python3
"""
userauth -- Email/password sign-up, login and password change service.

Usage:
  python main.py
  python main.py --port 8080
  python main.py --host 0.0.0.0 --reload

Environment variables (or .env):
  SECRET_KEY     Required unless DEBUG=true. Signs the dashboard session cookie.
  DATABASE_URL   SQLAlchemy URL. Defaults to a SQLite file in auth/.
  BCRYPT_ROUNDS  bcrypt cost factor (default 10).
"""

import argparse

import uvicorn

from core.config import get_settings


def _build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="userauth",
        description="Run the userauth HTTP server.",
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development only)")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    uvicorn.run("asgi:app", host=args.host, port=args.port, reload=args.reload, proxy_headers=True)


if __name__ == "__main__":
    main()
