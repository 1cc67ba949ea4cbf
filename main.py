"""
Application entry point for the users and posts resource API.

Usage:
    # Run FastAPI server (production - uses Granian)
    python main.py api

    # Run FastAPI server (development - uses Uvicorn with hot-reload)
    python main.py api --dev

The listening port is taken from PORT, then SERVER__PORT, then 8080.
"""

from __future__ import annotations

import argparse
import os
import sys

from resource_api.config import Settings


def resolve_port(settings: Settings) -> int:
    """Return the PORT override when set, else the configured port."""
    return int(os.getenv("PORT") or settings.server.port)


def run_api_granian() -> int:
    """Run the FastAPI application with Granian (production)."""
    try:
        from granian import Granian
        from granian.constants import Interfaces

        from resource_api.config import get_settings

        settings = get_settings()

        host = settings.server.host
        port = resolve_port(settings)

        print(
            f"Starting Granian server on {host}:{port} "
            f"with {settings.server.workers} worker(s)..."
        )

        server = Granian(
            target="resource_api.api.main:app",
            address=host,
            port=port,
            workers=settings.server.workers,
            backlog=settings.server.backlog,
            interface=Interfaces.ASGI,
            log_level="info" if not settings.app.debug else "debug",
        )
        server.serve()
        return 0
    except ImportError as exc:
        print(f"Error: {exc}. Install with: pip install '.[api]'", file=sys.stderr)
        return 1


def run_api_uvicorn() -> int:
    """Run the FastAPI application with Uvicorn (development, with hot-reload)."""
    try:
        import uvicorn

        from resource_api.config import get_settings

        settings = get_settings()

        host = settings.server.host
        port = resolve_port(settings)

        print(f"Starting Uvicorn dev server on {host}:{port} with hot-reload...")

        uvicorn.run(
            "resource_api.api.main:app",
            host=host,
            port=port,
            reload=True,
            log_level="debug" if settings.app.debug else "info",
        )
        return 0
    except ImportError as exc:
        print(
            f"Error: {exc}. Install with: pip install '.[api-dev]'",
            file=sys.stderr,
        )
        return 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point with subcommand routing."""
    parser = argparse.ArgumentParser(
        description="Users and Posts Resource API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    api_parser = subparsers.add_parser("api", help="Run FastAPI server")
    api_parser.add_argument(
        "--dev",
        action="store_true",
        help="Use Uvicorn with hot-reload (development mode)",
    )

    args = parser.parse_args(argv)

    if args.command == "api":
        if args.dev:
            return run_api_uvicorn()
        return run_api_granian()

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
