"""Run the release service with uvicorn.

    pnrelease-server --migrate --port 8000
"""

import argparse
import asyncio
from collections.abc import Sequence

import uvicorn

from src.pnrelease.core.config import get_settings
from src.pnrelease.core.db import run_migrations_async
from src.pnrelease.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the HTTP server."""
    parser = argparse.ArgumentParser(description="Part number release service")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    parser.add_argument(
        "--migrate",
        action="store_true",
        help="Upgrade the database to the latest revision before serving",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> uvicorn.Config:
    settings = get_settings()
    return uvicorn.Config(
        "src.pnrelease.main:app",
        host=args.host,
        port=args.port,
        log_level=settings.log_level.lower(),
        # Let lifespan drain in-flight requests first
        timeout_graceful_shutdown=settings.shutdown_grace_period + 5,
    )


async def serve(args: argparse.Namespace) -> None:
    settings = get_settings()
    setup_logging(settings.log_level, json_logs=not settings.debug)

    if args.migrate:
        logger.info("Running database migrations")
        await run_migrations_async()

    server = uvicorn.Server(build_config(args))
    logger.info(f"Starting {settings.app_name} on {args.host}:{args.port}")
    await server.serve()


def main() -> None:
    asyncio.run(serve(parse_args()))


if __name__ == "__main__":
    main()
