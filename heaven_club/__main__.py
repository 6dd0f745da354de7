"""
Service entry point.

Run with ``python -m heaven_club``.
"""

import asyncio

from loguru import logger

from heaven_club.utils.logging import setup_logging
from heaven_club.web.server import run


def main() -> None:
    """Configure logging and serve the HTTP API."""
    setup_logging()
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Shutdown requested")


if __name__ == "__main__":
    main()
