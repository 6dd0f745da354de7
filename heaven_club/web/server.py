"""
HTTP server lifecycle.

Starts and stops the API server.
"""

import asyncio

from aiohttp import web
from loguru import logger

from heaven_club.config.settings import settings
from heaven_club.web.app import create_app


async def start_server(
    app: web.Application,
    host: str | None = None,
    port: int | None = None,
) -> tuple[web.AppRunner, web.TCPSite]:
    """
    Start API server.

    Args:
        app: Application to serve
        host: Host to bind to
        port: Port to bind to

    Returns:
        Tuple of (AppRunner, TCPSite) for cleanup
    """
    host = host or settings.api_host
    port = port or settings.api_port

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()

    logger.info(f"Network API server started on {host}:{port}")
    logger.info(f"  - Leaders: http://{host}:{port}/network/leaders")
    logger.info(f"  - Health: http://{host}:{port}/health")

    return runner, site


async def stop_server(
    runner: web.AppRunner,
    timeout: int = 5,
) -> None:
    """
    Stop API server gracefully.

    Args:
        runner: AppRunner to cleanup
        timeout: Maximum time to wait for cleanup in seconds
    """
    logger.info("Stopping network API server...")
    try:
        await asyncio.wait_for(runner.cleanup(), timeout=timeout)
        logger.info("Network API server stopped successfully")
    except TimeoutError:
        logger.warning(f"Network API server cleanup timed out after {timeout}s")


async def run() -> None:
    """Serve until cancelled."""
    from heaven_club.config.database import engine

    runner, _ = await start_server(create_app())
    try:
        await asyncio.Event().wait()
    finally:
        await stop_server(runner)
        await engine.dispose()
