"""
Initialization - Shutdown Module.

Stops the scheduler, the API server and outgoing HTTP sessions.
"""

from aiohttp import web
from loguru import logger

from app.api.server import stop_api_server
from app.initialization.services import Services
from app.services.blockchain import close_web3


async def shutdown_handler(services: Services, runner: web.AppRunner | None) -> None:
    """
    Handle graceful shutdown.

    The scheduler is stopped first so no new tick starts. A tick that is
    already running is not awaited.
    """
    logger.info("Shutting down payment processor")

    try:
        services.scheduler.stop()
    except Exception as e:
        logger.warning(f"Error stopping scheduler: {e}")

    if runner is not None:
        await stop_api_server(runner)

    try:
        await services.oracle.close()
    except Exception as e:
        logger.warning(f"Error closing balance oracle session: {e}")

    await close_web3(services.web3)

    logger.info("Graceful shutdown complete")
