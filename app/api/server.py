"""
HTTP API server.

Builds the aiohttp application and manages its runner.
"""

import asyncio

from aiohttp import web
from loguru import logger

from app.api.keys import LEDGER_KEY, SCHEDULER_KEY
from app.api.routes import register_payment_routes
from app.config.constants import API_SHUTDOWN_TIMEOUT
from app.services.payment_ledger import PaymentLedger
from jobs.health import register_health_routes
from jobs.scheduler import PollingScheduler


def create_app(
    ledger: PaymentLedger,
    scheduler: PollingScheduler | None = None,
) -> web.Application:
    """
    Create the API application.

    Args:
        ledger: Payment registry backing the endpoints
        scheduler: Polling scheduler reported by the health probes

    Returns:
        Configured aiohttp application
    """
    app = web.Application()
    app[LEDGER_KEY] = ledger
    if scheduler is not None:
        app[SCHEDULER_KEY] = scheduler

    register_payment_routes(app)
    register_health_routes(app)
    return app


async def start_api_server(
    app: web.Application,
    host: str = "0.0.0.0",
    port: int = 3000,
) -> web.AppRunner:
    """
    Start serving the application.

    Returns:
        AppRunner for cleanup
    """
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()

    logger.info(f"Ethereum Payment Processor running on {host}:{port}")
    return runner


async def stop_api_server(
    runner: web.AppRunner,
    timeout: int = API_SHUTDOWN_TIMEOUT,
) -> None:
    """
    Stop the API server gracefully.

    Args:
        runner: AppRunner to cleanup
        timeout: Maximum time to wait for cleanup in seconds
    """
    logger.info("Stopping API server...")
    try:
        await asyncio.wait_for(runner.cleanup(), timeout=timeout)
        logger.info("API server stopped successfully")
    except TimeoutError:
        logger.warning(f"API server cleanup timed out after {timeout}s")
    except Exception as e:
        logger.error(f"Error stopping API server: {e}")
