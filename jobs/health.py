"""
Health check endpoints for scheduler monitoring.

Mounted on the payment API application.
"""

from aiohttp import web
from loguru import logger

from app.api.keys import LEDGER_KEY, SCHEDULER_KEY


async def health_handler(request: web.Request) -> web.Response:
    """
    Health check endpoint.

    Returns:
        JSON response with scheduler status and payment counts
    """
    scheduler = request.app.get(SCHEDULER_KEY)
    if scheduler is None:
        return web.json_response(
            {
                "status": "unhealthy",
                "error": "Scheduler not initialized",
            },
            status=503,
        )

    try:
        is_running = scheduler.running
        next_run = scheduler.next_run_time()
        last_stats = scheduler.last_tick_stats

        return web.json_response(
            {
                "status": "healthy" if is_running else "stopped",
                "scheduler_running": is_running,
                "tick_in_progress": scheduler.tick_in_progress,
                "polling_interval_ms": scheduler.interval_ms,
                "next_run_time": next_run.isoformat() if next_run else None,
                "last_tick_at": (
                    scheduler.last_tick_at.isoformat()
                    if scheduler.last_tick_at
                    else None
                ),
                "last_tick": last_stats.as_dict() if last_stats else None,
                "payments": request.app[LEDGER_KEY].count_by_status(),
            }
        )
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return web.json_response(
            {
                "status": "unhealthy",
                "error": str(e),
            },
            status=503,
        )


async def readiness_handler(request: web.Request) -> web.Response:
    """
    Readiness check endpoint.

    Returns:
        JSON response indicating if the scheduler is polling
    """
    scheduler = request.app.get(SCHEDULER_KEY)
    if scheduler is None or not scheduler.running:
        return web.json_response(
            {
                "status": "not_ready",
                "ready": False,
            },
            status=503,
        )

    return web.json_response(
        {
            "status": "ready",
            "ready": True,
        }
    )


async def liveness_handler(request: web.Request) -> web.Response:
    """
    Liveness check endpoint.

    Returns:
        JSON response indicating if the process is alive
    """
    return web.json_response(
        {
            "status": "alive",
            "alive": True,
        }
    )


def register_health_routes(app: web.Application) -> None:
    """Add /health, /readiness and /liveness to the application."""
    app.router.add_get("/health", health_handler)
    app.router.add_get("/readiness", readiness_handler)
    app.router.add_get("/liveness", liveness_handler)
