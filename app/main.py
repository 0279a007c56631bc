"""
Payment processor entry point.

Loads settings, wires services, serves the HTTP API and runs the polling
scheduler until SIGTERM or SIGINT.
"""

import asyncio
import signal
import sys

from loguru import logger

from app.api.server import create_app, start_api_server
from app.config.settings import load_settings
from app.initialization.logging import setup_logging
from app.initialization.services import initialize_all_services
from app.initialization.shutdown import shutdown_handler


async def main() -> None:
    """Initialize and run the payment processor."""
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_file)

    services = initialize_all_services(settings)
    app = create_app(services.ledger, services.scheduler)

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows event loops do not support signal handlers
            signal.signal(sig, lambda *_: loop.call_soon_threadsafe(stop_event.set))

    runner = None
    try:
        runner = await start_api_server(app, settings.host, settings.port)
        services.scheduler.start()
        await stop_event.wait()
    finally:
        await shutdown_handler(services, runner)


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Payment processor stopped by user (KeyboardInterrupt)")
    except Exception as e:
        logger.exception(f"Payment processor crashed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
