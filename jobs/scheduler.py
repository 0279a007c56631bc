"""
Polling scheduler.

Drives the payment monitor on a fixed interval using APScheduler.
A tick never starts while the previous one is still running.
"""

import asyncio
from datetime import UTC, datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loguru import logger

from app.config.constants import MIN_POLLING_INTERVAL_MS, PAYMENT_MONITOR_JOB_ID
from app.services.blockchain.balance_oracle import BalanceOracle
from app.services.blockchain.fund_forwarder import FundForwarder
from app.services.payment_ledger import PaymentLedger
from jobs.tasks.payment_monitor import TickStats, check_pending_payments


class PollingScheduler:
    """
    Periodic payment monitor.

    Features:
    - Fixed interval (milliseconds, minimum 5000)
    - Single-flight ticks: overlapping runs are skipped
    - stop() halts future ticks without awaiting one in flight
    """

    def __init__(
        self,
        ledger: PaymentLedger,
        oracle: BalanceOracle,
        forwarder: FundForwarder,
        interval_ms: int,
    ) -> None:
        """
        Initialize polling scheduler.

        Args:
            ledger: Payment registry
            oracle: Balance lookup client
            forwarder: Sweep executor
            interval_ms: Tick interval in milliseconds

        Raises:
            ValueError: If interval_ms is below the minimum
        """
        if interval_ms < MIN_POLLING_INTERVAL_MS:
            raise ValueError(
                f"Polling interval must be at least {MIN_POLLING_INTERVAL_MS} ms"
            )

        self.ledger = ledger
        self.oracle = oracle
        self.forwarder = forwarder
        self.interval_ms = interval_ms

        self._scheduler: AsyncIOScheduler | None = None
        self._tick_lock = asyncio.Lock()
        self.last_tick_at: datetime | None = None
        self.last_tick_stats: TickStats | None = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    @property
    def tick_in_progress(self) -> bool:
        return self._tick_lock.locked()

    def start(self) -> None:
        """Schedule ticks. The first tick fires one interval from now."""
        if self.running:
            logger.warning("Polling scheduler already running")
            return

        scheduler = AsyncIOScheduler(timezone=UTC)
        scheduler.add_job(
            self.run_tick,
            "interval",
            seconds=self.interval_ms / 1000,
            id=PAYMENT_MONITOR_JOB_ID,
            name="Payment monitor",
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        self._scheduler = scheduler

        logger.info(f"Polling scheduler started (interval={self.interval_ms} ms)")

    def stop(self) -> None:
        """Halt future ticks. A tick already running is left to finish."""
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Polling scheduler stopped")

    def next_run_time(self) -> datetime | None:
        if not self.running:
            return None
        job = self._scheduler.get_job(PAYMENT_MONITOR_JOB_ID)
        return job.next_run_time if job else None

    async def run_tick(self) -> TickStats | None:
        """
        Run one monitoring pass.

        Returns:
            TickStats, or None if a previous tick was still running
        """
        if self._tick_lock.locked():
            logger.warning("Previous payment check still running, skipping tick")
            return None

        async with self._tick_lock:
            try:
                stats = await check_pending_payments(
                    self.ledger, self.oracle, self.forwarder
                )
            except Exception as e:
                logger.exception(f"Payment check tick failed: {e}")
                stats = TickStats(errors=1)

            self.last_tick_at = datetime.now(UTC)
            self.last_tick_stats = stats
            return stats
