"""Typed keys for objects stored on the aiohttp application."""

from aiohttp import web

from app.services.payment_ledger import PaymentLedger
from jobs.scheduler import PollingScheduler


LEDGER_KEY = web.AppKey("ledger", PaymentLedger)
SCHEDULER_KEY = web.AppKey("scheduler", PollingScheduler)
