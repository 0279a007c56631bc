"""
Initialization - Services Module.

Builds the payment lifecycle components from settings.
"""

from dataclasses import dataclass

from loguru import logger
from web3 import AsyncWeb3

from app.config.settings import Settings
from app.services.blockchain import (
    AddressMinter,
    BalanceOracle,
    FeeEstimator,
    FundForwarder,
    create_web3,
)
from app.services.payment_ledger import PaymentLedger
from app.utils.security import mask_address
from jobs.scheduler import PollingScheduler


@dataclass
class Services:
    """Wired application components."""

    web3: AsyncWeb3
    ledger: PaymentLedger
    oracle: BalanceOracle
    fee_estimator: FeeEstimator
    forwarder: FundForwarder
    scheduler: PollingScheduler


def initialize_all_services(settings: Settings) -> Services:
    """Create every component; nothing is started here."""
    web3 = create_web3(settings.rpc_url)

    ledger = PaymentLedger(AddressMinter())
    oracle = BalanceOracle(
        api_url=settings.etherscan_api_url,
        api_key=settings.etherscan_api_key,
        timeout=settings.balance_request_timeout,
    )
    fee_estimator = FeeEstimator(web3)
    forwarder = FundForwarder(
        web3=web3,
        fee_estimator=fee_estimator,
        master_address=settings.master_address,
        gas_limit=settings.gas_limit,
        confirmation_timeout=settings.confirmation_timeout,
    )
    scheduler = PollingScheduler(
        ledger=ledger,
        oracle=oracle,
        forwarder=forwarder,
        interval_ms=settings.polling_interval,
    )

    logger.info(
        f"Services initialized: master={mask_address(settings.master_address)}, "
        f"gas_limit={settings.gas_limit}, "
        f"polling_interval={settings.polling_interval} ms"
    )

    return Services(
        web3=web3,
        ledger=ledger,
        oracle=oracle,
        fee_estimator=fee_estimator,
        forwarder=forwarder,
        scheduler=scheduler,
    )
