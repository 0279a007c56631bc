"""
Fund Forwarder.

Sweeps the balance of a disposable payment address into the master
address. A sweep is attempted once; the caller decides what an outcome
means for the payment.
"""

import asyncio
from dataclasses import dataclass

from eth_account import Account
from eth_utils import from_wei, to_checksum_address, to_hex
from loguru import logger
from web3 import AsyncWeb3

from app.config.constants import BLOCKCHAIN_TIMEOUT
from app.models.payment import Payment
from app.utils.exceptions import FeeUnavailableError
from app.utils.security import mask_address, mask_tx_hash
from app.utils.validation import wei_to_eth

from .fee_estimator import FeeEstimator


FEE_UNAVAILABLE = "fee-unavailable"


@dataclass(frozen=True)
class Forwarded:
    """Sweep confirmed on chain."""

    tx_hash: str


@dataclass(frozen=True)
class InsufficientForFee:
    """Balance does not cover the network fee; nothing was sent."""

    balance: int
    fee: int


@dataclass(frozen=True)
class Failed:
    """Sweep could not be completed."""

    reason: str
    tx_hash: str | None = None


ForwardOutcome = Forwarded | InsufficientForFee | Failed


class FundForwarder:
    """
    Builds, signs, submits and confirms sweep transactions.

    Features:
    - Fee-aware amount calculation (balance minus gas budget)
    - Legacy gasPrice transactions with a fixed gas limit
    - Bounded wait for the receipt
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        fee_estimator: FeeEstimator,
        master_address: str,
        gas_limit: int,
        confirmation_timeout: float = 120.0,
    ) -> None:
        """
        Initialize fund forwarder.

        Args:
            web3: AsyncWeb3 instance
            fee_estimator: Gas price source
            master_address: Sweep destination
            gas_limit: Fixed gas budget per sweep
            confirmation_timeout: Seconds to wait for the receipt
        """
        self.web3 = web3
        self.fee_estimator = fee_estimator
        self.master_address = to_checksum_address(master_address)
        self.gas_limit = gas_limit
        self.confirmation_timeout = confirmation_timeout

    async def forward(self, payment: Payment, balance: int) -> ForwardOutcome:
        """
        Sweep balance (minus fee) from the payment address.

        Args:
            payment: Payment whose disposable key signs the sweep
            balance: Current balance of the payment address in wei

        Returns:
            Forwarded, InsufficientForFee or Failed
        """
        try:
            quote = await self.fee_estimator.estimate_fee(self.gas_limit)
        except FeeUnavailableError as e:
            logger.error(f"Cannot forward payment {payment.id}: {e}")
            return Failed(FEE_UNAVAILABLE)

        amount_to_send = quote.sweepable(balance)

        if amount_to_send <= 0:
            logger.error(
                f"Insufficient ETH for gas fees. "
                f"Balance: {wei_to_eth(balance)}, "
                f"Gas cost: {wei_to_eth(quote.total_cost)}"
            )
            return InsufficientForFee(balance=balance, fee=quote.total_cost)

        tx_hash_hex: str | None = None
        try:
            tx_hash_hex = await self._submit(payment, amount_to_send, quote.rate)

            logger.info(
                f"Transaction sent: {mask_tx_hash(tx_hash_hex)}\n"
                f"  From: {mask_address(payment.address)}\n"
                f"  Amount (wei): {amount_to_send}\n"
                f"  Gas: {self.gas_limit}\n"
                f"  Gas Price: {from_wei(quote.rate, 'gwei')} Gwei"
            )

            receipt = await self.web3.eth.wait_for_transaction_receipt(
                tx_hash_hex,
                timeout=self.confirmation_timeout,
            )
        except Exception as e:
            logger.error(f"Error forwarding payment {payment.id}: {e}")
            return Failed(str(e) or e.__class__.__name__, tx_hash=tx_hash_hex)

        if receipt["status"] == 1:
            logger.success(
                f"Payment {payment.id} forwarded successfully. TX: {tx_hash_hex}"
            )
            return Forwarded(tx_hash_hex)

        logger.error(f"Transaction failed: {tx_hash_hex}")
        return Failed("transaction reverted", tx_hash=tx_hash_hex)

    async def _submit(self, payment: Payment, amount: int, gas_price: int) -> str:
        """Sign and broadcast the sweep; returns the 0x-prefixed hash."""
        sender = to_checksum_address(payment.address)

        nonce = await asyncio.wait_for(
            self.web3.eth.get_transaction_count(sender, "pending"),
            timeout=BLOCKCHAIN_TIMEOUT,
        )
        chain_id = await asyncio.wait_for(
            self.web3.eth.chain_id,
            timeout=BLOCKCHAIN_TIMEOUT,
        )

        transaction = {
            "to": self.master_address,
            "value": amount,
            "gas": self.gas_limit,
            "gasPrice": gas_price,
            "nonce": nonce,
            "chainId": chain_id,
        }

        # Create Account only for signing, then drop it
        account = Account.from_key(payment.private_key.reveal())
        try:
            if account.address != sender:
                raise ValueError("Private key does not match payment address")
            signed_tx = account.sign_transaction(transaction)
        finally:
            del account

        tx_hash = await asyncio.wait_for(
            self.web3.eth.send_raw_transaction(signed_tx.raw_transaction),
            timeout=BLOCKCHAIN_TIMEOUT,
        )
        return to_hex(tx_hash)


__all__ = [
    "Failed",
    "Forwarded",
    "ForwardOutcome",
    "FundForwarder",
    "InsufficientForFee",
]
