"""
Disposable address generation.

Each payment receives its own freshly generated key pair.
"""

from eth_account import Account
from eth_utils import encode_hex, to_checksum_address
from loguru import logger

from app.utils.security import SecretKey, mask_address


class AddressMinter:
    """Generates receiving wallets for new payments."""

    def mint(self) -> tuple[str, SecretKey]:
        """
        Generate a new key pair.

        Account.create() draws its entropy from os.urandom. Failures are
        not retried; they abort the create request.

        Returns:
            Tuple of (checksummed address, private key holder)
        """
        account = Account.create()
        try:
            address = to_checksum_address(account.address)
            private_key = SecretKey(encode_hex(account.key))
        finally:
            del account

        logger.debug(f"Minted disposable address {mask_address(address)}")
        return address, private_key
