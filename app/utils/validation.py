"""Validation and conversion helpers for addresses and amounts."""

from decimal import Decimal, InvalidOperation

from web3 import Web3


def validate_eth_address(address: str) -> tuple[bool, str | None]:
    """
    Validate an Ethereum address.

    Args:
        address: Wallet address to validate

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_eth_address("0x1234567890123456789012345678901234567890")
        (True, None)
        >>> validate_eth_address("invalid")
        (False, 'Address must start with 0x')
    """
    if not address or not isinstance(address, str):
        return False, "Address is empty"

    address = address.strip()

    if not address.startswith("0x"):
        return False, "Address must start with 0x"

    if len(address) != 42:
        return False, "Address must be 42 characters"

    try:
        int(address[2:], 16)
    except ValueError:
        return False, "Invalid address format"

    return True, None


def parse_positive_amount(value: object) -> Decimal | None:
    """
    Parse a caller-supplied amount.

    Accepts strings and numbers; returns None for anything that is not a
    finite number greater than zero.
    """
    if isinstance(value, bool) or value is None:
        return None
    if not isinstance(value, str | int | float | Decimal):
        return None

    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None

    if not amount.is_finite() or amount <= 0:
        return None
    return amount


def eth_to_wei(amount: str | Decimal) -> int:
    """Convert an ETH decimal amount to wei without float rounding."""
    return int(Web3.to_wei(Decimal(str(amount)), "ether"))


def wei_to_eth(amount_wei: int) -> Decimal:
    """Convert wei to ETH for display."""
    return Decimal(str(Web3.from_wei(amount_wei, "ether")))
