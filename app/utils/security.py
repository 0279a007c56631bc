"""
Security utilities for masking sensitive data in logs.

Provides functions to safely mask sensitive information like:
- Wallet addresses
- Transaction hashes
- Private keys
"""


def mask_address(address: str | None) -> str:
    """
    Mask wallet address for logging: 0x1234...5678

    Args:
        address: Wallet address to mask

    Returns:
        Masked address showing first 6 and last 4 characters

    Examples:
        >>> mask_address("0x1234567890abcdef1234567890abcdef12345678")
        '0x1234...5678'
        >>> mask_address(None)
        '***'
        >>> mask_address("short")
        '***'
    """
    if not address or len(address) < 10:
        return "***"
    return f"{address[:6]}...{address[-4:]}"


def mask_tx_hash(tx_hash: str | None) -> str:
    """
    Mask transaction hash for logging.

    Args:
        tx_hash: Transaction hash to mask

    Returns:
        Masked hash showing first 10 and last 6 characters

    Examples:
        >>> mask_tx_hash("0x1234567890abcdef1234567890abcdef1234567890abcdef1234567890abcdef")
        '0x12345678...abcdef'
    """
    if not tx_hash or len(tx_hash) < 16:
        return "***"
    return f"{tx_hash[:10]}...{tx_hash[-6:]}"


def mask_private_key(key: str | None) -> str:
    """
    Completely mask private key - never show any part.

    Args:
        key: Private key to mask

    Returns:
        Always returns '***MASKED***'

    Note:
        Private keys should NEVER appear in logs, even partially.
    """
    return "***MASKED***" if key else "***"


class SecretKey:
    """
    Holder for a disposable wallet's private key.

    The raw value is only reachable through reveal(); repr() and str()
    are masked so the key cannot leak through logging or debugging
    output of the records that carry it.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        if not value:
            raise ValueError("Private key is empty")
        self._value = value

    def reveal(self) -> str:
        """Return the raw key for signing."""
        return self._value

    def __repr__(self) -> str:
        return f"SecretKey({mask_private_key(self._value)})"

    def __str__(self) -> str:
        return mask_private_key(self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SecretKey):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)
