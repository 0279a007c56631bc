"""
Balance Oracle.

Looks up native balances through an Etherscan compatible HTTP API.
Lookups are best effort: every outcome is reported as a BalanceResult and
nothing here changes payment state.
"""

from dataclasses import dataclass
from typing import Any

import aiohttp
from loguru import logger

from app.config.constants import (
    BALANCE_API_SUCCESS_STATUS,
    BALANCE_API_USER_AGENT,
    HTTP_TOO_MANY_REQUESTS,
)
from app.utils.security import mask_address


@dataclass(frozen=True)
class Found:
    """Provider reported a balance."""

    balance_wei: int


@dataclass(frozen=True)
class NotFound:
    """Provider has no data for the address (expected for unfunded ones)."""


@dataclass(frozen=True)
class RateLimited:
    """Provider throttled the request; retry on the next tick."""


@dataclass(frozen=True)
class TransientError:
    """Lookup failed for a reason unrelated to the payment."""

    detail: str


BalanceResult = Found | NotFound | RateLimited | TransientError


class BalanceOracle:
    """
    Queries the balance-lookup service for a single address.

    Features:
    - Bounded request timeout
    - 429 and provider-side throttling mapped to RateLimited
    - Lazily created, reusable aiohttp session
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        timeout: float = 10.0,
    ) -> None:
        """
        Initialize balance oracle.

        Args:
            api_url: Etherscan compatible API endpoint
            api_key: Provider API key
            timeout: Total request timeout in seconds
        """
        self.api_url = api_url
        self._api_key = api_key
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": BALANCE_API_USER_AGENT},
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def check_balance(self, address: str) -> BalanceResult:
        """
        Look up the latest balance of an address.

        Args:
            address: Wallet address

        Returns:
            Found, NotFound, RateLimited or TransientError
        """
        params = {
            "module": "account",
            "action": "balance",
            "address": address,
            "tag": "latest",
            "apikey": self._api_key,
        }

        try:
            session = await self._get_session()
            async with session.get(
                self.api_url,
                params=params,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if response.status == HTTP_TOO_MANY_REQUESTS:
                    logger.info(
                        f"Rate limited for address {mask_address(address)}, "
                        f"will retry later"
                    )
                    return RateLimited()

                if response.status != 200:
                    detail = f"HTTP {response.status}"
                    logger.warning(
                        f"Balance lookup for {mask_address(address)} failed: {detail}"
                    )
                    return TransientError(detail)

                data = await response.json(content_type=None)

        except TimeoutError:
            logger.warning(f"Timeout checking balance for {mask_address(address)}")
            return TransientError("timeout")
        except aiohttp.ClientError as e:
            logger.warning(
                f"Balance lookup for {mask_address(address)} failed: {e}"
            )
            return TransientError(str(e) or e.__class__.__name__)
        except ValueError as e:
            # JSON decoding errors
            logger.warning(
                f"Malformed balance response for {mask_address(address)}: {e}"
            )
            return TransientError("malformed response")

        return self._parse_response(address, data)

    def _parse_response(self, address: str, data: Any) -> BalanceResult:
        if not isinstance(data, dict):
            logger.warning(
                f"Unexpected balance payload for {mask_address(address)}: {data!r}"
            )
            return TransientError("malformed response")

        result = data.get("result")

        if str(data.get("status")) != BALANCE_API_SUCCESS_STATUS:
            # Etherscan reports throttling as status "0" with HTTP 200
            if isinstance(result, str) and "rate limit" in result.lower():
                logger.info(
                    f"Rate limited for address {mask_address(address)}, "
                    f"will retry later"
                )
                return RateLimited()
            logger.debug(f"No data found for address {mask_address(address)}")
            return NotFound()

        try:
            if isinstance(result, bool):
                raise TypeError("boolean balance")
            balance_wei = int(result)
        except (TypeError, ValueError):
            logger.warning(
                f"Malformed balance for {mask_address(address)}: {result!r}"
            )
            return TransientError("malformed balance")

        if balance_wei < 0:
            return TransientError("negative balance")

        return Found(balance_wei)


__all__ = [
    "BalanceOracle",
    "BalanceResult",
    "Found",
    "NotFound",
    "RateLimited",
    "TransientError",
]
