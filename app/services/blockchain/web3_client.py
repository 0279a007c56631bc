"""
Chain RPC client factory.
"""

import aiohttp
from loguru import logger
from web3 import AsyncWeb3

from app.config.constants import BLOCKCHAIN_RPC_TIMEOUT


def create_web3(rpc_url: str, timeout: float = BLOCKCHAIN_RPC_TIMEOUT) -> AsyncWeb3:
    """
    Create an AsyncWeb3 client for the configured JSON-RPC endpoint.

    No request is made here; connectivity problems surface on the first
    call (gas price lookup, submission) and are handled there.

    Args:
        rpc_url: HTTP(S) JSON-RPC endpoint
        timeout: Per-request timeout in seconds

    Returns:
        AsyncWeb3 instance
    """
    provider = AsyncWeb3.AsyncHTTPProvider(
        rpc_url,
        request_kwargs={"timeout": aiohttp.ClientTimeout(total=timeout)},
    )
    logger.info(f"RPC provider configured (timeout={timeout}s)")
    return AsyncWeb3(provider)


async def close_web3(web3: AsyncWeb3) -> None:
    """Release the provider's HTTP session, if it opened one."""
    disconnect = getattr(web3.provider, "disconnect", None)
    if disconnect is None:
        return
    try:
        await disconnect()
    except Exception as e:
        logger.warning(f"Error closing RPC provider: {e}")
