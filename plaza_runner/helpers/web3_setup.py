"""
Web3 setup helper - provides common web3 instance utilities.

Public API
----------
get_web3_instance(rpc_url=None)
    Return a Web3 instance connected to the specified RPC URL.
    Falls back to the RPC_URL environment variable, then the Base Sepolia default.
"""
from __future__ import annotations

from typing import Optional

from web3 import Web3

from plaza_runner.config.network import RPC_TIMEOUT, get_rpc_url

__all__ = ["get_web3_instance"]

# Cached web3 instance
_w3_instance: Optional[Web3] = None


def get_web3_instance(rpc_url: str | None = None, timeout: int = RPC_TIMEOUT) -> Web3:
    """
    Get a Web3 instance connected to the specified RPC URL.

    Args:
        rpc_url: Optional RPC URL. If not provided, uses RPC_URL or the chain default.
        timeout: Per-request HTTP timeout in seconds.

    Returns:
        Web3 instance

    Raises:
        RuntimeError: If no RPC URL is available
    """
    global _w3_instance

    if rpc_url is None:
        rpc_url = get_rpc_url()

    if not rpc_url:
        raise RuntimeError("No RPC URL available. Set RPC_URL environment variable.")

    # Return cached instance if URL matches
    if _w3_instance is not None and _w3_instance.provider.endpoint_uri == rpc_url:
        return _w3_instance

    _w3_instance = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
    return _w3_instance
