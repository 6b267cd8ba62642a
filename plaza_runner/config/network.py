"""
Network configuration for the Plaza runner.

Contains RPC URLs, explorer endpoints and transaction timing defaults.
Only Base Sepolia is configured; ``CHAIN`` selects the entry.
"""

import os
from typing import Any


# =============================================================================
# CHAIN CONFIGURATIONS
# =============================================================================

CHAINS: dict[str, dict[str, Any]] = {
    "base_sepolia": {
        "chain_id": 84532,
        "name": "Base Sepolia",
        "rpc_urls": [
            "https://base-sepolia-rpc.publicnode.com",
            "https://sepolia.base.org",
        ],
        "explorer": {
            "url": "https://sepolia.basescan.org",
        },
    },
}

DEFAULT_CHAIN = "base_sepolia"

# Chain ID to name mapping
CHAIN_ID_TO_NAME: dict[int, str] = {
    config["chain_id"]: name for name, config in CHAINS.items()
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_chain_config(chain: str | int | None = None) -> dict[str, Any]:
    """Get configuration for a specific chain.

    Args:
        chain: Chain name (e.g., 'base_sepolia') or chain ID.
               If None, uses CHAIN environment variable or defaults to 'base_sepolia'.

    Returns:
        Chain configuration dictionary.

    Raises:
        ValueError: If chain is not supported.
    """
    if chain is None:
        chain = os.getenv("CHAIN", DEFAULT_CHAIN)

    if isinstance(chain, int):
        name = CHAIN_ID_TO_NAME.get(chain)
        if name is None:
            raise ValueError(f"Unsupported chain ID: {chain}")
        chain = name

    chain = chain.lower()
    if chain not in CHAINS:
        raise ValueError(f"Unsupported chain: {chain}. Supported: {list(CHAINS.keys())}")

    return CHAINS[chain]


def get_rpc_url(chain: str | int | None = None) -> str:
    """Get the primary RPC URL for a chain.

    Uses RPC_URL environment variable if set, otherwise returns first default.
    """
    env_rpc = os.getenv("RPC_URL")
    if env_rpc:
        return env_rpc

    config = get_chain_config(chain)
    return config["rpc_urls"][0]


def get_explorer_url(chain: str | int | None = None) -> str:
    """Get the block explorer URL for a chain."""
    config = get_chain_config(chain)
    return config["explorer"]["url"]


def get_explorer_tx_url(chain: str | int | None = None) -> str:
    """Get the explorer prefix that a transaction hash is appended to."""
    return f"{get_explorer_url(chain)}/tx/"


# =============================================================================
# TIMING
# =============================================================================

RPC_TIMEOUT: int = 30  # seconds, per HTTP request
TX_TIMEOUT: int = 60  # seconds to wait for a receipt before giving up
RECEIPT_POLL_LATENCY: float = 1.0  # seconds between receipt polls
