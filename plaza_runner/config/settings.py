"""Run configuration for the Plaza runner.

Everything a run needs (endpoint, addresses, amounts, token list, gas and
timeout policy) lives in one immutable ``RunConfig`` that is passed into the
steps, so a run can be pointed at fakes or another deployment without
touching module state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv
from web3 import Web3

from .contracts import CONTRACT_ADDRESSES
from .network import RECEIPT_POLL_LATENCY, TX_TIMEOUT, get_explorer_tx_url, get_rpc_url
from .tokens import TOKENS, TokenDescriptor


@dataclass(frozen=True)
class RunConfig:
    rpc_url: str
    pool_address: str
    swap_address: str
    explorer_tx_url: str
    tokens: tuple[TokenDescriptor, ...]
    approve_amount: int
    deposit_amount: int
    min_amount: int
    gas_price_numerator: int = 125
    gas_price_denominator: int = 100
    tx_timeout: float = TX_TIMEOUT
    poll_latency: float = RECEIPT_POLL_LATENCY

    def explorer_link(self, tx_hash: str) -> str:
        return f"{self.explorer_tx_url}{tx_hash}"

    def with_overrides(self, **changes) -> RunConfig:
        return replace(self, **changes)


def default_config() -> RunConfig:
    """Return the fixed Base Sepolia configuration."""
    return RunConfig(
        rpc_url=get_rpc_url(),
        pool_address=CONTRACT_ADDRESSES["plazaPool"],
        swap_address=CONTRACT_ADDRESSES["swapRouter"],
        explorer_tx_url=get_explorer_tx_url(),
        tokens=TOKENS,
        approve_amount=Web3.to_wei("10000", "ether"),
        deposit_amount=Web3.to_wei("0.01", "ether"),
        min_amount=Web3.to_wei("0.00001", "ether"),
    )


def load_env(env_file: str | None) -> None:
    # Repo-level .env first, then the explicit file overrides it
    base_env = Path(".env")
    if base_env.exists():
        load_dotenv(base_env, override=False)
    if env_file:
        load_dotenv(env_file, override=True)


def load_config(env_file: str | None = None) -> RunConfig:
    """Build a ``RunConfig`` from the defaults plus environment overrides.

    Recognised variables: ``RPC_URL``, ``PLAZA_POOL_ADDRESS``,
    ``SWAP_ROUTER_ADDRESS``, ``EXPLORER_TX_URL``, ``TX_TIMEOUT``.

    Raises:
        ValueError: If ``TX_TIMEOUT`` is not a positive number.
    """
    load_env(env_file)
    config = default_config()

    changes: dict[str, object] = {}
    if os.getenv("PLAZA_POOL_ADDRESS"):
        changes["pool_address"] = os.environ["PLAZA_POOL_ADDRESS"]
    if os.getenv("SWAP_ROUTER_ADDRESS"):
        changes["swap_address"] = os.environ["SWAP_ROUTER_ADDRESS"]
    if os.getenv("EXPLORER_TX_URL"):
        changes["explorer_tx_url"] = os.environ["EXPLORER_TX_URL"]

    timeout_env = os.getenv("TX_TIMEOUT")
    if timeout_env:
        try:
            timeout = float(timeout_env)
        except ValueError:
            raise ValueError(f"Invalid TX_TIMEOUT: {timeout_env}") from None
        if timeout <= 0:
            raise ValueError(f"Invalid TX_TIMEOUT: {timeout_env}")
        changes["tx_timeout"] = timeout

    return config.with_overrides(**changes) if changes else config
