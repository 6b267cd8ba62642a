#!/usr/bin/env python3
"""
Plaza transaction runner

Approves the swap router for every configured token, then deposits into the
Plaza pool with ``create`` and redeems with ``redeem``, in that order.

Usage:
  python -m plaza_runner.commands.run_transactions \
    --env .env.base-sepolia \
    --token-type 1 \
    [--rpc-url https://...] \
    [--timeout 60] \
    [--debug]

Behavior
  - Each step logs its outcome and the run always moves on to the next step;
    redeem is attempted even when the deposit failed.
  - The exit code is 0 only when every step confirmed or was skipped.

Requires:
  - PRIVATE_KEY in the environment or the sourced env file
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass, field

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.contract import Contract

from plaza_runner.config.abis import POOL_ABI
from plaza_runner.config.logging_config import get_runner_logger, log_run_summary
from plaza_runner.config.settings import RunConfig, default_config, load_config
from plaza_runner.helpers.blockchain_sender import TxResult, submit_call
from plaza_runner.helpers.web3_setup import get_web3_instance
from plaza_runner.setup.allowances import approve_all_tokens

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    """Per-step outcome of one run."""

    address: str
    token_type: int
    approvals: list[TxResult] = field(default_factory=list)
    deposit: TxResult | None = None
    redeem: TxResult | None = None

    def results(self) -> list[TxResult]:
        steps = [*self.approvals, self.deposit, self.redeem]
        return [r for r in steps if r is not None]

    def failures(self) -> list[TxResult]:
        return [r for r in self.results() if not r.ok]

    @property
    def ok(self) -> bool:
        return self.deposit is not None and self.redeem is not None and not self.failures()


def build_pool_contract(w3: Web3, config: RunConfig) -> Contract:
    return w3.eth.contract(address=Web3.to_checksum_address(config.pool_address), abi=POOL_ABI)


def _pool_call(
    w3: Web3,
    account: LocalAccount,
    fn_name: str,
    token_type: int,
    config: RunConfig,
    label: str,
) -> TxResult:
    # Bound per step, a bad pool address fails this step only
    try:
        pool = build_pool_contract(w3, config)
    except Exception as err:
        return TxResult.failed(label, err)
    return submit_call(
        w3,
        account,
        pool,
        fn_name,
        (int(token_type), config.deposit_amount, config.min_amount),
        config=config,
        label=label,
    )


def deposit(w3: Web3, account: LocalAccount, token_type: int, config: RunConfig) -> TxResult:
    result = _pool_call(w3, account, "create", token_type, config, "Deposit")
    if result.ok:
        logger.info(f"Deposit transaction confirmed {config.explorer_link(result.tx_hash)}")
    else:
        logger.error(f"Error in Deposit: {result.error}")
    return result


def redeem(w3: Web3, account: LocalAccount, token_type: int, config: RunConfig) -> TxResult:
    result = _pool_call(w3, account, "redeem", token_type, config, "Redeem")
    if result.ok:
        logger.info(f"Redeem transaction confirmed. {config.explorer_link(result.tx_hash)}")
    else:
        logger.error(f"Error in redeem: {result.error}")
    return result


def load_account(private_key: str) -> LocalAccount:
    """Build the signer for one run.

    Raises:
        ValueError: If ``private_key`` is not a valid key.
    """
    return Account.from_key(private_key)


def run_with_account(
    account: LocalAccount,
    token_type: int,
    config: RunConfig | None = None,
    w3: Web3 | None = None,
) -> RunReport:
    """Approve all tokens, then deposit, then redeem.

    No step failure stops the run; each one is logged and recorded on the
    returned report.
    """
    config = config or default_config()
    w3 = w3 or get_web3_instance(config.rpc_url)

    report = RunReport(address=account.address, token_type=int(token_type))

    report.approvals = approve_all_tokens(w3, account, config)

    logger.info(f"Address {account.address} Executing deposit...")
    report.deposit = deposit(w3, account, token_type, config)

    logger.info(f"Address {account.address} Executing redeem...")
    report.redeem = redeem(w3, account, token_type, config)

    return report


def run_transactions(
    private_key: str,
    token_type: int,
    config: RunConfig | None = None,
    w3: Web3 | None = None,
) -> RunReport:
    """Run every step signed by ``private_key``.

    The key only lives in the signer for this call.

    Raises:
        ValueError: If ``private_key`` is not a valid key (nothing is sent).
    """
    account = load_account(private_key)
    return run_with_account(account, token_type, config=config, w3=w3)


# --------------------------------------------------------------------------- #
# CLI                                                                         #
# --------------------------------------------------------------------------- #


def require_env(name: str) -> str:
    v = os.getenv(name)
    if not v:
        raise SystemExit(f"Missing env var: {name}")
    return v


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Approve tokens, then create and redeem on the Plaza pool")
    p.add_argument("--env", dest="env_file", default=None, help="Path to .env file to load")
    p.add_argument("--token-type", dest="token_type", type=int, required=True,
                   help="uint8 token type passed to create/redeem (0 = bond, 1 = leverage)")
    p.add_argument("--rpc-url", dest="rpc_url", default=None, help="RPC endpoint (overrides RPC_URL)")
    p.add_argument("--timeout", dest="timeout", type=float, default=None,
                   help="Seconds to wait for each receipt (default 60)")
    p.add_argument("--debug", action="store_true", help="Verbose logging")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(args.env_file)
    except ValueError as err:
        raise SystemExit(str(err)) from None

    get_runner_logger(debug=args.debug)

    if args.rpc_url:
        config = config.with_overrides(rpc_url=args.rpc_url)
    if args.timeout is not None:
        if args.timeout <= 0:
            raise SystemExit("--timeout must be positive")
        config = config.with_overrides(tx_timeout=args.timeout)

    try:
        account = load_account(require_env("PRIVATE_KEY"))
    except ValueError:
        # Do not echo the exception, it can contain the key material
        raise SystemExit("PRIVATE_KEY is not a valid private key") from None

    report = run_with_account(account, args.token_type, config=config)
    log_run_summary(logger, report.results())
    return 0 if report.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
