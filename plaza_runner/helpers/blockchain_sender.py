"""
Sign, broadcast and wait for a single contract call.

Every step of a run goes through ``send_contract_call``: quote a bumped gas
price, build and sign a legacy transaction, broadcast it, then wait for the
receipt for at most ``config.tx_timeout`` seconds. The outcome comes back as a
``TxResult`` instead of an exception, so callers decide how to report it.

A transaction that times out is only abandoned locally. It stays in the
mempool and may still be mined later.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import TimeExhausted

from .gas import quote_gas_price

logger = logging.getLogger(__name__)

__all__ = [
    "TxStatus",
    "TxResult",
    "TransactionReverted",
    "TransactionTimeout",
    "send_contract_call",
    "submit_call",
]


class TransactionReverted(RuntimeError):
    """Raised into a result when a mined transaction has status 0."""

    def __init__(self, tx_hash: str):
        super().__init__(f"Transaction reverted {tx_hash}")
        self.tx_hash = tx_hash


class TransactionTimeout(TimeoutError):
    """Raised into a result when no receipt shows up before the deadline."""

    def __init__(self, tx_hash: str, timeout: float):
        super().__init__(f"Transaction timed out after {timeout:g}s {tx_hash}")
        self.tx_hash = tx_hash
        self.timeout = timeout


class TxStatus(str, Enum):
    CONFIRMED = "confirmed"
    SKIPPED = "skipped"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass
class TxResult:
    label: str
    status: TxStatus
    tx_hash: Optional[str] = None
    gas_price: Optional[int] = None
    receipt: Optional[Any] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.status in (TxStatus.CONFIRMED, TxStatus.SKIPPED)

    @classmethod
    def skipped(cls, label: str) -> TxResult:
        return cls(label=label, status=TxStatus.SKIPPED)

    @classmethod
    def failed(cls, label: str, error: BaseException, **fields) -> TxResult:
        return cls(label=label, status=TxStatus.ERROR, error=error, **fields)


def send_contract_call(
    w3: Web3,
    account: LocalAccount,
    contract_fn,
    *,
    config,
    label: str,
) -> TxResult:
    """
    Submit ``contract_fn`` from ``account`` and wait for it to be mined.

    Parameters
    ----------
    w3 : Web3
        Connected web3 instance.
    account : LocalAccount
        Signer for the transaction.
    contract_fn : ContractFunction
        A bound call such as ``token.functions.approve(spender, amount)``.
    config : RunConfig
        Supplies the gas bump ratio, ``tx_timeout`` and ``poll_latency``.
    label : str
        Human readable name used in the "sent" log line and on the result.

    Returns
    -------
    TxResult
        ``CONFIRMED`` on a status-1 receipt, ``TIMEOUT`` when the wait
        expires, ``ERROR`` for a revert or any RPC/signing failure.
    """
    tx_hash: Optional[str] = None
    gas_price: Optional[int] = None
    try:
        gas_price = quote_gas_price(w3, config)
        tx = contract_fn.build_transaction(
            {
                "from": account.address,
                "nonce": w3.eth.get_transaction_count(account.address, "pending"),
                "gasPrice": gas_price,
                "chainId": w3.eth.chain_id,
            }
        )
        signed = account.sign_transaction(tx)
        tx_hash = Web3.to_hex(w3.eth.send_raw_transaction(signed.raw_transaction))
        logger.info(f"{label} transaction sent {tx_hash}")

        receipt = w3.eth.wait_for_transaction_receipt(
            tx_hash,
            timeout=config.tx_timeout,
            poll_latency=config.poll_latency,
        )
    except TimeExhausted:
        return TxResult(
            label=label,
            status=TxStatus.TIMEOUT,
            tx_hash=tx_hash,
            gas_price=gas_price,
            error=TransactionTimeout(tx_hash, config.tx_timeout),
        )
    except Exception as err:  # RPC, encoding or signing failure
        return TxResult.failed(label, err, tx_hash=tx_hash, gas_price=gas_price)

    if receipt["status"] != 1:
        return TxResult.failed(
            label, TransactionReverted(tx_hash), tx_hash=tx_hash, gas_price=gas_price, receipt=receipt
        )

    return TxResult(
        label=label,
        status=TxStatus.CONFIRMED,
        tx_hash=tx_hash,
        gas_price=gas_price,
        receipt=receipt,
    )


def submit_call(
    w3: Web3,
    account: LocalAccount,
    contract,
    fn_name: str,
    args: tuple,
    *,
    config,
    label: str,
) -> TxResult:
    """Bind ``contract.functions.<fn_name>(*args)`` and send it.

    Argument validation against the ABI happens while binding, so a bad
    argument comes back as an ``ERROR`` result like any other failure.
    """
    try:
        contract_fn = getattr(contract.functions, fn_name)(*args)
    except Exception as err:
        return TxResult.failed(label, err)
    return send_contract_call(w3, account, contract_fn, config=config, label=label)
