"""
Approve the swap router for every configured token.

Tokens are handled one at a time. A token whose allowance already exceeds the
deposit amount is skipped without sending anything; otherwise one ``approve``
for ``approve_amount`` is sent. Failures are logged and returned, never raised,
so one bad token does not stop the others.
"""

from __future__ import annotations

import logging

from eth_account.signers.local import LocalAccount
from web3 import Web3

from plaza_runner.config.abis import ERC20_ABI
from plaza_runner.config.tokens import TokenDescriptor
from plaza_runner.helpers.blockchain_sender import TxResult, submit_call

logger = logging.getLogger(__name__)


def approve_token_if_needed(
    w3: Web3,
    account: LocalAccount,
    token: TokenDescriptor,
    config,
) -> TxResult:
    label = f"Approval for {token.name}"
    try:
        spender = Web3.to_checksum_address(config.swap_address)
        token_contract = w3.eth.contract(address=Web3.to_checksum_address(token.address), abi=ERC20_ABI)
        allowance = token_contract.functions.allowance(account.address, spender).call()
    except Exception as err:
        logger.error(f"Error approving {token.name}: {err}")
        return TxResult.failed(label, err)

    if allowance > config.deposit_amount:
        logger.info(f"Allowance for {token.name} already sufficient ({allowance}), skipping approval")
        return TxResult.skipped(label)

    result = submit_call(
        w3,
        account,
        token_contract,
        "approve",
        (spender, config.approve_amount),
        config=config,
        label=label,
    )
    if result.ok:
        logger.info(f"Approval transaction for {token.name} confirmed {config.explorer_link(result.tx_hash)}")
    else:
        logger.error(f"Error approving {token.name}: {result.error}")
    return result


def approve_all_tokens(w3: Web3, account: LocalAccount, config) -> list[TxResult]:
    return [approve_token_if_needed(w3, account, token, config) for token in config.tokens]
