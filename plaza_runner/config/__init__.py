"""
Configuration package for the Plaza runner.
"""

from plaza_runner.config.network import (
    CHAINS,
    DEFAULT_CHAIN,
    RPC_TIMEOUT,
    TX_TIMEOUT,
    RECEIPT_POLL_LATENCY,
    get_chain_config,
    get_rpc_url,
    get_explorer_url,
    get_explorer_tx_url,
)

from plaza_runner.config.contracts import CONTRACT_ADDRESSES

from plaza_runner.config.tokens import (
    TOKENS,
    TokenDescriptor,
    TokenType,
    get_token,
)

from plaza_runner.config.settings import (
    RunConfig,
    default_config,
    load_config,
    load_env,
)

from plaza_runner.config.abis import (
    ERC20_ABI,
    POOL_ABI,
)

__all__ = [
    # Network
    'CHAINS',
    'DEFAULT_CHAIN',
    'RPC_TIMEOUT',
    'TX_TIMEOUT',
    'RECEIPT_POLL_LATENCY',
    'get_chain_config',
    'get_rpc_url',
    'get_explorer_url',
    'get_explorer_tx_url',

    # Contracts
    'CONTRACT_ADDRESSES',

    # Tokens
    'TOKENS',
    'TokenDescriptor',
    'TokenType',
    'get_token',

    # Run settings
    'RunConfig',
    'default_config',
    'load_config',
    'load_env',

    # ABIs
    'ERC20_ABI',
    'POOL_ABI',
]
