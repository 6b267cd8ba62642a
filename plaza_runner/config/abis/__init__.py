"""
Contract ABI package for the Plaza runner.

Contains the contract ABIs organized by protocol/type.
"""

from .erc20 import ERC20_ABI
from .plaza import (
    CREATE_ABI,
    REDEEM_ABI,
    POOL_ABI,
)

__all__ = [
    # ERC20
    'ERC20_ABI',

    # Plaza
    'CREATE_ABI',
    'REDEEM_ABI',
    'POOL_ABI',
]
