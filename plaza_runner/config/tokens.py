"""
Token configurations for the Plaza runner.

Contains the tokens the swap router gets approved for and the ``TokenType``
selector understood by the pool's ``create``/``redeem`` calls.
"""

from dataclasses import dataclass
from enum import IntEnum


@dataclass(frozen=True)
class TokenDescriptor:
    """An ERC20 token the wallet approves for the swap router."""

    address: str
    name: str


class TokenType(IntEnum):
    """uint8 selector passed to ``create``/``redeem``."""

    BOND = 0
    LEVERAGE = 1


TOKENS: tuple[TokenDescriptor, ...] = (
    TokenDescriptor(address="0x13e5fb0b6534bb22cbc59fae339dbbe0dc906871", name="wstETH"),
    TokenDescriptor(address="0x5Bd36745f6199CF32d2465Ef1F8D6c51dCA9BdEE", name="bondETH"),
    TokenDescriptor(address="0x98f665D98a046fB81147879eCBE9A6fF68BC276C", name="levETH"),
)


def get_token(name: str, tokens: tuple[TokenDescriptor, ...] = TOKENS) -> TokenDescriptor:
    """Look up a configured token by display name (case-insensitive).

    Raises:
        KeyError: If no token has that name.
    """
    wanted = name.lower()
    for token in tokens:
        if token.name.lower() == wanted:
            return token
    raise KeyError(f"Unknown token: {name}. Known: {[t.name for t in tokens]}")
