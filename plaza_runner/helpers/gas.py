"""Legacy gas-price quoting with a fixed percentage bump."""

import logging

from web3 import Web3

logger = logging.getLogger(__name__)


def scale_gas_price(gas_price: int, numerator: int = 125, denominator: int = 100) -> int:
    """Return ``gas_price * numerator / denominator`` truncated to an integer.

    >>> scale_gas_price(100)
    125
    >>> scale_gas_price(101)
    126
    """
    return int(gas_price) * numerator // denominator


def quote_gas_price(w3: Web3, config) -> int:
    """Fetch the node's current gas price and apply the configured bump.

    The quote is read fresh on every call so each transaction is priced at
    submission time.
    """
    quote = int(w3.eth.gas_price)
    bumped = scale_gas_price(quote, config.gas_price_numerator, config.gas_price_denominator)
    logger.debug(f"Gas price quote {quote} wei -> sending at {bumped} wei")
    return bumped
