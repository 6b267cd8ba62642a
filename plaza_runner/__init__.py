"""
Plaza transaction runner.

Approves the swap router for the configured tokens, then calls ``create`` and
``redeem`` on the Plaza pool for a single wallet.
"""

__version__ = "0.1.0"
