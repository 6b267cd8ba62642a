"""Web3 connection, gas and transaction helpers."""
