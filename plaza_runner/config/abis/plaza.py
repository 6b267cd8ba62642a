"""
Plaza pool interface ABIs.

``create`` deposits the reserve token and mints the chosen derivative token,
``redeem`` burns it back. Both take ``(tokenType, depositAmount, minAmount)``.
"""

CREATE_ABI = [
    {"inputs": [{"internalType": "uint8", "name": "tokenType", "type": "uint8"}, {"internalType": "uint256", "name": "depositAmount", "type": "uint256"}, {"internalType": "uint256", "name": "minAmount", "type": "uint256"}], "name": "create", "outputs": [], "stateMutability": "nonpayable", "type": "function"}
]

REDEEM_ABI = [
    {"inputs": [{"internalType": "uint8", "name": "tokenType", "type": "uint8"}, {"internalType": "uint256", "name": "depositAmount", "type": "uint256"}, {"internalType": "uint256", "name": "minAmount", "type": "uint256"}], "name": "redeem", "outputs": [], "stateMutability": "nonpayable", "type": "function"}
]

# Merged handle used by the runner
POOL_ABI = [*REDEEM_ABI, *CREATE_ABI]
