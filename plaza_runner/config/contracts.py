"""
Contract addresses for the Plaza runner (Base Sepolia).
"""

CONTRACT_ADDRESSES: dict[str, str] = {
    # Pool exposing create() / redeem()
    "plazaPool": "0xF39635F2adF40608255779ff742Afe13dE31f577",

    # Spender that every configured token is approved for
    "swapRouter": "0x809daBC75201F92AC40973f22db37995676BaA04",
}
