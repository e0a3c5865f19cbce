"""Shared token constants for tests.

Canonical order by address: WBTC < DAI < USDC < WETH < USDT.

Usage:
    from tests.helpers import WETH, USDC
"""

from amm_engine.models import Token

CHAIN_ID = 1

WETH = Token(CHAIN_ID, "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2", 18, "WETH", "Wrapped Ether")
USDC = Token(CHAIN_ID, "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48", 6, "USDC", "USD Coin")
DAI = Token(CHAIN_ID, "0x6b175474e89094c44da98b954eedeac495271d0f", 18, "DAI", "Dai Stablecoin")
USDT = Token(CHAIN_ID, "0xdac17f958d2ee523a2206206994597c13d831ec7", 6, "USDT", "Tether USD")
WBTC = Token(CHAIN_ID, "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599", 8, "WBTC", "Wrapped BTC")

# Address used for pairs that need a distinct liquidity token
PAIR_ADDRESS = "0x1111111111111111111111111111111111111111"

__all__ = ["CHAIN_ID", "PAIR_ADDRESS", "WETH", "USDC", "DAI", "USDT", "WBTC"]
