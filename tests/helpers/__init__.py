"""Test helpers module for shared test utilities.

- constants: Token objects used across tests
- factories: Pair factory functions
"""

from tests.helpers.constants import CHAIN_ID, DAI, PAIR_ADDRESS, USDC, USDT, WBTC, WETH
from tests.helpers.factories import amount, make_pair

__all__ = [
    # Constants
    "CHAIN_ID",
    "PAIR_ADDRESS",
    "WETH",
    "USDC",
    "DAI",
    "USDT",
    "WBTC",
    # Factories
    "amount",
    "make_pair",
]
