"""Tests for Price."""

from decimal import Decimal

import pytest

from amm_engine.errors import InsufficientReserves, TokenMismatch
from amm_engine.models import Price, TokenAmount
from tests.helpers import DAI, USDC, WETH


def weth_usdc_price() -> Price:
    """2000 USDC per WETH."""
    return Price(WETH, USDC, 10**18, 2000 * 10**6)


class TestPrice:
    """Tests for reserve-ratio prices."""

    def test_raw_ignores_decimals(self):
        assert weth_usdc_price().raw == Decimal("2E-9")

    def test_to_decimal(self):
        assert weth_usdc_price().to_decimal() == Decimal(2000)

    def test_invert(self):
        inverted = weth_usdc_price().invert()
        assert inverted.base_token == USDC
        assert inverted.quote_token == WETH
        assert inverted.to_decimal() == Decimal("0.0005")

    def test_quote(self):
        """1.5 WETH is worth 3000 USDC."""
        quoted = weth_usdc_price().quote(TokenAmount(WETH, 15 * 10**17))
        assert quoted == TokenAmount(USDC, 3000 * 10**6)

    def test_quote_rounds_down(self):
        price = Price(DAI, WETH, 3, 1)
        assert price.quote(TokenAmount(DAI, 10)).raw == 3

    def test_quote_wrong_token(self):
        with pytest.raises(TokenMismatch):
            weth_usdc_price().quote(TokenAmount(USDC, 1))

    def test_zero_denominator(self):
        with pytest.raises(InsufficientReserves):
            Price(WETH, USDC, 0, 1)
