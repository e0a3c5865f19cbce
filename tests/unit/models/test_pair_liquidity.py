"""Tests for liquidity minting and valuation on pairs."""

import pytest

from amm_engine.constants import A_PRECISION, MINIMUM_LIQUIDITY
from amm_engine.curves import StableSwap
from amm_engine.errors import InsufficientInputAmount, InsufficientReserves, TokenMismatch
from amm_engine.models import TokenAmount
from tests.helpers import DAI, PAIR_ADDRESS, USDC, WETH, amount, make_pair

AMP = 1000 * A_PRECISION


def supply(pair, raw: int) -> TokenAmount:
    return TokenAmount(pair.liquidity_token, raw)


class TestConstantProductMinting:
    """Tests for get_liquidity_minted on constant-product pairs."""

    def test_first_deposit(self):
        """sqrt(4000 * 1000) - 1000 = 1000."""
        pair = make_pair(DAI, 0, WETH, 0, address=PAIR_ADDRESS)
        minted = pair.get_liquidity_minted(supply(pair, 0), amount(DAI, 4000), amount(WETH, 1000))
        assert minted == supply(pair, 1000)

    def test_deposit_order_irrelevant(self):
        pair = make_pair(DAI, 10_000, WETH, 20_000, address=PAIR_ADDRESS)
        forward = pair.get_liquidity_minted(supply(pair, 5000), amount(DAI, 1000), amount(WETH, 3000))
        backward = pair.get_liquidity_minted(supply(pair, 5000), amount(WETH, 3000), amount(DAI, 1000))
        assert forward == backward == supply(pair, 500)

    def test_first_deposit_at_minimum(self):
        pair = make_pair(DAI, 0, WETH, 0)
        with pytest.raises(InsufficientInputAmount):
            pair.get_liquidity_minted(supply(pair, 0), amount(DAI, 1000), amount(WETH, 1000))

    def test_supply_over_empty_reserves(self):
        pair = make_pair(DAI, 0, WETH, 0, address=PAIR_ADDRESS)
        with pytest.raises(InsufficientReserves):
            pair.get_liquidity_minted(supply(pair, 10), amount(DAI, 1000), amount(WETH, 1000))

    def test_supply_in_wrong_token(self):
        pair = make_pair(DAI, 0, WETH, 0, address=PAIR_ADDRESS)
        with pytest.raises(TokenMismatch):
            pair.get_liquidity_minted(amount(DAI, 0), amount(DAI, 4000), amount(WETH, 1000))

    def test_same_token_twice(self):
        pair = make_pair(DAI, 0, WETH, 0)
        with pytest.raises(TokenMismatch):
            pair.get_liquidity_minted(supply(pair, 0), amount(DAI, 4000), amount(DAI, 1000))

    def test_foreign_token(self):
        pair = make_pair(DAI, 0, WETH, 0)
        with pytest.raises(TokenMismatch):
            pair.get_liquidity_minted(supply(pair, 0), amount(DAI, 4000), amount(USDC, 1000))


class TestStableMinting:
    """Tests for get_liquidity_minted on stable pairs."""

    def test_first_deposit_scales_decimals(self):
        """1000 DAI and 1000 USDC are worth D = 2000 at 18 decimals."""
        pair = make_pair(DAI, 0, USDC, 0, curve=StableSwap(AMP), address=PAIR_ADDRESS)
        minted = pair.get_liquidity_minted(
            supply(pair, 0), amount(DAI, 1000 * 10**18), amount(USDC, 1000 * 10**6)
        )
        assert minted.raw == 2000 * 10**18 - MINIMUM_LIQUIDITY

    def test_proportional_deposit(self):
        pair = make_pair(DAI, 1000 * 10**18, USDC, 1000 * 10**6, curve=StableSwap(AMP))
        minted = pair.get_liquidity_minted(
            supply(pair, 2000 * 10**18), amount(DAI, 1000 * 10**18), amount(USDC, 1000 * 10**6)
        )
        assert minted.raw == 2000 * 10**18

    def test_supply_over_empty_reserves(self):
        """One token of each side into a (0, 0) pool that reports supply."""
        pair = make_pair(USDC, 0, DAI, 0, curve=StableSwap(AMP))
        with pytest.raises(InsufficientReserves):
            pair.get_liquidity_minted(supply(pair, 10), amount(USDC, 10**6), amount(DAI, 10**18))

    def test_one_sided_first_deposit(self):
        pair = make_pair(DAI, 0, USDC, 0, curve=StableSwap(AMP))
        with pytest.raises(InsufficientInputAmount):
            pair.get_liquidity_minted(supply(pair, 0), amount(DAI, 1000 * 10**18), amount(USDC, 0))


class TestLiquidityValue:
    """Tests for get_liquidity_value."""

    def test_fee_off(self):
        pair = make_pair(DAI, 1000, WETH, 1000, address=PAIR_ADDRESS)
        value = pair.get_liquidity_value(DAI, supply(pair, 500), supply(pair, 500))
        assert value == amount(DAI, 1000)

    def test_fee_on(self):
        """Fee growth since k_last dilutes the redemption: 917 instead of 1000."""
        pair = make_pair(DAI, 1000, WETH, 1000, address=PAIR_ADDRESS)
        value = pair.get_liquidity_value(
            DAI, supply(pair, 500), supply(pair, 500), protocol_fee_on=True, k_last=250_000
        )
        assert value == amount(DAI, 917)

    def test_fee_on_requires_k_last(self):
        pair = make_pair(DAI, 1000, WETH, 1000)
        with pytest.raises(ValueError):
            pair.get_liquidity_value(DAI, supply(pair, 500), supply(pair, 500), protocol_fee_on=True)

    def test_liquidity_exceeds_supply(self):
        pair = make_pair(DAI, 1000, WETH, 1000)
        with pytest.raises(InsufficientInputAmount):
            pair.get_liquidity_value(DAI, supply(pair, 500), supply(pair, 501))

    def test_foreign_token(self):
        pair = make_pair(DAI, 1000, WETH, 1000)
        with pytest.raises(TokenMismatch):
            pair.get_liquidity_value(USDC, supply(pair, 500), supply(pair, 500))

    def test_liquidity_in_wrong_token(self):
        pair = make_pair(DAI, 1000, WETH, 1000)
        with pytest.raises(TokenMismatch):
            pair.get_liquidity_value(DAI, supply(pair, 500), amount(DAI, 500))


class TestLiquidityTokenIdentity:
    """Tests for which supplies a pair accepts."""

    def test_unaddressed_pairs_share_lp_token(self):
        """Without an address every pair on a chain uses the zero-address LP token."""
        first = make_pair(DAI, 1000, WETH, 1000)
        second = make_pair(USDC, 1000, WETH, 1000)
        assert first.liquidity_token == second.liquidity_token

    def test_addressed_pair_rejects_other_supply(self):
        """A pair with an address rejects LP amounts of any other pair."""
        pair = make_pair(DAI, 1000, WETH, 1000, address=PAIR_ADDRESS)
        other = make_pair(DAI, 1000, WETH, 1000)
        with pytest.raises(TokenMismatch):
            pair.get_liquidity_value(DAI, supply(other, 500), supply(other, 500))


class TestStableMintingExact:
    """Exact mints into 1.2M DAI / 0.8M USDC (A = 1000) with 1.99M LP supply."""

    @pytest.fixture
    def pair(self):
        return make_pair(
            DAI, 1_200_000 * 10**18, USDC, 800_000 * 10**6, curve=StableSwap(AMP), address=PAIR_ADDRESS
        )

    def test_single_sided_deposit(self, pair):
        minted = pair.get_liquidity_minted(
            supply(pair, 1_990_000 * 10**18), amount(DAI, 100_000 * 10**18), amount(USDC, 0)
        )
        assert minted == supply(pair, 99_480_767_559_247_989_292_269)

    def test_two_sided_deposit(self, pair):
        minted = pair.get_liquidity_minted(
            supply(pair, 1_990_000 * 10**18), amount(USDC, 2000 * 10**6), amount(DAI, 1000 * 10**18)
        )
        assert minted == supply(pair, 2_985_344_301_715_096_251_792)
