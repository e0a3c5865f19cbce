"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest
import structlog

from amm_engine.constants import A_PRECISION
from amm_engine.curves import ConstantProduct, StableSwap
from amm_engine.models import Pair, PairSnapshot
from tests.helpers import DAI, USDC, USDT, WETH, make_pair


@pytest.fixture
def constant_product_pair() -> Pair:
    """DAI/WETH pair with 1M raw units on both sides and a 0.3% fee."""
    return make_pair(DAI, 1_000_000, WETH, 1_000_000, curve=ConstantProduct(), swap_fee=3000)


@pytest.fixture
def stable_pair() -> Pair:
    """USDC/USDT stable pair, 1M tokens per side, A=1000, 0.01% fee."""
    return make_pair(
        USDC,
        1_000_000 * 10**6,
        USDT,
        1_000_000 * 10**6,
        curve=StableSwap(1000 * A_PRECISION),
        swap_fee=100,
    )


@pytest.fixture
def pair_snapshot_file(tmp_path: Path, stable_pair: Pair) -> Path:
    """Stable pair snapshot written as JSON."""
    path = tmp_path / "pair.json"
    snapshot = PairSnapshot.from_pair(stable_pair)
    path.write_text(json.dumps(snapshot.model_dump(mode="json", by_alias=True)))
    return path


@pytest.fixture
def reset_structlog():
    """Restore structlog defaults after tests that configure it."""
    yield
    structlog.reset_defaults()
