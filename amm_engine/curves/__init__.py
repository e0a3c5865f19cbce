"""Liquidity curves supported by the pair model.

A pair holds exactly one curve for its lifetime:
- ConstantProduct (curve id 0)
- StableSwap (curve id 1), carrying its amplification coefficient
"""

from amm_engine.constants import CONSTANT_PRODUCT_CURVE_ID, STABLE_CURVE_ID
from amm_engine.errors import InvalidCurveId, MissingAmplificationCoefficient

from .base import Curve
from .constant_product import ConstantProduct
from .stable_swap import StableSwap

CurveVariant = ConstantProduct | StableSwap


def curve_from_id(curve_id: int, amplification_coefficient: int | None = None) -> CurveVariant:
    """Build the curve for a factory curve discriminant.

    Args:
        curve_id: 0 for constant product, 1 for stable
        amplification_coefficient: A scaled by A_PRECISION, required for stable

    Returns:
        The curve variant

    Raises:
        InvalidCurveId: If curve_id is not a known discriminant
        MissingAmplificationCoefficient: If curve_id is stable and no coefficient is given
    """
    if curve_id == CONSTANT_PRODUCT_CURVE_ID:
        return ConstantProduct()
    if curve_id == STABLE_CURVE_ID:
        if amplification_coefficient is None:
            raise MissingAmplificationCoefficient(
                "Stable pairs require an amplification coefficient"
            )
        return StableSwap(amplification_coefficient)
    raise InvalidCurveId(f"Unknown curve id: {curve_id}")


__all__ = [
    "Curve",
    "CurveVariant",
    "ConstantProduct",
    "StableSwap",
    "curve_from_id",
]
