from .curves import (
    Curve,
    CurveType,
    CurveAdjustment,
    CurveResult,
    apply_curve,
    curve_percentage,
)

__all__ = [
    "Curve",
    "CurveType",
    "CurveAdjustment",
    "CurveResult",
    "apply_curve",
    "curve_percentage",
]
