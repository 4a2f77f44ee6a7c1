"""
Point and curve parameter sensitivities.

This module provides:
- Point sensitivities to individual curve queries
- Immutable and mutable collections with normalization
- Projection of point sensitivities onto curve nodes
"""

from risk_core.sensitivity.parameter import (
    CurveParameterSensitivities,
    CurveParameterSensitivity,
)
from risk_core.sensitivity.point import (
    IborRateSensitivity,
    PointSensitivity,
    ZeroRateSensitivity,
)
from risk_core.sensitivity.points import MutablePointSensitivities, PointSensitivities

__all__ = [
    "PointSensitivity",
    "ZeroRateSensitivity",
    "IborRateSensitivity",
    "PointSensitivities",
    "MutablePointSensitivities",
    "CurveParameterSensitivity",
    "CurveParameterSensitivities",
]
