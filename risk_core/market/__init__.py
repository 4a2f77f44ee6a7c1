"""
Market data for curve risk calculations.

This module provides:
- Observable quote keys and read-only quote lookup
- Curve identifiers and nodal zero-rate curves
- Curve node metadata
- Market snapshots
"""

from risk_core.market.curve import (
    DiscountCurveId,
    IborIndex,
    NodalCurve,
    RateCurveId,
    RateIndexCurveId,
)
from risk_core.market.keys import MarketData, ObservableKey
from risk_core.market.metadata import (
    CurveNodeMetadata,
    SimpleCurveNodeMetadata,
    TenorCurveNodeMetadata,
)
from risk_core.market.snapshot import MarketSnapshot

__all__ = [
    "ObservableKey",
    "MarketData",
    "RateCurveId",
    "DiscountCurveId",
    "RateIndexCurveId",
    "IborIndex",
    "NodalCurve",
    "CurveNodeMetadata",
    "TenorCurveNodeMetadata",
    "SimpleCurveNodeMetadata",
    "MarketSnapshot",
]
