"""
Curve nodes for curve calibration.

Each node maps market quotes to a calibration instrument, metadata
locating the resulting curve point and an initial guess for the solver.

Variants:
- FX swap node (near FX rate and forward points)
- FRA node (FRA rate)
- Term deposit node (deposit rate)
"""

from risk_core.nodes.base import CurveNode, ValueType
from risk_core.nodes.definition import CurveDefinition, curve_definition
from risk_core.nodes.fra import FraCurveNode
from risk_core.nodes.fx_swap import FxSwapCurveNode
from risk_core.nodes.term_deposit import TermDepositCurveNode

__all__ = [
    "CurveNode",
    "ValueType",
    "FxSwapCurveNode",
    "FraCurveNode",
    "TermDepositCurveNode",
    "CurveDefinition",
    "curve_definition",
]
