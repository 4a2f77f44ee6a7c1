"""
Calibration instruments built by curve nodes.

Provides trades and templates for:
- FX swaps
- Forward rate agreements (FRA)
- Term deposits

Templates hold the conventions of a market instrument; combined with a
trade date and market quotes they materialise a concrete trade.
"""

from risk_core.instruments.base import BuySell, CalibrationTrade, CurrencyPair
from risk_core.instruments.fra import FraTemplate, FraTrade
from risk_core.instruments.fx_swap import FxSwapTemplate, FxSwapTrade
from risk_core.instruments.term_deposit import TermDepositTemplate, TermDepositTrade

__all__ = [
    "BuySell",
    "CalibrationTrade",
    "CurrencyPair",
    "FraTemplate",
    "FraTrade",
    "FxSwapTemplate",
    "FxSwapTrade",
    "TermDepositTemplate",
    "TermDepositTrade",
]
