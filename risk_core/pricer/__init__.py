"""
Pricers producing valuations and point sensitivities.

This module provides:
- A rates provider view over a market snapshot
- A discounting term deposit pricer
"""

from risk_core.pricer.provider import RatesProvider
from risk_core.pricer.term_deposit import DiscountingTermDepositPricer

__all__ = [
    "RatesProvider",
    "DiscountingTermDepositPricer",
]
