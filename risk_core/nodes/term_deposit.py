"""
Curve node calibrated to a term deposit.
"""

from dataclasses import dataclass
from datetime import date
from functools import cached_property
from typing import Any

from risk_core.instruments.base import BuySell
from risk_core.instruments.term_deposit import TermDepositTemplate, TermDepositTrade
from risk_core.market.keys import MarketData, ObservableKey
from risk_core.market.metadata import TenorCurveNodeMetadata
from risk_core.nodes.base import CurveNode, ValueType, as_key, require


@dataclass(frozen=True)
class TermDepositCurveNode(CurveNode):
    """
    Curve node whose instrument is a term deposit.

    Attributes
    ----------
    template : TermDepositTemplate
        Template of the deposit
    rate_key : ObservableKey
        Key of the deposit rate quote
    spread : float
        Spread added to the quoted rate when building the trade

    Notes
    -----
    Initial guess by value type: ZERO_RATE -> the quoted rate (without
    spread), DISCOUNT_FACTOR -> 1.0, FORWARD_RATE -> 0.0.
    """

    template: TermDepositTemplate
    rate_key: ObservableKey
    spread: float = 0.0

    def __post_init__(self) -> None:
        """Validate required fields."""
        require(self.template, "template")
        object.__setattr__(self, "rate_key", as_key(self.rate_key, "rate_key"))
        require(self.spread, "spread")

    @classmethod
    def of(
        cls,
        template: TermDepositTemplate,
        rate_key: ObservableKey | str,
        spread: float = 0.0,
    ) -> "TermDepositCurveNode":
        return cls(template, rate_key, spread)  # type: ignore[arg-type]

    @cached_property
    def _requirements(self) -> frozenset[ObservableKey]:
        return frozenset((self.rate_key,))

    def requirements(self) -> frozenset[ObservableKey]:
        return self._requirements

    def metadata(self, valuation_date: date) -> TenorCurveNodeMetadata:
        """Node dated at the deposit end date, labelled with the deposit period."""
        trade = self.template.to_trade(valuation_date, BuySell.BUY, 1.0, 0.0)
        return TenorCurveNodeMetadata(trade.end_date, self.template.deposit_period)

    def trade(self, valuation_date: date, market_data: MarketData) -> TermDepositTrade:
        rate = market_data.get_value(self.rate_key) + self.spread
        return self.template.to_trade(valuation_date, BuySell.BUY, 1.0, rate)

    def initial_guess(
        self, valuation_date: date, market_data: MarketData, value_type: ValueType
    ) -> float:
        if value_type is ValueType.ZERO_RATE:
            return market_data.get_value(self.rate_key)
        if value_type is ValueType.DISCOUNT_FACTOR:
            return 1.0
        return 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "currency": self.template.currency,
            "deposit_period": str(self.template.deposit_period),
            "spread": self.spread,
        }

    @classmethod
    def from_config(cls, config: "TermDepositNodeConfig", currency: str) -> "TermDepositCurveNode":  # noqa: F821
        """Create node from configuration, in the currency of its curve."""
        template = TermDepositTemplate(
            deposit_period=config.deposit_period,  # type: ignore[arg-type]
            currency=currency,
            spot_days=config.spot_days,
        )
        return cls.of(template, config.rate_key, config.spread)
