"""
Curve node calibrated to a forward rate agreement.
"""

from dataclasses import dataclass
from datetime import date
from functools import cached_property
from typing import Any

from risk_core.dates import Tenor
from risk_core.instruments.base import BuySell
from risk_core.instruments.fra import FraTemplate, FraTrade
from risk_core.market.curve import IborIndex
from risk_core.market.keys import MarketData, ObservableKey
from risk_core.market.metadata import SimpleCurveNodeMetadata
from risk_core.nodes.base import CurveNode, ValueType, as_key, require


@dataclass(frozen=True)
class FraCurveNode(CurveNode):
    """
    Curve node whose instrument is a FRA.

    Attributes
    ----------
    template : FraTemplate
        Template of the FRA
    rate_key : ObservableKey
        Key of the FRA rate quote
    spread : float
        Spread added to the quoted rate when building the trade

    Notes
    -----
    Initial guess by value type: ZERO_RATE and FORWARD_RATE -> the quoted
    rate (without spread), DISCOUNT_FACTOR -> 1.0.
    """

    template: FraTemplate
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
        period_to_start: Tenor | str,
        index: IborIndex,
        rate_key: ObservableKey | str,
        spread: float = 0.0,
    ) -> "FraCurveNode":
        """Create a node for a FRA starting after a period, on an index."""
        return cls(FraTemplate.of(period_to_start, index), rate_key, spread)  # type: ignore[arg-type]

    @cached_property
    def _requirements(self) -> frozenset[ObservableKey]:
        return frozenset((self.rate_key,))

    def requirements(self) -> frozenset[ObservableKey]:
        return self._requirements

    def metadata(self, valuation_date: date) -> SimpleCurveNodeMetadata:
        """Node dated at the FRA end date, labelled with the period to end."""
        trade = self.template.to_trade(valuation_date, BuySell.BUY, 1.0, 0.0)
        return SimpleCurveNodeMetadata(trade.end_date, str(self.template.period_to_end))

    def trade(self, valuation_date: date, market_data: MarketData) -> FraTrade:
        fixed_rate = market_data.get_value(self.rate_key) + self.spread
        return self.template.to_trade(valuation_date, BuySell.BUY, 1.0, fixed_rate)

    def initial_guess(
        self, valuation_date: date, market_data: MarketData, value_type: ValueType
    ) -> float:
        if value_type in (ValueType.ZERO_RATE, ValueType.FORWARD_RATE):
            return market_data.get_value(self.rate_key)
        if value_type is ValueType.DISCOUNT_FACTOR:
            return 1.0
        return 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "fra": self.template.name,
            "index": self.template.index.name,
            "spread": self.spread,
        }

    @classmethod
    def from_config(
        cls, config: "FraNodeConfig", index: IborIndex  # noqa: F821
    ) -> "FraCurveNode":
        """
        Create node from configuration.

        Parameters
        ----------
        config : FraNodeConfig
            Node configuration
        index : IborIndex
            Index of the curve the node belongs to

        Returns
        -------
        FraCurveNode
            Configured node instance
        """
        return cls.of(config.period_to_start, index, config.rate_key, config.spread)
