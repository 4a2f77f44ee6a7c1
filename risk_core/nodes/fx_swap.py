"""
Curve node calibrated to an FX swap.
"""

from dataclasses import dataclass
from datetime import date
from functools import cached_property
from typing import Any

from risk_core.instruments.base import BuySell
from risk_core.instruments.fx_swap import FxSwapTemplate, FxSwapTrade
from risk_core.market.keys import MarketData, ObservableKey
from risk_core.market.metadata import TenorCurveNodeMetadata
from risk_core.nodes.base import CurveNode, ValueType, as_key, require

# The node is par by construction: a discount factor unknown starts at 1
_INITIAL_GUESSES = {
    ValueType.DISCOUNT_FACTOR: 1.0,
    ValueType.ZERO_RATE: 0.0,
    ValueType.FORWARD_RATE: 0.0,
}


@dataclass(frozen=True)
class FxSwapCurveNode(CurveNode):
    """
    Curve node whose instrument is an FX swap.

    Reads two quotes: the near FX rate and the forward points.

    Attributes
    ----------
    template : FxSwapTemplate
        Template of the FX swap
    fx_near_key : ObservableKey
        Key of the near FX rate quote
    fx_points_key : ObservableKey
        Key of the forward points quote

    Notes
    -----
    Initial guess by value type: DISCOUNT_FACTOR -> 1.0,
    ZERO_RATE -> 0.0, FORWARD_RATE -> 0.0.

    Example
    -------
    >>> node = FxSwapCurveNode.of(
    ...     FxSwapTemplate.of("EUR/USD", "3M"), "EUR/USD-Spot", "EUR/USD-3M-Pts"
    ... )
    >>> sorted(str(k) for k in node.requirements())
    ['EUR/USD-3M-Pts', 'EUR/USD-Spot']
    """

    template: FxSwapTemplate
    fx_near_key: ObservableKey
    fx_points_key: ObservableKey

    def __post_init__(self) -> None:
        """Validate required fields."""
        require(self.template, "template")
        object.__setattr__(self, "fx_near_key", as_key(self.fx_near_key, "fx_near_key"))
        object.__setattr__(self, "fx_points_key", as_key(self.fx_points_key, "fx_points_key"))

    @classmethod
    def of(
        cls,
        template: FxSwapTemplate,
        fx_near_key: ObservableKey | str,
        fx_points_key: ObservableKey | str,
    ) -> "FxSwapCurveNode":
        return cls(template, fx_near_key, fx_points_key)  # type: ignore[arg-type]

    @cached_property
    def _requirements(self) -> frozenset[ObservableKey]:
        return frozenset((self.fx_near_key, self.fx_points_key))

    def requirements(self) -> frozenset[ObservableKey]:
        return self._requirements

    def metadata(self, valuation_date: date) -> TenorCurveNodeMetadata:
        """Node dated at the far payment date, labelled with the far period."""
        trade = self.template.to_trade(valuation_date, BuySell.BUY, 1.0, 1.0, 0.0)
        return TenorCurveNodeMetadata(trade.far_date, self.template.period_to_far)

    def trade(self, valuation_date: date, market_data: MarketData) -> FxSwapTrade:
        fx_near_rate = market_data.get_value(self.fx_near_key)
        fx_points = market_data.get_value(self.fx_points_key)
        return self.template.to_trade(valuation_date, BuySell.BUY, 1.0, fx_near_rate, fx_points)

    def initial_guess(
        self, valuation_date: date, market_data: MarketData, value_type: ValueType
    ) -> float:
        return _INITIAL_GUESSES.get(value_type, 0.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "currency_pair": str(self.template.currency_pair),
            "period_to_near": str(self.template.period_to_near),
            "period_to_far": str(self.template.period_to_far),
        }

    @classmethod
    def from_config(cls, config: "FxSwapNodeConfig") -> "FxSwapCurveNode":  # noqa: F821
        """
        Create node from configuration.

        Parameters
        ----------
        config : FxSwapNodeConfig
            Node configuration

        Returns
        -------
        FxSwapCurveNode
            Configured node instance
        """
        template = FxSwapTemplate(
            currency_pair=config.currency_pair,  # type: ignore[arg-type]
            period_to_far=config.period_to_far,  # type: ignore[arg-type]
            period_to_near=config.period_to_near,  # type: ignore[arg-type]
            spot_days=config.spot_days,
        )
        return cls.of(template, config.fx_near_key, config.fx_points_key)
