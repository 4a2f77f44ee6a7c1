"""
Market snapshot combining calibrated curves and observable quotes.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType

from risk_core.errors import MarketDataNotFoundError
from risk_core.market.curve import NodalCurve, RateCurveId
from risk_core.market.keys import MarketData


@dataclass(frozen=True)
class MarketSnapshot:
    """
    Immutable market state on a valuation date.

    Scenario perturbations never modify a snapshot; they derive a new one
    with some curves replaced.

    Attributes
    ----------
    valuation_date : date
        Valuation date of the snapshot
    curves : Mapping[RateCurveId, NodalCurve]
        Calibrated curves by identifier
    quotes : MarketData | None
        Observable quotes, if available
    """

    valuation_date: date
    curves: Mapping[RateCurveId, NodalCurve] = field(default_factory=dict)
    quotes: MarketData | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "curves", MappingProxyType(dict(self.curves)))

    def curve(self, curve_id: RateCurveId) -> NodalCurve:
        """
        Get a curve by identifier.

        Raises
        ------
        MarketDataNotFoundError
            If the snapshot has no curve with that identifier
        """
        try:
            return self.curves[curve_id]
        except KeyError:
            raise MarketDataNotFoundError(curve_id, "market snapshot curves") from None

    def curve_ids(self) -> list[RateCurveId]:
        """Identifiers of all curves in the snapshot."""
        return list(self.curves)

    def with_curves(self, curves: Mapping[RateCurveId, NodalCurve]) -> "MarketSnapshot":
        """Return a new snapshot with the given curves added or replaced."""
        if not curves:
            return self
        merged = dict(self.curves)
        merged.update(curves)
        return MarketSnapshot(self.valuation_date, merged, self.quotes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MarketSnapshot):
            return NotImplemented
        return (
            self.valuation_date == other.valuation_date
            and dict(self.curves) == dict(other.curves)
            and self.quotes == other.quotes
        )

    def __hash__(self) -> int:
        return hash((self.valuation_date, frozenset(self.curves)))
