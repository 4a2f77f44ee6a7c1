"""
Filters selecting which curves of a snapshot a shift set applies to.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from risk_core.market.curve import DiscountCurveId, NodalCurve, RateCurveId, RateIndexCurveId
from risk_core.scenarios.shifts import CurvePointShifts


class CurveFilter(ABC):
    """Predicate over the curves of a market snapshot."""

    @abstractmethod
    def matches(self, curve_id: RateCurveId, curve: NodalCurve) -> bool:
        """Whether the curve is selected."""


@dataclass(frozen=True)
class AnyDiscountCurveFilter(CurveFilter):
    """Selects every discount curve."""

    def matches(self, curve_id: RateCurveId, curve: NodalCurve) -> bool:
        return isinstance(curve_id, DiscountCurveId)


@dataclass(frozen=True)
class CurveRateIndexFilter(CurveFilter):
    """Selects the forward curve of one rate index."""

    index: str

    def matches(self, curve_id: RateCurveId, curve: NodalCurve) -> bool:
        return isinstance(curve_id, RateIndexCurveId) and curve_id.index == str(self.index)


@dataclass(frozen=True)
class CurveIdFilter(CurveFilter):
    """Selects a single curve by identifier."""

    curve_id: RateCurveId

    def matches(self, curve_id: RateCurveId, curve: NodalCurve) -> bool:
        return curve_id == self.curve_id


@dataclass(frozen=True)
class PerturbationMapping:
    """
    Binds a shift set to the curves a filter selects.

    Attributes
    ----------
    curve_filter : CurveFilter
        Curves the shifts apply to
    shifts : CurvePointShifts
        Shifts per scenario
    """

    curve_filter: CurveFilter
    shifts: CurvePointShifts

    def matches(self, curve_id: RateCurveId, curve: NodalCurve) -> bool:
        return self.curve_filter.matches(curve_id, curve)

    @property
    def scenario_count(self) -> int:
        return self.shifts.scenario_count
