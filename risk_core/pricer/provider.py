"""
Rates provider exposing discount factors and forward rates from a snapshot.

Also converts point sensitivities into sensitivities to the curve nodes
that answer each query.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date

import numpy as np

from risk_core._types import Currency
from risk_core.dates import add_tenor, year_fraction
from risk_core.market.curve import (
    DEFAULT_GROUP,
    DiscountCurveId,
    IborIndex,
    NodalCurve,
    RateCurveId,
    RateIndexCurveId,
)
from risk_core.market.snapshot import MarketSnapshot
from risk_core.sensitivity.parameter import (
    CurveParameterSensitivities,
    CurveParameterSensitivity,
)
from risk_core.sensitivity.point import IborRateSensitivity, ZeroRateSensitivity
from risk_core.sensitivity.points import PointSensitivities

logger = logging.getLogger(__name__)


class RatesProvider:
    """
    Rates view of a market snapshot for one curve group.

    Parameters
    ----------
    snapshot : MarketSnapshot
        Market snapshot holding the calibrated curves
    indices : Iterable[IborIndex]
        Rate indices whose forward curves may be queried
    group : str
        Curve group used to build curve identifiers

    Example
    -------
    >>> provider = RatesProvider(snapshot)
    >>> provider.discount_factor("USD", date(2016, 4, 23))
    """

    def __init__(
        self,
        snapshot: MarketSnapshot,
        indices: Iterable[IborIndex] = (),
        group: str = DEFAULT_GROUP,
    ) -> None:
        self.snapshot = snapshot
        self.group = group
        self.indices: Mapping[str, IborIndex] = {index.name: index for index in indices}

    @property
    def valuation_date(self) -> date:
        return self.snapshot.valuation_date

    def _time(self, d: date) -> float:
        return year_fraction(self.valuation_date, d)

    def discount_curve_id(self, currency: Currency) -> DiscountCurveId:
        return DiscountCurveId(currency, self.group)

    def discount_curve(self, currency: Currency) -> NodalCurve:
        return self.snapshot.curve(self.discount_curve_id(currency))

    def discount_factor(self, currency: Currency, d: date) -> float:
        """Discount factor from the valuation date to a date."""
        return float(self.discount_curve(currency).discount_factor(self._time(d)))

    def zero_rate(self, currency: Currency, d: date) -> float:
        """Continuously compounded zero rate to a date."""
        return float(self.discount_curve(currency).zero_rate(self._time(d)))

    def _index(self, name: str) -> IborIndex:
        try:
            return self.indices[name]
        except KeyError:
            raise ValueError(f"Unknown rate index: {name}") from None

    def _forward_dates(self, index: IborIndex, fixing_date: date) -> tuple[date, date, float]:
        end = add_tenor(fixing_date, index.tenor)
        return fixing_date, end, year_fraction(fixing_date, end)

    def ibor_rate(self, index: IborIndex | str, fixing_date: date) -> float:
        """
        Simply compounded forward rate of an index fixing.

        Notes
        -----
        F = (DF(s) / DF(e) - 1) / tau, from the index forward curve
        """
        index = self._index(index) if isinstance(index, str) else index
        curve = self.snapshot.curve(RateIndexCurveId(index.name, self.group))
        start, end, tau = self._forward_dates(index, fixing_date)
        df_start = curve.discount_factor(self._time(start))
        df_end = curve.discount_factor(self._time(end))
        return float((df_start / df_end - 1.0) / tau)

    def curve_parameter_sensitivity(
        self, sensitivities: PointSensitivities
    ) -> CurveParameterSensitivities:
        """
        Project point sensitivities onto curve nodes.

        Parameters
        ----------
        sensitivities : PointSensitivities
            Point sensitivities, normalized or not

        Returns
        -------
        CurveParameterSensitivities
            One sensitivity vector per curve and currency

        Raises
        ------
        TypeError
            If a point sensitivity type is not supported
        """
        vectors: dict[tuple[RateCurveId, Currency], np.ndarray] = {}

        def accumulate(curve_id: RateCurveId, currency: Currency, values: np.ndarray) -> None:
            key = (curve_id, currency)
            vectors[key] = vectors[key] + values if key in vectors else values

        for point in sensitivities.normalized():
            if isinstance(point, ZeroRateSensitivity):
                curve_id = self.discount_curve_id(point.curve_currency)
                curve = self.snapshot.curve(curve_id)
                weights = curve.y_value_parameter_sensitivity(self._time(point.date))
                accumulate(curve_id, point.currency, point.sensitivity * weights)
            elif isinstance(point, IborRateSensitivity):
                index = self._index(point.index)
                curve_id = RateIndexCurveId(index.name, self.group)
                curve = self.snapshot.curve(curve_id)
                start, end, tau = self._forward_dates(index, point.fixing_date)
                t_start, t_end = self._time(start), self._time(end)
                ratio = curve.discount_factor(t_start) / curve.discount_factor(t_end)
                # dF/dz(t) for the start and end zero rates
                d_start = -t_start * ratio / tau
                d_end = t_end * ratio / tau
                values = point.sensitivity * (
                    d_start * curve.y_value_parameter_sensitivity(t_start)
                    + d_end * curve.y_value_parameter_sensitivity(t_end)
                )
                accumulate(curve_id, point.currency, values)
            else:
                raise TypeError(
                    f"Unsupported point sensitivity type: {type(point).__name__}"
                )

        logger.debug(
            "Projected %d point sensitivities onto %d curves",
            sensitivities.size(),
            len(vectors),
        )
        return CurveParameterSensitivities(
            CurveParameterSensitivity(
                curve_id,
                currency,
                values,
                self.snapshot.curve(curve_id).parameter_metadata,
            )
            for (curve_id, currency), values in vectors.items()
        )
