"""
Pytest fixtures for curve risk testing.

Provides reusable test fixtures for market data, curves, snapshots, nodes
and historical curve series.
"""

from collections.abc import Callable, Sequence
from datetime import date

import matplotlib
import numpy as np
import pytest

from risk_core.dates import Tenor, add_tenor, year_fraction
from risk_core.market import (
    DiscountCurveId,
    IborIndex,
    MarketData,
    MarketSnapshot,
    NodalCurve,
    RateIndexCurveId,
    TenorCurveNodeMetadata,
)
from risk_core.pricer import RatesProvider

matplotlib.use("Agg")

CurveFactory = Callable[..., NodalCurve]


@pytest.fixture
def valuation_date() -> date:
    """Thursday 23 April 2015; spot is Monday 27 April."""
    return date(2015, 4, 23)


@pytest.fixture
def usd_libor_3m() -> IborIndex:
    """USD 3M rate index."""
    return IborIndex("USD-LIBOR-3M", "USD", Tenor.parse("3M"))


@pytest.fixture
def make_curve() -> CurveFactory:
    """Factory for zero-rate curves with tenor node metadata."""

    def factory(
        valuation: date,
        tenors: Sequence[str],
        values: Sequence[float],
        name: str = "USD-Discount",
    ) -> NodalCurve:
        node_dates = [add_tenor(valuation, t) for t in tenors]
        return NodalCurve(
            name=name,
            x_values=np.array([year_fraction(valuation, d) for d in node_dates]),
            y_values=np.array(values, dtype=float),
            parameter_metadata=tuple(
                TenorCurveNodeMetadata(d, Tenor.parse(t)) for d, t in zip(node_dates, tenors)
            ),
        )

    return factory


@pytest.fixture
def market_data(valuation_date: date) -> MarketData:
    """Quotes for deposits, FRAs and an FX swap."""
    return MarketData.of(
        valuation_date,
        {
            "USD-DEP-3M": 0.0028,
            "USD-DEP-6M": 0.0040,
            "USD-FRA-3Mx6M": 0.0042,
            "EUR/USD": 1.0800,
            "EUR/USD-3M-FXP": 0.0012,
        },
    )


@pytest.fixture
def discount_curve(valuation_date: date, make_curve: CurveFactory) -> NodalCurve:
    """Upward sloping USD discount curve."""
    return make_curve(
        valuation_date,
        ["3M", "6M", "1Y", "2Y", "5Y"],
        [0.010, 0.012, 0.015, 0.020, 0.025],
    )


@pytest.fixture
def forward_curve(valuation_date: date, make_curve: CurveFactory) -> NodalCurve:
    """USD-LIBOR-3M forward curve."""
    return make_curve(
        valuation_date,
        ["3M", "6M", "1Y", "2Y"],
        [0.012, 0.014, 0.017, 0.022],
        name="USD-LIBOR-3M",
    )


@pytest.fixture
def snapshot(
    valuation_date: date, discount_curve: NodalCurve, forward_curve: NodalCurve
) -> MarketSnapshot:
    """Snapshot with the USD discount and forward curves."""
    return MarketSnapshot(
        valuation_date,
        {
            DiscountCurveId("USD"): discount_curve,
            RateIndexCurveId("USD-LIBOR-3M"): forward_curve,
        },
    )


@pytest.fixture
def provider(snapshot: MarketSnapshot, usd_libor_3m: IborIndex) -> RatesProvider:
    """Rates provider over the standard snapshot."""
    return RatesProvider(snapshot, indices=[usd_libor_3m])


@pytest.fixture
def history_dates() -> list[date]:
    """Four consecutive business days."""
    return [date(2015, 4, 20), date(2015, 4, 21), date(2015, 4, 22), date(2015, 4, 23)]


@pytest.fixture
def historical_snapshots(
    history_dates: list[date], make_curve: CurveFactory
) -> dict[date, MarketSnapshot]:
    """Discount curve snapshots with a 1Y node moving each day."""
    one_year = [0.010, 0.015, 0.012, 0.011]
    two_year = [0.020, 0.021, 0.019, 0.019]
    return {
        d: MarketSnapshot(
            d, {DiscountCurveId("USD"): make_curve(d, ["1Y", "2Y"], [y1, y2])}
        )
        for d, y1, y2 in zip(history_dates, one_year, two_year)
    }
