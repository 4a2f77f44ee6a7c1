"""
Tests for scenario definitions, replay and scenario series.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import date

import numpy as np
import pytest

from risk_core.dates import Tenor
from risk_core.errors import ScenarioReplayError
from risk_core.market import DiscountCurveId, MarketSnapshot, NodalCurve, RateIndexCurveId
from risk_core.pricer import DiscountingTermDepositPricer, RatesProvider
from risk_core.instruments import BuySell, TermDepositTemplate
from risk_core.scenarios import (
    AnyDiscountCurveFilter,
    CurveIdFilter,
    CurvePointShifts,
    CurveRateIndexFilter,
    PerturbationMapping,
    ScenarioDefinition,
    ScenarioReplay,
    ScenarioSeries,
    build_historical_shifts,
)

USD = DiscountCurveId("USD")
LIBOR = RateIndexCurveId("USD-LIBOR-3M")
ONE_YEAR = Tenor(1, "Y")


@pytest.fixture
def one_node_snapshot(valuation_date: date, make_curve) -> MarketSnapshot:
    """Snapshot whose discount curve has a single 1Y node at 1%."""
    return MarketSnapshot(valuation_date, {USD: make_curve(valuation_date, ["1Y"], [0.01])})


def node_value_pricer(snapshot: MarketSnapshot) -> float:
    """Values the portfolio at 100 plus 1000 per unit of the 1Y rate move."""
    return 100.0 + 1000.0 * (snapshot.curve(USD).y_values[0] - 0.01)


def shifts_of(*moves: float) -> CurvePointShifts:
    builder = CurvePointShifts.builder()
    for i, move in enumerate(moves, start=1):
        builder.add_shift(i, ONE_YEAR, move)
    return builder.build()


class TestFilters:
    """Tests for curve filters."""

    def test_any_discount(self, discount_curve: NodalCurve) -> None:
        curve_filter = AnyDiscountCurveFilter()
        assert curve_filter.matches(USD, discount_curve)
        assert not curve_filter.matches(LIBOR, discount_curve)

    def test_rate_index(self, forward_curve: NodalCurve) -> None:
        assert CurveRateIndexFilter("USD-LIBOR-3M").matches(LIBOR, forward_curve)
        assert not CurveRateIndexFilter("USD-LIBOR-6M").matches(LIBOR, forward_curve)
        assert not CurveRateIndexFilter("USD-LIBOR-3M").matches(USD, forward_curve)

    def test_curve_id(self, discount_curve: NodalCurve) -> None:
        assert CurveIdFilter(USD).matches(USD, discount_curve)
        assert not CurveIdFilter(DiscountCurveId("EUR")).matches(USD, discount_curve)


class TestScenarioDefinition:
    """Tests for ScenarioDefinition."""

    def test_scenario_count_from_mappings(self) -> None:
        definition = ScenarioDefinition.of_mappings(
            PerturbationMapping(AnyDiscountCurveFilter(), shifts_of(0.1)),
            PerturbationMapping(CurveIdFilter(LIBOR), shifts_of(0.1, 0.2, 0.3)),
        )
        assert definition.scenario_count == 4

    def test_explicit_scenario_count(self) -> None:
        definition = ScenarioDefinition.of_mappings(
            PerturbationMapping(AnyDiscountCurveFilter(), shifts_of(0.1)), scenario_count=10
        )
        assert definition.scenario_count == 10

    def test_base_scenario_unchanged(self, one_node_snapshot: MarketSnapshot) -> None:
        definition = ScenarioDefinition.of_mappings(
            PerturbationMapping(AnyDiscountCurveFilter(), shifts_of(0.1))
        )
        assert definition.apply(one_node_snapshot, 0) is one_node_snapshot

    def test_first_matching_mapping_wins(self, one_node_snapshot: MarketSnapshot) -> None:
        """A curve is perturbed by the first mapping that selects it."""
        definition = ScenarioDefinition.of_mappings(
            PerturbationMapping(CurveIdFilter(USD), shifts_of(0.001)),
            PerturbationMapping(AnyDiscountCurveFilter(), shifts_of(0.002)),
        )
        perturbed = definition.apply(one_node_snapshot, 1)
        assert np.isclose(perturbed.curve(USD).y_values[0], 0.011)

    def test_unmatched_curves_untouched(self, snapshot: MarketSnapshot) -> None:
        definition = ScenarioDefinition.of_mappings(
            PerturbationMapping(CurveIdFilter(USD), shifts_of(0.001))
        )
        perturbed = definition.apply(snapshot, 1)
        assert perturbed.curve(LIBOR) is snapshot.curve(LIBOR)
        assert perturbed is not snapshot
        assert snapshot.curve(USD).y_values[2] == 0.015

    def test_missing_shift_means_no_perturbation(self, one_node_snapshot: MarketSnapshot) -> None:
        shifts = CurvePointShifts.builder().add_shift(2, ONE_YEAR, 0.001).build()
        definition = ScenarioDefinition.of_mappings(PerturbationMapping(CurveIdFilter(USD), shifts))
        assert definition.apply(one_node_snapshot, 1).curve(USD) is one_node_snapshot.curve(USD)

    def test_index_out_of_range(self, one_node_snapshot: MarketSnapshot) -> None:
        definition = ScenarioDefinition.of_mappings(
            PerturbationMapping(CurveIdFilter(USD), shifts_of(0.001))
        )
        with pytest.raises(IndexError):
            definition.apply(one_node_snapshot, 2)


class TestScenarioReplay:
    """Tests for ScenarioReplay."""

    @pytest.fixture
    def definition(self) -> ScenarioDefinition:
        return ScenarioDefinition.of_mappings(
            PerturbationMapping(AnyDiscountCurveFilter(), shifts_of(0.0012, -0.0013))
        )

    def test_pnl_against_base(
        self, definition: ScenarioDefinition, one_node_snapshot: MarketSnapshot
    ) -> None:
        """Valuations 100.0, 101.2 and 98.7 give P&L of +1.2 and -1.3."""
        series = ScenarioReplay(definition, node_value_pricer).run(one_node_snapshot)
        assert np.allclose(series.values, [100.0, 101.2, 98.7])
        assert np.allclose(series.pnl(), [1.2, -1.3])

    def test_concurrent_matches_serial(
        self, definition: ScenarioDefinition, one_node_snapshot: MarketSnapshot
    ) -> None:
        """Concurrent pricing is assembled in scenario order."""
        serial = ScenarioReplay(definition, node_value_pricer).run(one_node_snapshot)
        with ThreadPoolExecutor(max_workers=3) as executor:
            concurrent = ScenarioReplay(definition, node_value_pricer, executor).run(
                one_node_snapshot
            )
        assert concurrent == serial

    def test_pricer_failure_aborts(
        self, definition: ScenarioDefinition, one_node_snapshot: MarketSnapshot
    ) -> None:
        """A failing scenario aborts the replay and names the scenario."""

        def pricer(snapshot: MarketSnapshot) -> float:
            value = node_value_pricer(snapshot)
            if value < 100.0:
                raise ArithmeticError("pricing failed")
            return value

        with pytest.raises(ScenarioReplayError) as exc_info:
            ScenarioReplay(definition, pricer).run(one_node_snapshot)
        assert exc_info.value.scenario_index == 2
        assert isinstance(exc_info.value.__cause__, ArithmeticError)

    def test_pricer_failure_aborts_concurrent(
        self, definition: ScenarioDefinition, one_node_snapshot: MarketSnapshot
    ) -> None:
        def pricer(snapshot: MarketSnapshot) -> float:
            raise RuntimeError("no model")

        with ThreadPoolExecutor(max_workers=2) as executor:
            with pytest.raises(ScenarioReplayError):
                ScenarioReplay(definition, pricer, executor).run(one_node_snapshot)

    def test_scenario_dates(
        self, definition: ScenarioDefinition, one_node_snapshot: MarketSnapshot
    ) -> None:
        dates = [date(2015, 4, 21), date(2015, 4, 22), date(2015, 4, 23)]
        series = ScenarioReplay(definition, node_value_pricer).run(one_node_snapshot, dates)
        assert series.dates == tuple(dates)
        with pytest.raises(ValueError):
            ScenarioReplay(definition, node_value_pricer).run(one_node_snapshot, dates[:2])

    def test_historical_deposit_var(
        self,
        historical_snapshots: dict,
        history_dates: list[date],
        valuation_date: date,
    ) -> None:
        """Historical moves replayed through the deposit pricer."""
        shifts = build_historical_shifts(USD, historical_snapshots, history_dates)
        definition = ScenarioDefinition.of_mappings(
            PerturbationMapping(AnyDiscountCurveFilter(), shifts)
        )
        base = historical_snapshots[history_dates[-1]]
        deposit = TermDepositTemplate("1Y", "USD").to_trade(valuation_date, BuySell.BUY, 1e7, 0.015)
        pricer = DiscountingTermDepositPricer()

        series = ScenarioReplay(
            definition, lambda s: pricer.present_value(deposit, RatesProvider(s))
        ).run(base, history_dates)

        assert len(series) == 4
        pnl = series.pnl()
        # rates up on scenario 1 means the lender loses
        assert pnl[0] < 0
        assert pnl[1] > 0
        assert series.var(0.9) > 0

    def test_missing_last_snapshot_replays_every_date(
        self, historical_snapshots: dict, history_dates: list[date]
    ) -> None:
        """A trailing scenario without shifts is replayed on the base curves."""
        history = dict(historical_snapshots)
        del history[history_dates[-1]]
        definition = ScenarioDefinition.of_mappings(
            PerturbationMapping(
                AnyDiscountCurveFilter(), build_historical_shifts(USD, history, history_dates)
            )
        )
        assert definition.scenario_count == len(history_dates)

        base = history[history_dates[0]]
        series = ScenarioReplay(
            definition, lambda s: float(np.sum(s.curve(USD).y_values))
        ).run(base, history_dates)

        assert len(series) == len(history_dates)
        assert series.dates == tuple(history_dates)
        assert np.isclose(series.pnl()[0], 0.005 + 0.001)
        assert series.pnl()[-1] == 0.0


class TestScenarioSeries:
    """Tests for ScenarioSeries statistics."""

    @pytest.fixture
    def series(self) -> ScenarioSeries:
        """Base 0 with P&L -50 .. 49."""
        return ScenarioSeries(np.concatenate([[0.0], np.arange(-50.0, 50.0)]))

    def test_base_and_scenarios(self, series: ScenarioSeries) -> None:
        assert series.base_value == 0.0
        assert len(series.scenario_values) == 100
        assert series.scenario_count == 101

    def test_var(self, series: ScenarioSeries) -> None:
        """VaR is the loss at the lower P&L quantile."""
        assert np.isclose(series.var(0.99), 49.01)

    def test_expected_shortfall(self, series: ScenarioSeries) -> None:
        assert np.isclose(series.expected_shortfall(0.99), 50.0)
        assert series.expected_shortfall(0.9) >= series.var(0.9)

    def test_invalid_confidence(self, series: ScenarioSeries) -> None:
        with pytest.raises(ValueError):
            series.var(1.0)
        with pytest.raises(ValueError):
            series.expected_shortfall(0.0)

    def test_base_only(self) -> None:
        series = ScenarioSeries([100.0])
        assert len(series.pnl()) == 0
        with pytest.raises(ValueError):
            series.var(0.99)

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            ScenarioSeries([])

    def test_to_frame(self) -> None:
        dates = [date(2015, 4, 22), date(2015, 4, 23)]
        df = ScenarioSeries([100.0, 101.5], dates).to_frame()
        assert list(df.columns) == ["Date", "Value", "PnL"]
        assert df.index.name == "Scenario"
        assert np.isclose(df.loc[1, "PnL"], 1.5)
