"""
Tests for curve point shifts and historical shift construction.
"""

import logging
from datetime import date

import numpy as np
import pytest

from risk_core.dates import Tenor
from risk_core.errors import CurveAlignmentError
from risk_core.market import DiscountCurveId, MarketSnapshot, NodalCurve
from risk_core.scenarios import (
    AlignmentPolicy,
    CurvePointShifts,
    CurvePointShiftsBuilder,
    ShiftType,
    build_historical_shifts,
)

USD = DiscountCurveId("USD")
ONE_YEAR = Tenor(1, "Y")
TWO_YEAR = Tenor(2, "Y")


class TestCurvePointShiftsBuilder:
    """Tests for the builder state machine."""

    def test_build_once(self) -> None:
        """The builder is closed after build."""
        builder = CurvePointShifts.builder()
        builder.add_shift(1, ONE_YEAR, 0.001)
        builder.build()
        with pytest.raises(RuntimeError):
            builder.add_shift(2, ONE_YEAR, 0.001)
        with pytest.raises(RuntimeError):
            builder.build()

    def test_base_scenario_rejected(self) -> None:
        with pytest.raises(ValueError, match="base scenario"):
            CurvePointShiftsBuilder().add_shift(0, ONE_YEAR, 0.001)

    def test_non_finite_rejected(self) -> None:
        with pytest.raises(ValueError):
            CurvePointShiftsBuilder().add_shift(1, ONE_YEAR, float("nan"))

    def test_add_shifts(self) -> None:
        shifts = CurvePointShiftsBuilder().add_shifts(2, {ONE_YEAR: 0.1, TWO_YEAR: 0.2}).build()
        assert shifts.shifts_for(2) == {ONE_YEAR: 0.1, TWO_YEAR: 0.2}

    def test_explicit_scenario_count(self) -> None:
        """Scenarios after the last shifted one still count."""
        shifts = CurvePointShifts.builder(scenario_count=5).add_shift(1, ONE_YEAR, 0.001).build()
        assert shifts.scenario_count == 5
        assert shifts.scenario_indices() == [1]

    def test_index_beyond_scenario_count_rejected(self) -> None:
        builder = CurvePointShiftsBuilder(scenario_count=3)
        builder.add_shift(2, ONE_YEAR, 0.001)
        with pytest.raises(ValueError, match="out of range"):
            builder.add_shift(3, ONE_YEAR, 0.001)

    def test_invalid_scenario_count(self) -> None:
        with pytest.raises(ValueError):
            CurvePointShiftsBuilder(scenario_count=0)
        with pytest.raises(ValueError, match="does not cover"):
            CurvePointShifts(ShiftType.ABSOLUTE, {3: {ONE_YEAR: 0.001}}, scenario_count=2)


class TestCurvePointShifts:
    """Tests for shift lookup and application."""

    @pytest.fixture
    def shifts(self) -> CurvePointShifts:
        builder = CurvePointShifts.builder(ShiftType.ABSOLUTE)
        builder.add_shift(1, ONE_YEAR, 0.001)
        builder.add_shift(3, TWO_YEAR, -0.002)
        return builder.build()

    @pytest.fixture
    def curve(self, valuation_date: date, make_curve) -> NodalCurve:
        return make_curve(valuation_date, ["6M", "1Y", "2Y"], [0.01, 0.015, 0.02])

    def test_scenario_count(self, shifts: CurvePointShifts) -> None:
        """Count is the largest index plus the base scenario."""
        assert shifts.scenario_count == 4
        assert shifts.scenario_indices() == [1, 3]
        assert CurvePointShifts.builder().build().scenario_count == 1

    def test_missing_shift_is_none(self, shifts: CurvePointShifts) -> None:
        assert shifts.shift(1, ONE_YEAR) == 0.001
        assert shifts.shift(1, TWO_YEAR) is None
        assert shifts.shift(2, ONE_YEAR) is None

    def test_apply_absolute(self, shifts: CurvePointShifts, curve: NodalCurve) -> None:
        """Only the shifted node moves; topology is unchanged."""
        shifted = shifts.apply_to(curve, 1)
        assert np.allclose(shifted.y_values, [0.01, 0.016, 0.02])
        assert np.array_equal(shifted.x_values, curve.x_values)
        assert shifted.parameter_metadata == curve.parameter_metadata
        assert np.allclose(curve.y_values, [0.01, 0.015, 0.02])

    def test_apply_without_shifts_returns_curve(
        self, shifts: CurvePointShifts, curve: NodalCurve
    ) -> None:
        assert shifts.apply_to(curve, 2) is curve
        assert shifts.apply_to(curve, 0) is curve

    def test_apply_relative(self, curve: NodalCurve) -> None:
        shifts = CurvePointShiftsBuilder(ShiftType.RELATIVE).add_shift(1, TWO_YEAR, 0.1).build()
        assert np.isclose(shifts.apply_to(curve, 1).y_values[2], 0.022)

    def test_to_frame(self, shifts: CurvePointShifts) -> None:
        df = shifts.to_frame()
        assert list(df.columns) == ["Scenario", "Node", "Shift"]
        assert len(df) == 2
        assert df.iloc[0]["Node"] == "1Y"


class TestShiftType:
    """Tests for ShiftType arithmetic."""

    def test_absolute(self) -> None:
        assert np.isclose(ShiftType.ABSOLUTE.compute_shift(0.01, 0.015), 0.005)
        assert np.isclose(ShiftType.ABSOLUTE.apply(0.01, 0.005), 0.015)

    def test_relative(self) -> None:
        assert np.isclose(ShiftType.RELATIVE.compute_shift(0.01, 0.015), 0.5)
        assert np.isclose(ShiftType.RELATIVE.apply(0.01, 0.5), 0.015)

    def test_relative_from_zero(self) -> None:
        with pytest.raises(ValueError):
            ShiftType.RELATIVE.compute_shift(0.0, 0.01)


class TestHistoricalShifts:
    """Tests for build_historical_shifts."""

    def test_day_on_day_moves(self, make_curve) -> None:
        """A node moving 0.01 -> 0.015 -> 0.012 gives shifts +0.005 and -0.003."""
        dates = [date(2015, 4, 20), date(2015, 4, 21), date(2015, 4, 22)]
        history = {
            d: MarketSnapshot(d, {USD: make_curve(d, ["1Y"], [value])})
            for d, value in zip(dates, [0.01, 0.015, 0.012])
        }
        shifts = build_historical_shifts(USD, history, dates)
        assert shifts.scenario_count == 3
        assert np.isclose(shifts.shift(1, ONE_YEAR), 0.005)
        assert np.isclose(shifts.shift(2, ONE_YEAR), -0.003)

    def test_all_nodes(
        self, historical_snapshots: dict, history_dates: list[date]
    ) -> None:
        shifts = build_historical_shifts(USD, historical_snapshots, history_dates)
        assert shifts.scenario_count == 4
        assert np.isclose(shifts.shift(1, TWO_YEAR), 0.001)
        assert np.isclose(shifts.shift(3, TWO_YEAR), 0.0)

    def test_relative(self, historical_snapshots: dict, history_dates: list[date]) -> None:
        shifts = build_historical_shifts(
            USD, historical_snapshots, history_dates, shift_type=ShiftType.RELATIVE
        )
        assert shifts.shift_type is ShiftType.RELATIVE
        assert np.isclose(shifts.shift(1, ONE_YEAR), 0.5)

    def test_missing_snapshot_skips_scenarios(
        self, historical_snapshots: dict, history_dates: list[date]
    ) -> None:
        """Scenarios touching a missing date get no shifts, not zero shifts."""
        history = dict(historical_snapshots)
        del history[history_dates[2]]
        shifts = build_historical_shifts(USD, history, history_dates)
        assert shifts.scenario_indices() == [1]
        assert shifts.shift(2, ONE_YEAR) is None
        assert shifts.shift(3, ONE_YEAR) is None
        assert shifts.scenario_count == len(history_dates)

    def test_missing_last_snapshot_keeps_scenario_count(
        self, historical_snapshots: dict, history_dates: list[date]
    ) -> None:
        """A trailing scenario without shifts is still one of the scenarios."""
        history = dict(historical_snapshots)
        del history[history_dates[-1]]
        shifts = build_historical_shifts(USD, history, history_dates)
        assert shifts.scenario_indices() == [1, 2]
        assert shifts.scenario_count == len(history_dates)

    def test_missing_curve_skips_scenarios(
        self, historical_snapshots: dict, history_dates: list[date]
    ) -> None:
        shifts = build_historical_shifts(
            DiscountCurveId("EUR"), historical_snapshots, history_dates
        )
        assert shifts.scenario_indices() == []
        assert shifts.scenario_count == len(history_dates)

    @pytest.mark.parametrize("alignment", list(AlignmentPolicy))
    def test_relative_shift_from_zero_node(self, make_curve, alignment) -> None:
        """The error names the curve, the date and the node."""
        d0, d1 = date(2015, 4, 20), date(2015, 4, 21)
        history = {
            d0: MarketSnapshot(d0, {USD: make_curve(d0, ["1Y", "2Y"], [0.0, 0.02])}),
            d1: MarketSnapshot(d1, {USD: make_curve(d1, ["1Y", "2Y"], [0.001, 0.021])}),
        }
        with pytest.raises(CurveAlignmentError, match="1Y") as exc_info:
            build_historical_shifts(
                USD, history, [d0, d1], shift_type=ShiftType.RELATIVE, alignment=alignment
            )
        assert exc_info.value.curve_id == USD
        assert exc_info.value.scenario_date == d1

    def test_dates_must_increase(
        self, historical_snapshots: dict, history_dates: list[date]
    ) -> None:
        with pytest.raises(ValueError):
            build_historical_shifts(USD, historical_snapshots, list(reversed(history_dates)))

    def test_node_count_change(self, make_curve) -> None:
        """Positional alignment cannot compare curves with different node counts."""
        d0, d1 = date(2015, 4, 20), date(2015, 4, 21)
        history = {
            d0: MarketSnapshot(d0, {USD: make_curve(d0, ["1Y", "2Y"], [0.01, 0.02])}),
            d1: MarketSnapshot(d1, {USD: make_curve(d1, ["1Y", "2Y", "5Y"], [0.01, 0.02, 0.03])}),
        }
        with pytest.raises(CurveAlignmentError) as exc_info:
            build_historical_shifts(USD, history, [d0, d1])
        assert exc_info.value.curve_id == USD
        assert exc_info.value.scenario_date == d1

    @pytest.fixture
    def relabelled_history(self, make_curve) -> tuple[dict, list[date]]:
        """Second snapshot has the same node count but a different last node."""
        d0, d1 = date(2015, 4, 20), date(2015, 4, 21)
        history = {
            d0: MarketSnapshot(d0, {USD: make_curve(d0, ["1Y", "2Y"], [0.01, 0.02])}),
            d1: MarketSnapshot(d1, {USD: make_curve(d1, ["1Y", "3Y"], [0.011, 0.025])}),
        }
        return history, [d0, d1]

    def test_position_policy_warns(self, relabelled_history, caplog) -> None:
        history, dates = relabelled_history
        with caplog.at_level(logging.WARNING, logger="risk_core.scenarios.historical"):
            shifts = build_historical_shifts(USD, history, dates, alignment=AlignmentPolicy.POSITION)
        assert "comparing by position" in caplog.text
        assert np.isclose(shifts.shift(1, Tenor(3, "Y")), 0.005)

    def test_strict_policy_raises(self, relabelled_history) -> None:
        history, dates = relabelled_history
        with pytest.raises(CurveAlignmentError):
            build_historical_shifts(USD, history, dates, alignment=AlignmentPolicy.STRICT)

    def test_identifier_policy_matches_nodes(self, relabelled_history) -> None:
        """Only nodes present on both dates get a shift."""
        history, dates = relabelled_history
        shifts = build_historical_shifts(USD, history, dates, alignment=AlignmentPolicy.IDENTIFIER)
        assert np.isclose(shifts.shift(1, ONE_YEAR), 0.001)
        assert shifts.shift(1, Tenor(3, "Y")) is None
