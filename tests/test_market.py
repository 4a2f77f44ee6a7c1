"""
Tests for market module: quotes, curves, metadata and snapshots.
"""

from datetime import date

import numpy as np
import pytest

from risk_core.dates import Tenor
from risk_core.errors import MarketDataNotFoundError
from risk_core.market import (
    DiscountCurveId,
    MarketData,
    MarketSnapshot,
    NodalCurve,
    ObservableKey,
    RateIndexCurveId,
    SimpleCurveNodeMetadata,
    TenorCurveNodeMetadata,
)


class TestObservableKey:
    """Tests for ObservableKey."""

    def test_of_string(self) -> None:
        """Plain strings become keys with the default field."""
        key = ObservableKey.of("USD-DEP-3M")
        assert key == ObservableKey("USD-DEP-3M", "MarketValue")
        assert str(key) == "USD-DEP-3M"

    def test_str_with_field(self) -> None:
        assert str(ObservableKey("EUR/USD", "Bid")) == "EUR/USD/Bid"

    def test_empty_identifier(self) -> None:
        with pytest.raises(ValueError):
            ObservableKey("")


class TestMarketData:
    """Tests for MarketData lookup."""

    def test_get_value(self, market_data: MarketData) -> None:
        assert market_data.get_value(ObservableKey("USD-DEP-3M")) == 0.0028

    def test_missing_key_raises(self, market_data: MarketData) -> None:
        """Missing keys raise a lookup error carrying the key."""
        key = ObservableKey("GBP-DEP-3M")
        with pytest.raises(MarketDataNotFoundError) as exc_info:
            market_data.get_value(key)
        assert exc_info.value.key == key
        assert "GBP-DEP-3M" in str(exc_info.value)

    def test_missing_key_is_key_error(self, market_data: MarketData) -> None:
        with pytest.raises(KeyError):
            market_data.get_value(ObservableKey("missing"))

    def test_contains_value(self, market_data: MarketData) -> None:
        assert market_data.contains_value(ObservableKey("EUR/USD"))
        assert not market_data.contains_value(ObservableKey("EUR/GBP"))

    def test_values_are_copied(self, valuation_date: date) -> None:
        """Later changes to the source dict are not visible."""
        quotes = {"USD-DEP-3M": 0.01}
        md = MarketData.of(valuation_date, quotes)
        quotes["USD-DEP-3M"] = 0.02
        assert md.get_value(ObservableKey("USD-DEP-3M")) == 0.01

    def test_values_read_only(self, market_data: MarketData) -> None:
        with pytest.raises(TypeError):
            market_data.values[ObservableKey("X")] = 1.0  # type: ignore[index]

    def test_with_values(self, market_data: MarketData) -> None:
        updated = market_data.with_values({"USD-DEP-3M": 0.005})
        assert updated.get_value(ObservableKey("USD-DEP-3M")) == 0.005
        assert market_data.get_value(ObservableKey("USD-DEP-3M")) == 0.0028
        assert len(updated) == len(market_data)


class TestNodalCurve:
    """Tests for NodalCurve."""

    def test_discount_factor(self, discount_curve: NodalCurve) -> None:
        """Discount factor at a node uses the node rate."""
        t = discount_curve.x_values[2]
        expected = np.exp(-0.015 * t)
        assert np.isclose(discount_curve.discount_factor(t), expected, rtol=1e-12)

    def test_discount_factor_at_zero(self, discount_curve: NodalCurve) -> None:
        assert discount_curve.discount_factor(0.0) == 1.0

    def test_discount_factor_vectorized(self, discount_curve: NodalCurve) -> None:
        dfs = discount_curve.discount_factor(np.array([0.5, 1.0, 3.0]))
        assert dfs.shape == (3,)
        assert np.all(np.diff(dfs) < 0)

    def test_linear_interpolation(self) -> None:
        curve = NodalCurve("C", np.array([1.0, 2.0]), np.array([0.01, 0.03]))
        assert np.isclose(curve.zero_rate(1.5), 0.02)

    def test_flat_extrapolation(self) -> None:
        curve = NodalCurve("C", np.array([1.0, 2.0]), np.array([0.01, 0.03]))
        assert np.isclose(curve.zero_rate(0.5), 0.01)
        assert np.isclose(curve.zero_rate(10.0), 0.03)

    def test_parameter_sensitivity_weights(self) -> None:
        """Interpolation weights sum to one and sit on neighbouring nodes."""
        curve = NodalCurve("C", np.array([1.0, 2.0, 5.0]), np.array([0.01, 0.02, 0.03]))
        weights = curve.y_value_parameter_sensitivity(1.25)
        assert np.allclose(weights, [0.75, 0.25, 0.0])
        assert np.allclose(curve.y_value_parameter_sensitivity(7.0), [0.0, 0.0, 1.0])

    def test_arrays_read_only(self, discount_curve: NodalCurve) -> None:
        with pytest.raises(ValueError):
            discount_curve.y_values[0] = 1.0

    def test_with_y_values_keeps_topology(self, discount_curve: NodalCurve) -> None:
        """New node values keep node times, metadata and interpolation."""
        bumped = discount_curve.with_y_values(discount_curve.y_values + 0.001)
        assert np.array_equal(bumped.x_values, discount_curve.x_values)
        assert bumped.parameter_metadata == discount_curve.parameter_metadata
        assert bumped.interpolator == discount_curve.interpolator
        assert np.allclose(bumped.y_values - discount_curve.y_values, 0.001)

    def test_with_y_values_wrong_length(self, discount_curve: NodalCurve) -> None:
        with pytest.raises(ValueError):
            discount_curve.with_y_values(np.array([0.01]))

    def test_node_identifiers(self, discount_curve: NodalCurve) -> None:
        assert discount_curve.node_identifiers()[0] == Tenor(3, "M")

    def test_node_identifiers_without_metadata(self) -> None:
        curve = NodalCurve("C", np.array([1.0]), np.array([0.01]))
        with pytest.raises(ValueError):
            curve.node_identifiers()

    def test_validation(self) -> None:
        """Invalid node layouts are rejected."""
        with pytest.raises(ValueError):
            NodalCurve("C", np.array([1.0, 2.0]), np.array([0.01]))
        with pytest.raises(ValueError):
            NodalCurve("C", np.array([2.0, 1.0]), np.array([0.01, 0.02]))
        with pytest.raises(ValueError):
            NodalCurve("C", np.array([1.0]), np.array([0.01]), interpolator="cubic")

    def test_equality(self, discount_curve: NodalCurve) -> None:
        same = discount_curve.with_y_values(discount_curve.y_values.copy())
        assert same == discount_curve
        assert hash(same) == hash(discount_curve)


class TestCurveNodeMetadata:
    """Tests for node metadata."""

    def test_tenor_metadata(self) -> None:
        meta = TenorCurveNodeMetadata(date(2015, 7, 27), "3M")
        assert meta.identifier == Tenor(3, "M")
        assert meta.label == "3M"

    def test_simple_metadata(self) -> None:
        meta = SimpleCurveNodeMetadata(date(2015, 10, 27), "3Mx6M")
        assert meta.identifier == "3Mx6M"
        assert meta.label == "3Mx6M"

    def test_simple_metadata_empty_label(self) -> None:
        with pytest.raises(ValueError):
            SimpleCurveNodeMetadata(date(2015, 10, 27), "")


class TestMarketSnapshot:
    """Tests for MarketSnapshot."""

    def test_curve_lookup(self, snapshot: MarketSnapshot, discount_curve: NodalCurve) -> None:
        assert snapshot.curve(DiscountCurveId("USD")) is discount_curve

    def test_missing_curve(self, snapshot: MarketSnapshot) -> None:
        with pytest.raises(MarketDataNotFoundError):
            snapshot.curve(DiscountCurveId("EUR"))

    def test_with_curves_is_new_snapshot(
        self, snapshot: MarketSnapshot, discount_curve: NodalCurve
    ) -> None:
        """Replacing a curve leaves the original snapshot untouched."""
        bumped = discount_curve.with_y_values(discount_curve.y_values + 0.01)
        updated = snapshot.with_curves({DiscountCurveId("USD"): bumped})
        assert updated.curve(DiscountCurveId("USD")) is bumped
        assert snapshot.curve(DiscountCurveId("USD")) is discount_curve
        assert updated.curve(RateIndexCurveId("USD-LIBOR-3M")) is snapshot.curve(
            RateIndexCurveId("USD-LIBOR-3M")
        )

    def test_with_no_curves_returns_self(self, snapshot: MarketSnapshot) -> None:
        assert snapshot.with_curves({}) is snapshot

    def test_curve_ids(self) -> None:
        assert DiscountCurveId("USD").name == "USD-Discount"
        assert str(RateIndexCurveId("USD-LIBOR-3M")) == "Default/USD-LIBOR-3M"
