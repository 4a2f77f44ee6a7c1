"""
Nodal zero-rate curves and curve identifiers.

Provides the identifiers used to locate curves in a market snapshot and
a nodal curve with efficient vectorized discount factor calculation.
"""

from dataclasses import dataclass, field

import numpy as np

from risk_core._types import Currency, FloatArray, Year
from risk_core.dates import Tenor
from risk_core.market.metadata import CurveNodeMetadata

DEFAULT_GROUP = "Default"


@dataclass(frozen=True)
class RateCurveId:
    """Base class for identifiers of rate curves within a curve group."""

    @property
    def name(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class DiscountCurveId(RateCurveId):
    """
    Identifier of the discount curve of a currency.

    Example
    -------
    >>> DiscountCurveId("USD").name
    'USD-Discount'
    """

    currency: Currency
    group: str = DEFAULT_GROUP

    @property
    def name(self) -> str:
        return f"{self.currency}-Discount"

    def __str__(self) -> str:
        return f"{self.group}/{self.name}"


@dataclass(frozen=True)
class RateIndexCurveId(RateCurveId):
    """Identifier of the forward curve of a rate index (e.g., 'USD-LIBOR-3M')."""

    index: str
    group: str = DEFAULT_GROUP

    @property
    def name(self) -> str:
        return self.index

    def __str__(self) -> str:
        return f"{self.group}/{self.name}"


@dataclass(frozen=True)
class IborIndex:
    """
    A floating rate index.

    Attributes
    ----------
    name : str
        Index name (e.g., 'USD-LIBOR-3M')
    currency : str
        Currency of the index
    tenor : Tenor
        Tenor of the underlying deposit
    """

    name: str
    currency: Currency
    tenor: Tenor

    def __post_init__(self) -> None:
        object.__setattr__(self, "tenor", Tenor.parse(self.tenor))

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, eq=False)
class NodalCurve:
    """
    Zero-rate curve defined by discrete nodes.

    Zero rates are continuously compounded and interpolated linearly
    between nodes, with flat extrapolation at both ends.

    Attributes
    ----------
    name : str
        Curve name
    x_values : FloatArray
        Node times in years from the curve valuation date, strictly increasing
    y_values : FloatArray
        Zero rates at each node
    parameter_metadata : tuple[CurveNodeMetadata, ...]
        Metadata of each node (empty if unknown)
    interpolator : str
        Interpolation method name

    Example
    -------
    >>> curve = NodalCurve(
    ...     name="USD-Discount",
    ...     x_values=np.array([1.0, 2.0, 5.0]),
    ...     y_values=np.array([0.02, 0.025, 0.03]),
    ... )
    >>> round(curve.discount_factor(1.0), 4)
    0.9802
    """

    name: str
    x_values: FloatArray
    y_values: FloatArray
    parameter_metadata: tuple[CurveNodeMetadata, ...] = field(default=())
    interpolator: str = "linear"

    def __post_init__(self) -> None:
        """Validate and freeze curve inputs."""
        x = np.array(self.x_values, dtype=np.float64)
        y = np.array(self.y_values, dtype=np.float64)
        if x.ndim != 1 or len(x) == 0:
            raise ValueError("Curve must have at least one node")
        if len(x) != len(y):
            raise ValueError(
                f"x and y values must have same length, got {len(x)} and {len(y)}"
            )
        if not np.all(np.diff(x) > 0):
            raise ValueError("x values must be strictly increasing")
        if self.interpolator != "linear":
            raise ValueError(f"Unsupported interpolator: {self.interpolator}")
        metadata = tuple(self.parameter_metadata)
        if metadata and len(metadata) != len(x):
            raise ValueError(
                f"Expected {len(x)} node metadata entries, got {len(metadata)}"
            )
        x.setflags(write=False)
        y.setflags(write=False)
        object.__setattr__(self, "x_values", x)
        object.__setattr__(self, "y_values", y)
        object.__setattr__(self, "parameter_metadata", metadata)

    @property
    def parameter_count(self) -> int:
        """Number of curve nodes."""
        return len(self.x_values)

    def node_identifiers(self) -> list:
        """Identifiers of each node, taken from the node metadata."""
        if not self.parameter_metadata:
            raise ValueError(f"Curve {self.name} has no node metadata")
        return [meta.identifier for meta in self.parameter_metadata]

    def zero_rate(self, t: Year | FloatArray) -> float | FloatArray:
        """
        Interpolated zero rate at time t.

        Parameters
        ----------
        t : float | FloatArray
            Time(s) in years

        Returns
        -------
        float | FloatArray
            Continuously compounded zero rate(s)
        """
        return np.interp(t, self.x_values, self.y_values)  # type: ignore[return-value]

    def discount_factor(self, t: Year | FloatArray) -> float | FloatArray:
        """
        Calculate discount factor to time t.

        Notes
        -----
        DF(t) = exp(-z(t) * t)
        For t <= 0, returns 1.0
        """
        t_arr = np.maximum(np.asarray(t, dtype=np.float64), 0.0)
        df = np.exp(-self.zero_rate(t_arr) * t_arr)
        return float(df) if np.ndim(df) == 0 else df

    def y_value_parameter_sensitivity(self, t: Year) -> FloatArray:
        """
        Sensitivity of the interpolated zero rate at t to each node value.

        For linear interpolation these are the interpolation weights:
        at most two non-zero entries summing to one.
        """
        weights = np.zeros(self.parameter_count)
        x = self.x_values
        if t <= x[0]:
            weights[0] = 1.0
        elif t >= x[-1]:
            weights[-1] = 1.0
        else:
            hi = int(np.searchsorted(x, t, side="right"))
            lo = hi - 1
            w = (t - x[lo]) / (x[hi] - x[lo])
            weights[lo] = 1.0 - w
            weights[hi] = w
        return weights

    def with_y_values(self, y_values: FloatArray) -> "NodalCurve":
        """
        Return a curve with new node values and unchanged topology.

        Node times, metadata and interpolation are preserved.
        """
        y = np.asarray(y_values, dtype=np.float64)
        if len(y) != self.parameter_count:
            raise ValueError(
                f"Expected {self.parameter_count} y values, got {len(y)}"
            )
        return NodalCurve(
            name=self.name,
            x_values=self.x_values,
            y_values=y,
            parameter_metadata=self.parameter_metadata,
            interpolator=self.interpolator,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodalCurve):
            return NotImplemented
        return (
            self.name == other.name
            and self.interpolator == other.interpolator
            and self.parameter_metadata == other.parameter_metadata
            and np.array_equal(self.x_values, other.x_values)
            and np.array_equal(self.y_values, other.y_values)
        )

    def __hash__(self) -> int:
        return hash((self.name, self.parameter_count, self.parameter_metadata))
