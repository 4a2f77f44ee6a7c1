"""
Point sensitivities to individual curve queries.

A point sensitivity records the derivative of a valuation with respect to
a single curve query, such as the zero rate of a currency's discount curve
at a date. Two point sensitivities refer to the same query when all their
fields except the sensitivity value are equal.
"""

import math
from dataclasses import dataclass, fields, replace
from datetime import date
from typing import Any

from risk_core._types import Currency


@dataclass(frozen=True)
class PointSensitivity:
    """
    Base class for point sensitivities.

    Subclasses are frozen dataclasses declaring a ``sensitivity`` field
    and a ``currency`` field; every other field is part of the query
    identity.
    """

    def __post_init__(self) -> None:
        """Reject non-finite sensitivity values."""
        if not math.isfinite(self.sensitivity):  # type: ignore[attr-defined]
            raise ValueError(
                f"Sensitivity must be finite, got {self.sensitivity} "  # type: ignore[attr-defined]
                f"for {type(self).__name__}"
            )

    def with_sensitivity(self, sensitivity: float) -> "PointSensitivity":
        """Return a copy with a different sensitivity value."""
        return replace(self, sensitivity=float(sensitivity))

    def identity(self) -> tuple[Any, ...]:
        """
        Sort key identifying the curve query, excluding the value.

        The concrete type name comes first so that sensitivities of
        different kinds have a stable total order.
        """
        return (type(self).__name__,) + tuple(
            getattr(self, f.name) for f in fields(self) if f.name != "sensitivity"
        )

    def compare_excluding_sensitivity(self, other: "PointSensitivity") -> int:
        """
        Compare two sensitivities ignoring the sensitivity value.

        Returns
        -------
        int
            Negative, zero or positive as this query sorts before, equal to
            or after the other query
        """
        a, b = self.identity(), other.identity()
        return (a > b) - (a < b)


@dataclass(frozen=True)
class ZeroRateSensitivity(PointSensitivity):
    """
    Sensitivity to the zero rate of a discount curve at a date.

    Attributes
    ----------
    curve_currency : str
        Currency of the discount curve
    date : date
        Date of the zero rate query
    sensitivity : float
        Derivative of the valuation with respect to the zero rate
    currency : str
        Currency of the sensitivity value (defaults to the curve currency)
    """

    curve_currency: Currency
    date: date
    sensitivity: float
    currency: Currency = ""

    def __post_init__(self) -> None:
        if not self.curve_currency:
            raise ValueError("Curve currency must not be empty")
        if not self.currency:
            object.__setattr__(self, "currency", self.curve_currency)
        super().__post_init__()


@dataclass(frozen=True)
class IborRateSensitivity(PointSensitivity):
    """
    Sensitivity to the forward rate of an index fixing.

    Attributes
    ----------
    index : str
        Name of the rate index (e.g., 'USD-LIBOR-3M')
    fixing_date : date
        Fixing date of the forward rate
    sensitivity : float
        Derivative of the valuation with respect to the forward rate
    currency : str
        Currency of the sensitivity value
    """

    index: str
    fixing_date: date
    sensitivity: float
    currency: Currency

    def __post_init__(self) -> None:
        if not self.index:
            raise ValueError("Index must not be empty")
        super().__post_init__()
