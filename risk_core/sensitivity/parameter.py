"""
Sensitivities to curve parameters.

Point sensitivities are projected onto the nodes of the curves that
answer each query, giving one sensitivity vector per curve and currency.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

import numpy as np

from risk_core._types import Currency, FloatArray
from risk_core.market.curve import RateCurveId
from risk_core.market.metadata import CurveNodeMetadata


@dataclass(frozen=True, eq=False)
class CurveParameterSensitivity:
    """
    Sensitivity of a valuation to each node of one curve.

    Attributes
    ----------
    curve_id : RateCurveId
        Curve the sensitivity refers to
    currency : str
        Currency of the sensitivity values
    values : FloatArray
        One value per curve node
    parameter_metadata : tuple[CurveNodeMetadata, ...]
        Node metadata, aligned with ``values``
    """

    curve_id: RateCurveId
    currency: Currency
    values: FloatArray
    parameter_metadata: tuple[CurveNodeMetadata, ...] = field(default=())

    def __post_init__(self) -> None:
        values = np.array(self.values, dtype=np.float64)
        metadata = tuple(self.parameter_metadata)
        if metadata and len(metadata) != len(values):
            raise ValueError(
                f"Expected {len(values)} node metadata entries, got {len(metadata)}"
            )
        values.setflags(write=False)
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "parameter_metadata", metadata)

    @property
    def key(self) -> tuple[RateCurveId, Currency]:
        return (self.curve_id, self.currency)

    def plus(self, other: "CurveParameterSensitivity") -> "CurveParameterSensitivity":
        """Add another sensitivity to the same curve and currency."""
        if other.key != self.key:
            raise ValueError(f"Cannot add sensitivities for {other.key} and {self.key}")
        if len(other.values) != len(self.values):
            raise ValueError(
                f"Parameter count mismatch for {self.curve_id}: "
                f"{len(self.values)} and {len(other.values)}"
            )
        return CurveParameterSensitivity(
            self.curve_id, self.currency, self.values + other.values, self.parameter_metadata
        )

    def multiplied_by(self, factor: float) -> "CurveParameterSensitivity":
        return CurveParameterSensitivity(
            self.curve_id, self.currency, self.values * factor, self.parameter_metadata
        )

    def total(self) -> float:
        """Sum of node sensitivities (parallel shift sensitivity)."""
        return float(self.values.sum())


class CurveParameterSensitivities:
    """
    Parameter sensitivities for several curves.

    Entries for the same curve and currency are merged by addition.
    """

    def __init__(self, sensitivities: Iterable[CurveParameterSensitivity] = ()) -> None:
        merged: dict[tuple[RateCurveId, Currency], CurveParameterSensitivity] = {}
        for sens in sensitivities:
            existing = merged.get(sens.key)
            merged[sens.key] = sens if existing is None else existing.plus(sens)
        self._sensitivities = merged

    @property
    def sensitivities(self) -> list[CurveParameterSensitivity]:
        return list(self._sensitivities.values())

    def get(self, curve_id: RateCurveId, currency: Currency) -> CurveParameterSensitivity:
        """
        Get the sensitivity to a curve in a currency.

        Raises
        ------
        KeyError
            If there is no sensitivity for the curve and currency
        """
        return self._sensitivities[(curve_id, currency)]

    def combined_with(
        self, other: "CurveParameterSensitivities | CurveParameterSensitivity"
    ) -> "CurveParameterSensitivities":
        extra = [other] if isinstance(other, CurveParameterSensitivity) else other.sensitivities
        return CurveParameterSensitivities(self.sensitivities + extra)

    def multiplied_by(self, factor: float) -> "CurveParameterSensitivities":
        return CurveParameterSensitivities(s.multiplied_by(factor) for s in self.sensitivities)

    def total(self) -> dict[Currency, float]:
        """Sum of all node sensitivities by currency."""
        totals: dict[Currency, float] = {}
        for sens in self.sensitivities:
            totals[sens.currency] = totals.get(sens.currency, 0.0) + sens.total()
        return totals

    def size(self) -> int:
        return len(self._sensitivities)

    def __iter__(self) -> Iterator[CurveParameterSensitivity]:
        return iter(self.sensitivities)

    def __len__(self) -> int:
        return len(self._sensitivities)
