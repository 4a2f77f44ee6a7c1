"""
Curve point shifts applied per scenario.

Shifts are keyed by scenario index and node identifier. Scenario 0 is the
base scenario and never carries a shift. A node with no shift for a
scenario is left unchanged, which is not the same as a recorded shift
of zero only in what the shifts report, never in the perturbed curve.
"""

import logging
from collections.abc import Hashable, Mapping
from enum import Enum
from types import MappingProxyType

import numpy as np
import pandas as pd

from risk_core.market.curve import NodalCurve

logger = logging.getLogger(__name__)


class ShiftType(Enum):
    """How a shift is applied to a node value."""

    ABSOLUTE = "absolute"
    RELATIVE = "relative"

    def apply(self, value: float, shift: float) -> float:
        """Apply a shift to a value."""
        if self is ShiftType.ABSOLUTE:
            return value + shift
        return value * (1.0 + shift)

    def compute_shift(self, base_value: float, target_value: float) -> float:
        """Shift that moves ``base_value`` to ``target_value``."""
        if self is ShiftType.ABSOLUTE:
            return target_value - base_value
        if base_value == 0.0:
            raise ValueError("Relative shift is undefined for a base value of zero")
        return target_value / base_value - 1.0


class CurvePointShifts:
    """
    Immutable node shifts for a set of scenarios.

    Parameters
    ----------
    shift_type : ShiftType
        How shifts are applied
    shifts : Mapping[int, Mapping[Hashable, float]]
        Shift by node identifier, for each scenario index
    scenario_count : int | None
        Number of scenarios including the base scenario. Defaults to the
        largest shifted index plus one; scenarios without shifts still count.

    Example
    -------
    >>> builder = CurvePointShifts.builder(ShiftType.ABSOLUTE)
    >>> builder.add_shift(1, Tenor.parse("1Y"), 0.0005)
    >>> shifts = builder.build()
    >>> shifts.scenario_count
    2
    """

    def __init__(
        self,
        shift_type: ShiftType,
        shifts: Mapping[int, Mapping[Hashable, float]],
        scenario_count: int | None = None,
    ) -> None:
        self.shift_type = shift_type
        self._shifts = MappingProxyType(
            {index: MappingProxyType(dict(nodes)) for index, nodes in shifts.items()}
        )
        minimum = max(self._shifts, default=0) + 1
        if scenario_count is None:
            scenario_count = minimum
        elif scenario_count < minimum:
            raise ValueError(
                f"Scenario count {scenario_count} does not cover shifted scenario {minimum - 1}"
            )
        self._scenario_count = scenario_count

    @staticmethod
    def builder(
        shift_type: ShiftType = ShiftType.ABSOLUTE, scenario_count: int | None = None
    ) -> "CurvePointShiftsBuilder":
        """Create a builder for shifts of the given type."""
        return CurvePointShiftsBuilder(shift_type, scenario_count)

    @property
    def scenario_count(self) -> int:
        """Number of scenarios including the base scenario 0."""
        return self._scenario_count

    def scenario_indices(self) -> list[int]:
        """Indices of scenarios that carry at least one shift."""
        return sorted(self._shifts)

    def shift(self, scenario_index: int, node_identifier: Hashable) -> float | None:
        """Shift of one node in one scenario, or None if there is none."""
        return self._shifts.get(scenario_index, {}).get(node_identifier)

    def shifts_for(self, scenario_index: int) -> dict[Hashable, float]:
        """All node shifts of one scenario."""
        return dict(self._shifts.get(scenario_index, {}))

    def apply_to(self, curve: NodalCurve, scenario_index: int) -> NodalCurve:
        """
        Apply the shifts of a scenario to a curve.

        Nodes are matched by their metadata identifier. Nodes without a
        shift keep their value; node times, metadata and interpolation are
        unchanged.

        Parameters
        ----------
        curve : NodalCurve
            Curve to perturb
        scenario_index : int
            Scenario whose shifts to apply

        Returns
        -------
        NodalCurve
            The perturbed curve, or the input curve if nothing applies
        """
        node_shifts = self._shifts.get(scenario_index)
        if not node_shifts:
            return curve
        identifiers = curve.node_identifiers()
        y = np.array(curve.y_values, dtype=np.float64)
        applied = 0
        for i, identifier in enumerate(identifiers):
            shift = node_shifts.get(identifier)
            if shift is not None:
                y[i] = self.shift_type.apply(y[i], shift)
                applied += 1
        logger.debug(
            "Scenario %d: shifted %d of %d nodes of curve %s",
            scenario_index,
            applied,
            len(identifiers),
            curve.name,
        )
        if applied == 0:
            return curve
        return curve.with_y_values(y)

    def to_frame(self) -> pd.DataFrame:
        """
        Shifts as a long-format DataFrame.

        Returns
        -------
        pd.DataFrame
            Columns: Scenario, Node, Shift
        """
        rows = [
            {"Scenario": index, "Node": str(node), "Shift": shift}
            for index in self.scenario_indices()
            for node, shift in self._shifts[index].items()
        ]
        return pd.DataFrame(rows, columns=["Scenario", "Node", "Shift"])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurvePointShifts):
            return NotImplemented
        return (
            self.shift_type == other.shift_type
            and self._scenario_count == other._scenario_count
            and {k: dict(v) for k, v in self._shifts.items()}
            == {k: dict(v) for k, v in other._shifts.items()}
        )

    def __repr__(self) -> str:
        return (
            f"CurvePointShifts({self.shift_type.value}, "
            f"scenarios={len(self._shifts)}, count={self.scenario_count})"
        )


class CurvePointShiftsBuilder:
    """
    Accumulates shifts per scenario, then builds ``CurvePointShifts`` once.

    A fixed ``scenario_count`` bounds the indices that may be shifted.
    After ``build()`` the builder is closed and every further call fails.
    """

    def __init__(
        self,
        shift_type: ShiftType = ShiftType.ABSOLUTE,
        scenario_count: int | None = None,
    ) -> None:
        if scenario_count is not None and scenario_count < 1:
            raise ValueError(f"Scenario count must be at least 1, got {scenario_count}")
        self.shift_type = shift_type
        self.scenario_count = scenario_count
        self._shifts: dict[int, dict[Hashable, float]] = {}
        self._built = False

    def _check_open(self) -> None:
        if self._built:
            raise RuntimeError("CurvePointShiftsBuilder has already been built")

    def add_shift(
        self, scenario_index: int, node_identifier: Hashable, shift: float
    ) -> "CurvePointShiftsBuilder":
        """
        Record the shift of one node in one scenario.

        Raises
        ------
        ValueError
            If the scenario index is not positive or beyond the scenario
            count, or the shift is not finite
        """
        self._check_open()
        if scenario_index < 1:
            raise ValueError(
                f"Scenario index must be >= 1 (0 is the base scenario), got {scenario_index}"
            )
        if self.scenario_count is not None and scenario_index >= self.scenario_count:
            raise ValueError(
                f"Scenario index {scenario_index} out of range for {self.scenario_count} scenarios"
            )
        if not np.isfinite(shift):
            raise ValueError(
                f"Shift must be finite, got {shift} for node {node_identifier} "
                f"in scenario {scenario_index}"
            )
        self._shifts.setdefault(scenario_index, {})[node_identifier] = float(shift)
        return self

    def add_shifts(
        self, scenario_index: int, shifts: Mapping[Hashable, float]
    ) -> "CurvePointShiftsBuilder":
        """Record the shifts of several nodes in one scenario."""
        for node_identifier, shift in shifts.items():
            self.add_shift(scenario_index, node_identifier, shift)
        return self

    def build(self) -> CurvePointShifts:
        """Build the immutable shifts and close the builder."""
        self._check_open()
        self._built = True
        return CurvePointShifts(self.shift_type, self._shifts, self.scenario_count)
