"""
Historical scenario generation and replay.

This module provides:
- Curve point shifts and their builder
- Shift construction from historical curve snapshots
- Curve filters and perturbation mappings
- Scenario definitions and the replay driver
- Scenario series with historical VaR
"""

from risk_core.scenarios.definition import ScenarioDefinition
from risk_core.scenarios.filters import (
    AnyDiscountCurveFilter,
    CurveFilter,
    CurveIdFilter,
    CurveRateIndexFilter,
    PerturbationMapping,
)
from risk_core.scenarios.historical import AlignmentPolicy, build_historical_shifts
from risk_core.scenarios.replay import ScenarioReplay
from risk_core.scenarios.series import ScenarioSeries
from risk_core.scenarios.shifts import CurvePointShifts, CurvePointShiftsBuilder, ShiftType

__all__ = [
    "ShiftType",
    "CurvePointShifts",
    "CurvePointShiftsBuilder",
    "AlignmentPolicy",
    "build_historical_shifts",
    "CurveFilter",
    "AnyDiscountCurveFilter",
    "CurveRateIndexFilter",
    "CurveIdFilter",
    "PerturbationMapping",
    "ScenarioDefinition",
    "ScenarioReplay",
    "ScenarioSeries",
]
