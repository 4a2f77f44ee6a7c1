"""
Historical shift construction.

Turns a time-ordered series of curve snapshots into one shift set per
consecutive pair of dates. Scenario i holds the move of each node from
date i-1 to date i, so N dates give scenarios 1 to N-1.
"""

import logging
from collections.abc import Mapping, Sequence
from datetime import date
from enum import Enum

from risk_core.errors import CurveAlignmentError
from risk_core.market.curve import NodalCurve, RateCurveId
from risk_core.market.snapshot import MarketSnapshot
from risk_core.scenarios.shifts import CurvePointShifts, CurvePointShiftsBuilder, ShiftType

logger = logging.getLogger(__name__)


class AlignmentPolicy(Enum):
    """
    How nodes of consecutive snapshots are matched.

    POSITION
        Node k is compared with node k. Node counts must match; a
        differing identifier at the same position is logged as a warning.
    STRICT
        As POSITION, but a differing identifier raises.
    IDENTIFIER
        Nodes are matched by identifier. Nodes missing from the previous
        snapshot get no shift.
    """

    POSITION = "position"
    STRICT = "strict"
    IDENTIFIER = "identifier"


def _lookup_curve(
    historical_curves: Mapping[date, MarketSnapshot], curve_id: RateCurveId, on: date
) -> NodalCurve | None:
    snapshot = historical_curves.get(on)
    if snapshot is None:
        return None
    return snapshot.curves.get(curve_id)


def _node_shift(
    curve_id: RateCurveId,
    scenario_date: date,
    identifier,
    shift_type: ShiftType,
    previous_value: float,
    current_value: float,
) -> float:
    try:
        return shift_type.compute_shift(float(previous_value), float(current_value))
    except ValueError as exc:
        raise CurveAlignmentError(
            curve_id, scenario_date, f"relative shift of node {identifier} from zero"
        ) from exc


def _positional_shifts(
    curve_id: RateCurveId,
    scenario_date: date,
    previous: NodalCurve,
    current: NodalCurve,
    shift_type: ShiftType,
    strict: bool,
) -> dict:
    if previous.parameter_count != current.parameter_count:
        raise CurveAlignmentError(
            curve_id,
            scenario_date,
            f"node count changed from {previous.parameter_count} to {current.parameter_count}",
        )
    previous_ids = previous.node_identifiers()
    current_ids = current.node_identifiers()
    shifts = {}
    for k, identifier in enumerate(current_ids):
        if previous_ids[k] != identifier:
            if strict:
                raise CurveAlignmentError(
                    curve_id,
                    scenario_date,
                    f"node {k} is {identifier}, previously {previous_ids[k]}",
                )
            logger.warning(
                "Curve %s on %s: node %d is %s, previously %s; comparing by position",
                curve_id,
                scenario_date,
                k,
                identifier,
                previous_ids[k],
            )
        shifts[identifier] = _node_shift(
            curve_id,
            scenario_date,
            identifier,
            shift_type,
            previous.y_values[k],
            current.y_values[k],
        )
    return shifts


def _identifier_shifts(
    curve_id: RateCurveId,
    scenario_date: date,
    previous: NodalCurve,
    current: NodalCurve,
    shift_type: ShiftType,
) -> dict:
    previous_values = dict(zip(previous.node_identifiers(), previous.y_values))
    shifts = {}
    for identifier, value in zip(current.node_identifiers(), current.y_values):
        if identifier in previous_values:
            shifts[identifier] = _node_shift(
                curve_id,
                scenario_date,
                identifier,
                shift_type,
                previous_values[identifier],
                value,
            )
    return shifts


def build_historical_shifts(
    curve_id: RateCurveId,
    historical_curves: Mapping[date, MarketSnapshot],
    scenario_dates: Sequence[date],
    shift_type: ShiftType = ShiftType.ABSOLUTE,
    alignment: AlignmentPolicy = AlignmentPolicy.POSITION,
) -> CurvePointShifts:
    """
    Build shifts of one curve from consecutive historical snapshots.

    Parameters
    ----------
    curve_id : RateCurveId
        Curve to compute shifts for
    historical_curves : Mapping[date, MarketSnapshot]
        Snapshot for each available date
    scenario_dates : Sequence[date]
        Time-ordered dates; scenario i compares dates i-1 and i
    shift_type : ShiftType
        Absolute difference or relative change
    alignment : AlignmentPolicy
        How nodes of consecutive snapshots are matched

    Returns
    -------
    CurvePointShifts
        Shifts keyed by scenario index and node identifier of the later date

    Raises
    ------
    CurveAlignmentError
        If the snapshots of two dates cannot be matched under the policy,
        or a relative shift starts from a node value of zero
    ValueError
        If the dates are not strictly increasing

    Notes
    -----
    If either snapshot of a pair is missing, that scenario gets no shifts
    for this curve. It is not given a shift of zero. The result always
    counts one scenario per date, so trailing scenarios without shifts
    are still replayed.
    """
    dates = list(scenario_dates)
    for earlier, later in zip(dates, dates[1:]):
        if later <= earlier:
            raise ValueError(
                f"Scenario dates must be strictly increasing, got {earlier} then {later}"
            )

    builder = CurvePointShiftsBuilder(shift_type, scenario_count=max(len(dates), 1))
    for i in range(1, len(dates)):
        previous = _lookup_curve(historical_curves, curve_id, dates[i - 1])
        current = _lookup_curve(historical_curves, curve_id, dates[i])
        if previous is None or current is None:
            logger.debug(
                "Skipping scenario %d for %s: no snapshot on %s",
                i,
                curve_id,
                dates[i - 1] if previous is None else dates[i],
            )
            continue
        if alignment is AlignmentPolicy.IDENTIFIER:
            shifts = _identifier_shifts(curve_id, dates[i], previous, current, shift_type)
        else:
            shifts = _positional_shifts(
                curve_id,
                dates[i],
                previous,
                current,
                shift_type,
                strict=alignment is AlignmentPolicy.STRICT,
            )
        builder.add_shifts(i, shifts)

    result = builder.build()
    logger.debug(
        "Built %d historical scenarios for %s from %d dates",
        len(result.scenario_indices()),
        curve_id,
        len(dates),
    )
    return result
