"""
Table generation utilities for risk reporting.

Creates formatted pandas DataFrames for display and export.
"""

import dataclasses

import pandas as pd

from risk_core.scenarios.series import ScenarioSeries
from risk_core.sensitivity.parameter import CurveParameterSensitivities
from risk_core.sensitivity.points import PointSensitivities


def create_pnl_table(series: ScenarioSeries, scale: float = 1.0) -> pd.DataFrame:
    """
    Create scenario P&L table.

    Parameters
    ----------
    series : ScenarioSeries
        Replay result
    scale : float
        Divisor applied to values (e.g., 1e6 for millions)

    Returns
    -------
    pd.DataFrame
        One row per scenario with Value and PnL columns (and Date if known)
    """
    df = series.to_frame().reset_index()
    df["Value"] = df["Value"] / scale
    df["PnL"] = df["PnL"] / scale
    return df


def create_point_sensitivity_table(sensitivities: PointSensitivities) -> pd.DataFrame:
    """
    Create point sensitivity table.

    Each row describes one sensitivity: its type, every identifying field
    and its value. Fields not used by a type are left empty.

    Parameters
    ----------
    sensitivities : PointSensitivities
        Sensitivities to tabulate, usually normalized

    Returns
    -------
    pd.DataFrame
        Columns: Type, the identifying fields, Sensitivity
    """
    rows = []
    for point in sensitivities:
        row = {"Type": type(point).__name__}
        for f in dataclasses.fields(point):
            if f.name != "sensitivity":
                row[f.name] = getattr(point, f.name)
        row["Sensitivity"] = point.sensitivity
        rows.append(row)

    df = pd.DataFrame(rows)
    if df.empty:
        return pd.DataFrame(columns=["Type", "Sensitivity"])
    columns = ["Type"] + [c for c in df.columns if c not in ("Type", "Sensitivity")]
    return df[columns + ["Sensitivity"]]


def create_parameter_sensitivity_table(
    sensitivities: CurveParameterSensitivities,
    bump: float = 1.0,
) -> pd.DataFrame:
    """
    Create curve parameter sensitivity table.

    Parameters
    ----------
    sensitivities : CurveParameterSensitivities
        Sensitivities per curve node
    bump : float
        Factor applied to each value (e.g., 1e-4 for PV01 per basis point)

    Returns
    -------
    pd.DataFrame
        Columns: Curve, Currency, Node, Date, Sensitivity
    """
    rows = []
    for sens in sensitivities:
        for i, value in enumerate(sens.values):
            if sens.parameter_metadata:
                meta = sens.parameter_metadata[i]
                node, node_date = meta.label, meta.date
            else:
                node, node_date = str(i), None
            rows.append(
                {
                    "Curve": sens.curve_id.name,
                    "Currency": sens.currency,
                    "Node": node,
                    "Date": node_date,
                    "Sensitivity": float(value) * bump,
                }
            )
    return pd.DataFrame(rows, columns=["Curve", "Currency", "Node", "Date", "Sensitivity"])


def create_var_summary_table(
    series: ScenarioSeries,
    confidences: tuple[float, ...] = (0.95, 0.99),
) -> pd.DataFrame:
    """
    Create VaR and expected shortfall summary.

    Returns
    -------
    pd.DataFrame
        One row per confidence level
    """
    return pd.DataFrame(
        {
            "Confidence": list(confidences),
            "VaR": [series.var(c) for c in confidences],
            "Expected Shortfall": [series.expected_shortfall(c) for c in confidences],
        }
    )
