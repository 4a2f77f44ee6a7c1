"""
Export utilities for risk results.

Provides CSV, JSON, and Excel export functionality.
"""

import json
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from risk_core.scenarios.series import ScenarioSeries
from risk_core.sensitivity.parameter import CurveParameterSensitivities


def export_to_csv(
    df: pd.DataFrame,
    path: str | Path,
    float_format: str = "%.6f",
) -> None:
    """
    Export DataFrame to CSV.

    Parameters
    ----------
    df : pd.DataFrame
        DataFrame to export
    path : str | Path
        Output file path
    float_format : str
        Format string for floats
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False, float_format=float_format)


def _convert(obj: Any) -> Any:
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, date):
        return obj.isoformat()
    elif isinstance(obj, dict):
        return {str(k): _convert(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_convert(v) for v in obj]
    return obj


def export_to_json(
    data: dict[str, Any],
    path: str | Path,
    indent: int = 2,
) -> None:
    """
    Export dictionary to JSON.

    Numpy arrays and scalars are converted to lists and numbers, dates to
    ISO strings.

    Parameters
    ----------
    data : dict
        Data to export
    path : str | Path
        Output file path
    indent : int
        JSON indentation
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(_convert(data), f, indent=indent)


def create_excel_report(
    pnl_df: pd.DataFrame,
    sensitivity_df: pd.DataFrame | None = None,
    var_df: pd.DataFrame | None = None,
    config: dict[str, Any] | None = None,
) -> BytesIO:
    """
    Create multi-sheet Excel report.

    Parameters
    ----------
    pnl_df : pd.DataFrame
        Scenario P&L table
    sensitivity_df : pd.DataFrame | None
        Curve parameter sensitivity table
    var_df : pd.DataFrame | None
        VaR summary table
    config : dict | None
        Configuration snapshot

    Returns
    -------
    BytesIO
        Excel file as bytes buffer
    """
    buffer = BytesIO()

    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        pnl_df.to_excel(writer, sheet_name="Scenario PnL", index=False)

        if sensitivity_df is not None:
            sensitivity_df.to_excel(writer, sheet_name="Sensitivities", index=False)

        if var_df is not None:
            var_df.to_excel(writer, sheet_name="VaR", index=False)

        if config is not None:
            config_df = _config_to_df(config)
            config_df.to_excel(writer, sheet_name="Configuration", index=False)

    buffer.seek(0)
    return buffer


def _config_to_df(config: dict[str, Any]) -> pd.DataFrame:
    """Convert nested config dict to flat DataFrame."""
    rows = []

    def flatten(obj: Any, prefix: str = "") -> None:
        if isinstance(obj, dict):
            for k, v in obj.items():
                new_prefix = f"{prefix}.{k}" if prefix else str(k)
                flatten(v, new_prefix)
        else:
            rows.append({"Parameter": prefix, "Value": str(obj)})

    flatten(config)
    return pd.DataFrame(rows, columns=["Parameter", "Value"])


def create_summary_report(
    series: ScenarioSeries,
    output_dir: str | Path,
    sensitivities: CurveParameterSensitivities | None = None,
    confidence: float = 0.99,
    prefix: str = "risk_report",
) -> dict[str, Path]:
    """
    Create complete summary report with multiple files.

    Parameters
    ----------
    series : ScenarioSeries
        Replay result
    output_dir : str | Path
        Output directory
    sensitivities : CurveParameterSensitivities | None
        Curve parameter sensitivities of the base valuation
    confidence : float
        VaR confidence level
    prefix : str
        File name prefix

    Returns
    -------
    dict[str, Path]
        Dictionary of created file paths
    """
    from risk_core.reporting.tables import (
        create_parameter_sensitivity_table,
        create_pnl_table,
    )

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    created_files = {}

    pnl_path = output_dir / f"{prefix}_pnl.csv"
    export_to_csv(create_pnl_table(series), pnl_path)
    created_files["pnl"] = pnl_path

    if sensitivities is not None:
        sens_path = output_dir / f"{prefix}_sensitivities.csv"
        export_to_csv(create_parameter_sensitivity_table(sensitivities), sens_path)
        created_files["sensitivities"] = sens_path

    pnl = series.pnl()
    summary: dict[str, Any] = {
        "base_value": series.base_value,
        "n_scenarios": len(pnl),
        "pnl": {
            "mean": float(pnl.mean()) if len(pnl) else 0.0,
            "min": float(pnl.min()) if len(pnl) else 0.0,
            "max": float(pnl.max()) if len(pnl) else 0.0,
        },
    }
    if len(pnl):
        summary["var"] = {
            "confidence": confidence,
            "var": series.var(confidence),
            "expected_shortfall": series.expected_shortfall(confidence),
        }
    if sensitivities is not None:
        summary["sensitivity_totals"] = sensitivities.total()
    summary_path = output_dir / f"{prefix}_summary.json"
    export_to_json(summary, summary_path)
    created_files["summary"] = summary_path

    return created_files


def format_amount(value: float, decimals: int = 2) -> str:
    """
    Format value as a compact amount string.

    Returns
    -------
    str
        Formatted string like "1,234.56K"
    """
    abs_value = abs(value)
    if abs_value >= 1e9:
        return f"{value/1e9:,.{decimals}f}B"
    elif abs_value >= 1e6:
        return f"{value/1e6:,.{decimals}f}M"
    elif abs_value >= 1e3:
        return f"{value/1e3:,.{decimals}f}K"
    else:
        return f"{value:,.{decimals}f}"
