"""
Reporting module for scenario and sensitivity results.

Provides:
- Matplotlib and Plotly P&L charts
- DataFrame formatters
- CSV/JSON/Excel export utilities
"""

from risk_core.reporting.export import (
    create_excel_report,
    create_summary_report,
    export_to_csv,
    export_to_json,
    format_amount,
)
from risk_core.reporting.plots import create_pnl_histogram, create_pnl_plot
from risk_core.reporting.tables import (
    create_parameter_sensitivity_table,
    create_pnl_table,
    create_point_sensitivity_table,
    create_var_summary_table,
)

__all__ = [
    # Plots
    "create_pnl_plot",
    "create_pnl_histogram",
    # Tables
    "create_pnl_table",
    "create_point_sensitivity_table",
    "create_parameter_sensitivity_table",
    "create_var_summary_table",
    # Export
    "export_to_csv",
    "export_to_json",
    "create_excel_report",
    "create_summary_report",
    "format_amount",
]
