"""
Plotting utilities for scenario P&L visualization.

Provides both Matplotlib and Plotly chart generators.
"""

from typing import Any

import matplotlib.pyplot as plt
import numpy as np
import plotly.graph_objects as go

from risk_core.scenarios.series import ScenarioSeries


def _x_axis(series: ScenarioSeries) -> tuple[list, str]:
    if series.dates is not None:
        return list(series.dates[1:]), "Scenario date"
    return list(range(1, len(series))), "Scenario"


def create_pnl_plot(
    series: ScenarioSeries,
    confidence: float | None = 0.99,
    title: str = "Scenario P&L",
    use_plotly: bool = False,
) -> Any:
    """
    Create scenario P&L bar plot.

    Parameters
    ----------
    series : ScenarioSeries
        Replay result
    confidence : float | None
        If given, draw the VaR at this confidence as a horizontal line
    title : str
        Chart title
    use_plotly : bool
        Use Plotly instead of Matplotlib

    Returns
    -------
    Any
        Plotly Figure or Matplotlib Figure
    """
    if use_plotly:
        return _create_pnl_plot_plotly(series, confidence, title)
    return _create_pnl_plot_mpl(series, confidence, title)


def _create_pnl_plot_plotly(
    series: ScenarioSeries, confidence: float | None, title: str
) -> go.Figure:
    """Create P&L plot using Plotly."""
    x, x_title = _x_axis(series)
    pnl = series.pnl()

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=x,
            y=pnl,
            marker_color=["#00CC96" if v >= 0 else "#FF4B4B" for v in pnl],
            name="P&L",
            hovertemplate="<b>%{x}</b><br>P&L: %{y:,.2f}<extra></extra>",
        )
    )
    if confidence is not None and len(pnl):
        fig.add_hline(
            y=-series.var(confidence),
            line_dash="dash",
            line_color="#AB63FA",
            annotation_text=f"VaR {confidence:.0%}",
        )

    fig.update_layout(
        title=title,
        xaxis_title=x_title,
        yaxis_title="P&L",
        template="plotly_dark",
        height=400,
        showlegend=False,
    )
    return fig


def _create_pnl_plot_mpl(
    series: ScenarioSeries, confidence: float | None, title: str
) -> plt.Figure:
    """Create P&L plot using Matplotlib."""
    x, x_title = _x_axis(series)
    pnl = series.pnl()

    fig, ax = plt.subplots(figsize=(10, 6))
    colors = ["#00CC96" if v >= 0 else "#FF4B4B" for v in pnl]
    ax.bar(range(len(pnl)), pnl, color=colors)
    ax.set_xticks(range(len(pnl)))
    ax.set_xticklabels([str(v) for v in x], rotation=45, ha="right")

    if confidence is not None and len(pnl):
        ax.axhline(
            -series.var(confidence),
            color="m",
            linestyle="--",
            linewidth=2,
            label=f"VaR {confidence:.0%}",
        )
        ax.legend()

    ax.axhline(0, color="black", linewidth=0.8)
    ax.set_xlabel(x_title)
    ax.set_ylabel("P&L")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    return fig


def create_pnl_histogram(
    series: ScenarioSeries,
    bins: int = 20,
    confidence: float | None = 0.99,
    title: str = "P&L Distribution",
) -> plt.Figure:
    """
    Create histogram of scenario P&L.

    Parameters
    ----------
    series : ScenarioSeries
        Replay result
    bins : int
        Number of histogram bins
    confidence : float | None
        If given, mark the VaR at this confidence
    title : str
        Chart title

    Returns
    -------
    plt.Figure
        Matplotlib figure
    """
    pnl = series.pnl()

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.hist(pnl, bins=max(1, min(bins, len(pnl))), color="#1F77B4", alpha=0.8, edgecolor="white")

    if confidence is not None and len(pnl):
        ax.axvline(
            -series.var(confidence),
            color="#FF4B4B",
            linestyle="--",
            linewidth=2,
            label=f"VaR {confidence:.0%}",
        )
        ax.legend()

    if len(pnl):
        ax.axvline(float(np.mean(pnl)), color="black", linewidth=1, alpha=0.6)
    ax.set_xlabel("P&L")
    ax.set_ylabel("Frequency")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    return fig
