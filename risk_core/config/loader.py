"""
Configuration and historical data loading utilities.

Provides functions to load and validate configuration from YAML files,
returning properly typed Pydantic model instances, and to read
historical curve snapshots from CSV.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Any

import pandas as pd
import yaml

from risk_core.config.models import (
    CurveConfig,
    CurveGroupConfig,
    FraNodeConfig,
    HistoricalScenarioConfig,
    TermDepositNodeConfig,
)
from risk_core.dates import Tenor, year_fraction
from risk_core.errors import ConfigurationError
from risk_core.market.curve import NodalCurve
from risk_core.market.metadata import (
    CurveNodeMetadata,
    SimpleCurveNodeMetadata,
    TenorCurveNodeMetadata,
)
from risk_core.market.snapshot import MarketSnapshot

logger = logging.getLogger(__name__)

HISTORICAL_COLUMNS = ["Valuation Date", "Curve Name", "Date", "Value", "Label"]


def _load_yaml(path: Path) -> dict[str, Any]:
    """
    Load a YAML file and return its contents as a dictionary.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    yaml.YAMLError
        If the file contains invalid YAML
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_curve_group(path: Path | str) -> CurveGroupConfig:
    """
    Load a curve group configuration from a YAML file.

    Parameters
    ----------
    path : Path | str
        Path to the curve group YAML file

    Returns
    -------
    CurveGroupConfig
        Validated curve group configuration

    Example
    -------
    >>> group = load_curve_group("data/curves.yaml")
    >>> print(group.n_curves)
    2
    """
    path = Path(path)
    data = _load_yaml(path)

    # Handle nested 'curve_group' key if present
    if "curve_group" in data:
        data = data["curve_group"]

    return CurveGroupConfig(**data)


def load_scenario_config(path: Path | str) -> HistoricalScenarioConfig:
    """Load historical scenario parameters from a YAML file."""
    path = Path(path)
    data = _load_yaml(path)

    if "scenarios" in data:
        data = data["scenarios"]

    return HistoricalScenarioConfig(**data)


def load_config(
    curves_path: Path | str | None = None,
    scenarios_path: Path | str | None = None,
) -> dict[str, Any]:
    """
    Load complete configuration from YAML files.

    Parameters
    ----------
    curves_path : Path | str | None
        Path to the curve group configuration file
    scenarios_path : Path | str | None
        Path to the scenario configuration file

    Returns
    -------
    dict[str, Any]
        Dictionary containing:
        - 'curve_group': CurveGroupConfig (if curves_path provided)
        - 'scenarios': HistoricalScenarioConfig (if scenarios_path provided)
    """
    result: dict[str, Any] = {}

    if curves_path is not None:
        result["curve_group"] = load_curve_group(curves_path)

    if scenarios_path is not None:
        result["scenarios"] = load_scenario_config(scenarios_path)

    if "curve_group" in result and "scenarios" in result:
        known = {c.name for c in result["curve_group"].curves}
        unknown = [name for name in result["scenarios"].curves if name not in known]
        if unknown:
            raise ConfigurationError(f"Scenario configuration names unknown curves: {unknown}")

    return result


def _node_metadata(node_date: date, label: str) -> CurveNodeMetadata:
    try:
        return TenorCurveNodeMetadata(node_date, Tenor.parse(label))
    except ValueError:
        return SimpleCurveNodeMetadata(node_date, label)


def load_historical_curves(
    path: Path | str, curve_group: CurveGroupConfig
) -> dict[date, MarketSnapshot]:
    """
    Load historical curve snapshots from a CSV file.

    The file holds one row per curve node with columns
    ``Valuation Date, Curve Name, Date, Value, Label``. Values are zero
    rates; node times are ACT/365F from the valuation date. Labels that
    parse as tenors become tenor metadata, others are kept as text.

    Parameters
    ----------
    path : Path | str
        Path to the CSV file
    curve_group : CurveGroupConfig
        Group mapping curve names to curve identifiers

    Returns
    -------
    dict[date, MarketSnapshot]
        Snapshot for each valuation date, in date order

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    ConfigurationError
        If columns are missing or a curve name is not in the group
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Historical curve file not found: {path}")

    df = pd.read_csv(path)
    missing = [c for c in HISTORICAL_COLUMNS if c not in df.columns]
    if missing:
        raise ConfigurationError(f"Historical curve file {path} is missing columns: {missing}")

    df["Valuation Date"] = pd.to_datetime(df["Valuation Date"]).dt.date
    df["Date"] = pd.to_datetime(df["Date"]).dt.date
    df["Label"] = df["Label"].astype(str)

    snapshots: dict[date, MarketSnapshot] = {}
    for valuation_date, day in df.groupby("Valuation Date", sort=True):
        curves = {}
        for curve_name, rows in day.groupby("Curve Name", sort=False):
            try:
                curve_id = curve_group.curve_id(curve_name)
            except KeyError:
                raise ConfigurationError(
                    f"Curve {curve_name!r} in {path} is not in group {curve_group.name}"
                ) from None
            rows = rows.sort_values("Date")
            curves[curve_id] = NodalCurve(
                name=curve_id.name,
                x_values=[year_fraction(valuation_date, d) for d in rows["Date"]],
                y_values=rows["Value"].to_numpy(dtype=float),
                parameter_metadata=tuple(
                    _node_metadata(d, label) for d, label in zip(rows["Date"], rows["Label"])
                ),
            )
        snapshots[valuation_date] = MarketSnapshot(valuation_date, curves)

    logger.info("Loaded %d historical snapshots from %s", len(snapshots), path)
    return snapshots


def create_default_curve_group() -> CurveGroupConfig:
    """
    Create a default curve group with typical USD curves.

    Returns
    -------
    CurveGroupConfig
        USD discount curve from deposits and a USD-LIBOR-3M forward curve
        from a deposit and FRAs, suitable for testing
    """
    return CurveGroupConfig(
        name="Default",
        curves=[
            CurveConfig(
                name="USD-Discount",
                kind="discount",
                currency="USD",
                nodes=[
                    TermDepositNodeConfig(deposit_period=tenor, rate_key=f"USD-DEP-{tenor}")
                    for tenor in ("1M", "3M", "6M", "1Y")
                ],
            ),
            CurveConfig(
                name="USD-LIBOR-3M",
                kind="forward",
                currency="USD",
                index="USD-LIBOR-3M",
                index_tenor="3M",
                nodes=[
                    TermDepositNodeConfig(deposit_period="3M", rate_key="USD-LIBOR-3M"),
                    FraNodeConfig(period_to_start="3M", rate_key="USD-FRA-3Mx6M"),
                    FraNodeConfig(period_to_start="6M", rate_key="USD-FRA-6Mx9M"),
                    FraNodeConfig(period_to_start="9M", rate_key="USD-FRA-9Mx12M"),
                ],
            ),
        ],
    )
