"""
Configuration module for the curve risk core.

Provides Pydantic-validated configuration models, YAML loading utilities
for curve groups and scenario parameters, and a CSV loader for
historical curve snapshots.
"""

from risk_core.config.loader import (
    create_default_curve_group,
    load_config,
    load_curve_group,
    load_historical_curves,
    load_scenario_config,
)
from risk_core.config.models import (
    CurveConfig,
    CurveGroupConfig,
    FraNodeConfig,
    FxSwapNodeConfig,
    HistoricalScenarioConfig,
    TermDepositNodeConfig,
)

__all__ = [
    # Models
    "FxSwapNodeConfig",
    "FraNodeConfig",
    "TermDepositNodeConfig",
    "CurveConfig",
    "CurveGroupConfig",
    "HistoricalScenarioConfig",
    # Loaders
    "load_config",
    "load_curve_group",
    "load_scenario_config",
    "load_historical_curves",
    "create_default_curve_group",
]
