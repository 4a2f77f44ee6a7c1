"""
Curve Risk Core - Core Package.

Curve calibration inputs, point sensitivities and historical scenario
replay for interest rate and FX curves: curve nodes feeding a
calibration solver, normalized point sensitivities for risk aggregation,
and historical curve shifts replayed through a pricer for VaR.

Example
-------
>>> from risk_core import ScenarioDefinition, ScenarioReplay, build_historical_shifts
>>> shifts = build_historical_shifts(curve_id, history, dates)
>>> definition = ScenarioDefinition.of_mappings(
...     PerturbationMapping(CurveIdFilter(curve_id), shifts)
... )
>>> series = ScenarioReplay(definition, pricer).run(base_snapshot)
>>> var_99 = series.var(0.99)
"""

__version__ = "1.0.0"

# Core types
from risk_core._types import FloatArray

# Errors
from risk_core.errors import (
    ConfigurationError,
    CurveAlignmentError,
    MarketDataNotFoundError,
    RiskCoreError,
    ScenarioReplayError,
)

# Dates
from risk_core.dates import Tenor

# Configuration
from risk_core.config import (
    CurveGroupConfig,
    HistoricalScenarioConfig,
    load_config,
    load_historical_curves,
)

# Market data
from risk_core.market import (
    DiscountCurveId,
    IborIndex,
    MarketData,
    MarketSnapshot,
    NodalCurve,
    ObservableKey,
    RateIndexCurveId,
)

# Instruments
from risk_core.instruments import BuySell, FraTemplate, FxSwapTemplate, TermDepositTemplate

# Curve nodes
from risk_core.nodes import (
    CurveDefinition,
    CurveNode,
    FraCurveNode,
    FxSwapCurveNode,
    TermDepositCurveNode,
    ValueType,
)

# Sensitivities
from risk_core.sensitivity import (
    CurveParameterSensitivities,
    IborRateSensitivity,
    MutablePointSensitivities,
    PointSensitivities,
    PointSensitivity,
    ZeroRateSensitivity,
)

# Pricing
from risk_core.pricer import DiscountingTermDepositPricer, RatesProvider

# Scenarios
from risk_core.scenarios import (
    AlignmentPolicy,
    AnyDiscountCurveFilter,
    CurveIdFilter,
    CurvePointShifts,
    CurveRateIndexFilter,
    PerturbationMapping,
    ScenarioDefinition,
    ScenarioReplay,
    ScenarioSeries,
    ShiftType,
    build_historical_shifts,
)

# Reporting
from risk_core.reporting import (
    create_excel_report,
    create_pnl_plot,
    create_pnl_table,
    export_to_csv,
)

__all__ = [
    # Version
    "__version__",
    # Types
    "FloatArray",
    # Errors
    "RiskCoreError",
    "ConfigurationError",
    "MarketDataNotFoundError",
    "CurveAlignmentError",
    "ScenarioReplayError",
    # Dates
    "Tenor",
    # Config
    "CurveGroupConfig",
    "HistoricalScenarioConfig",
    "load_config",
    "load_historical_curves",
    # Market
    "ObservableKey",
    "MarketData",
    "DiscountCurveId",
    "RateIndexCurveId",
    "IborIndex",
    "NodalCurve",
    "MarketSnapshot",
    # Instruments
    "BuySell",
    "FxSwapTemplate",
    "FraTemplate",
    "TermDepositTemplate",
    # Nodes
    "CurveNode",
    "ValueType",
    "FxSwapCurveNode",
    "FraCurveNode",
    "TermDepositCurveNode",
    "CurveDefinition",
    # Sensitivities
    "PointSensitivity",
    "ZeroRateSensitivity",
    "IborRateSensitivity",
    "PointSensitivities",
    "MutablePointSensitivities",
    "CurveParameterSensitivities",
    # Pricing
    "RatesProvider",
    "DiscountingTermDepositPricer",
    # Scenarios
    "ShiftType",
    "CurvePointShifts",
    "AlignmentPolicy",
    "build_historical_shifts",
    "AnyDiscountCurveFilter",
    "CurveRateIndexFilter",
    "CurveIdFilter",
    "PerturbationMapping",
    "ScenarioDefinition",
    "ScenarioReplay",
    "ScenarioSeries",
    # Reporting
    "create_pnl_table",
    "create_pnl_plot",
    "export_to_csv",
    "create_excel_report",
]
