"""
Exception types raised by the curve risk core.

Argument validation on value types raises plain ``ValueError`` with a
descriptive message. The classes below cover failures that callers are
expected to distinguish: bad static configuration, missing market data,
misaligned historical curves and failed scenario pricing.
"""

from datetime import date
from typing import Any


class RiskCoreError(Exception):
    """Base class for all errors raised by risk_core."""


class ConfigurationError(RiskCoreError, ValueError):
    """A required field is missing or invalid at construction time."""


class MarketDataNotFoundError(RiskCoreError, KeyError):
    """
    A market data lookup failed.

    Attributes
    ----------
    key : Any
        The observable key or curve identifier that was requested
    """

    def __init__(self, key: Any, context: str = "market data") -> None:
        self.key = key
        super().__init__(f"No value found in {context} for key: {key}")

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the message readable
        return str(self.args[0])


class CurveAlignmentError(RiskCoreError, ValueError):
    """
    Two historical curve snapshots cannot be compared node by node.

    Attributes
    ----------
    curve_id : Any
        Identifier of the curve being shifted
    scenario_date : date
        Date of the later snapshot
    """

    def __init__(self, curve_id: Any, scenario_date: date, detail: str) -> None:
        self.curve_id = curve_id
        self.scenario_date = scenario_date
        super().__init__(
            f"Curve {curve_id} is not aligned with the previous snapshot "
            f"on {scenario_date.isoformat()}: {detail}"
        )


class ScenarioReplayError(RiskCoreError, RuntimeError):
    """
    Pricing failed for one scenario, aborting the whole replay.

    Attributes
    ----------
    scenario_index : int
        Index of the scenario whose pricing failed (0 is the base scenario)
    """

    def __init__(self, scenario_index: int, cause: BaseException) -> None:
        self.scenario_index = scenario_index
        super().__init__(
            f"Pricing failed for scenario {scenario_index}: "
            f"{type(cause).__name__}: {cause}"
        )
