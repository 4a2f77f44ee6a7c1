"""
Curve definitions grouping the nodes of one curve.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from risk_core.errors import ConfigurationError
from risk_core.instruments.base import CalibrationTrade
from risk_core.market.curve import RateCurveId
from risk_core.market.keys import MarketData, ObservableKey
from risk_core.market.metadata import CurveNodeMetadata
from risk_core.nodes.base import CurveNode, ValueType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurveDefinition:
    """
    Nodes defining one curve, in curve order.

    This is the input handed to the external calibration solver: every
    node is accessed only through the ``CurveNode`` operations.

    Attributes
    ----------
    curve_id : RateCurveId
        Identifier of the curve being defined
    nodes : tuple[CurveNode, ...]
        Nodes of the curve
    """

    curve_id: RateCurveId
    nodes: tuple[CurveNode, ...]

    def __post_init__(self) -> None:
        if self.curve_id is None:
            raise ConfigurationError("Curve definition requires a curve id")
        nodes = tuple(self.nodes)
        if not nodes:
            raise ConfigurationError(f"Curve {self.curve_id} must have at least one node")
        object.__setattr__(self, "nodes", nodes)

    @property
    def parameter_count(self) -> int:
        return len(self.nodes)

    def requirements(self) -> frozenset[ObservableKey]:
        """Union of the quotes needed by all nodes."""
        return frozenset().union(*(node.requirements() for node in self.nodes))

    def metadata(self, valuation_date: date) -> list[CurveNodeMetadata]:
        """
        Metadata of each node.

        Raises
        ------
        ConfigurationError
            If two nodes resolve to the same date
        """
        metadata = [node.metadata(valuation_date) for node in self.nodes]
        dates = [meta.date for meta in metadata]
        if len(set(dates)) != len(dates):
            raise ConfigurationError(
                f"Curve {self.curve_id} has nodes with duplicate dates: {dates}"
            )
        return metadata

    def trades(self, valuation_date: date, market_data: MarketData) -> list[CalibrationTrade]:
        """Calibration instruments of each node."""
        logger.debug(
            "Building %d calibration trades for %s on %s",
            len(self.nodes),
            self.curve_id,
            valuation_date,
        )
        return [node.trade(valuation_date, market_data) for node in self.nodes]

    def initial_guesses(
        self, valuation_date: date, market_data: MarketData, value_type: ValueType
    ) -> list[float]:
        """Solver starting values of each node."""
        return [
            node.initial_guess(valuation_date, market_data, value_type) for node in self.nodes
        ]

    def missing_requirements(self, market_data: MarketData) -> set[ObservableKey]:
        """Required quotes that the market data does not contain."""
        return {key for key in self.requirements() if not market_data.contains_value(key)}

    def __len__(self) -> int:
        return len(self.nodes)


def curve_definition(curve_id: RateCurveId, nodes: Sequence[CurveNode]) -> CurveDefinition:
    """Create a curve definition from a sequence of nodes."""
    return CurveDefinition(curve_id, tuple(nodes))
