"""
Base classes for curve nodes.

A curve node turns one or two market quotes into a calibration
instrument. The curve calibration solver treats every node the same
way through the four operations of ``CurveNode``.
"""

from abc import ABC, abstractmethod
from datetime import date
from enum import Enum
from typing import Any

from risk_core.errors import ConfigurationError
from risk_core.instruments.base import CalibrationTrade
from risk_core.market.keys import MarketData, ObservableKey
from risk_core.market.metadata import CurveNodeMetadata


class ValueType(Enum):
    """Kind of quantity the calibration solver is solving for at a node."""

    ZERO_RATE = "zero_rate"
    DISCOUNT_FACTOR = "discount_factor"
    FORWARD_RATE = "forward_rate"


class CurveNode(ABC):
    """
    Abstract base class for all curve nodes.

    Methods
    -------
    requirements()
        Observable keys the node needs from market data
    metadata(valuation_date)
        Location of the node on the curve, without reading market data
    trade(valuation_date, market_data)
        Calibration instrument priced at the market quotes
    initial_guess(valuation_date, market_data, value_type)
        Starting value for the solver at this node
    """

    @abstractmethod
    def requirements(self) -> frozenset[ObservableKey]:
        """
        Keys of the quotes this node reads from market data.

        The same set instance is returned on every call.
        """

    @abstractmethod
    def metadata(self, valuation_date: date) -> CurveNodeMetadata:
        """
        Metadata locating the node on the curve.

        Parameters
        ----------
        valuation_date : date
            Valuation date of the curve

        Returns
        -------
        CurveNodeMetadata
            Date and label of the node
        """

    @abstractmethod
    def trade(self, valuation_date: date, market_data: MarketData) -> CalibrationTrade:
        """
        Build the calibration instrument from market quotes.

        Raises
        ------
        MarketDataNotFoundError
            If a required quote is missing
        """

    @abstractmethod
    def initial_guess(
        self, valuation_date: date, market_data: MarketData, value_type: ValueType
    ) -> float:
        """
        Initial value of the unknown at this node for the solver.

        Raises
        ------
        MarketDataNotFoundError
            If the guess needs a quote that is missing
        """

    def to_dict(self) -> dict[str, Any]:
        """Convert node to dictionary."""
        return {
            "type": type(self).__name__,
            "requirements": sorted(str(key) for key in self.requirements()),
        }


def require(value: Any, name: str) -> None:
    """Fail if a required node field is missing."""
    if value is None:
        raise ConfigurationError(f"Curve node field '{name}' must not be None")


def as_key(key: ObservableKey | str | None, name: str) -> ObservableKey:
    """Validate a required observable key, accepting plain strings."""
    require(key, name)
    if isinstance(key, str):
        return ObservableKey(key)
    if not isinstance(key, ObservableKey):
        raise ConfigurationError(
            f"Curve node field '{name}' must be an ObservableKey, got {type(key).__name__}"
        )
    return key
