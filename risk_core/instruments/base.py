"""
Base classes for calibration instruments.

Provides the abstract interface shared by the trades that curve nodes
build for the curve calibration solver.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from risk_core._types import Currency
from risk_core.dates import Tenor, add_business_days, add_tenor, next_or_same_business_day


class BuySell(Enum):
    """Direction of a trade."""

    BUY = "buy"
    SELL = "sell"

    @property
    def sign(self) -> float:
        """+1 for buy, -1 for sell."""
        return 1.0 if self is BuySell.BUY else -1.0


@dataclass(frozen=True)
class CurrencyPair:
    """
    An ordered pair of currencies, quoted as counter per base.

    Example
    -------
    >>> CurrencyPair.parse("EUR/USD").counter
    'USD'
    """

    base: Currency
    counter: Currency

    def __post_init__(self) -> None:
        """Validate currency codes."""
        for code in (self.base, self.counter):
            if len(code) != 3 or not code.isalpha() or not code.isupper():
                raise ValueError(f"Invalid currency code: {code!r}")
        if self.base == self.counter:
            raise ValueError(f"Currency pair must have distinct currencies, got {self}")

    @classmethod
    def parse(cls, text: "str | CurrencyPair") -> "CurrencyPair":
        if isinstance(text, CurrencyPair):
            return text
        parts = text.split("/")
        if len(parts) != 2:
            raise ValueError(f"Invalid currency pair: {text!r}")
        return cls(parts[0].strip(), parts[1].strip())

    def __str__(self) -> str:
        return f"{self.base}/{self.counter}"


def spot_date(trade_date: date, spot_days: int) -> date:
    """Spot date: trade date plus a number of business days."""
    return add_business_days(trade_date, spot_days)


def adjusted_date(start: date, tenor: Tenor) -> date:
    """Add a tenor to a date and roll to the next business day."""
    return next_or_same_business_day(add_tenor(start, tenor))


class CalibrationTrade(ABC):
    """
    Abstract base class for instruments used to calibrate a curve.

    Attributes
    ----------
    trade_date : date
        Date the trade is agreed
    buy_sell : BuySell
        Direction of the trade
    notional : float
        Notional amount
    """

    trade_date: date
    buy_sell: BuySell
    notional: float

    @property
    @abstractmethod
    def maturity_date(self) -> date:
        """Last date on which the trade pays."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """
        Convert trade to dictionary for serialization.

        Returns
        -------
        dict[str, Any]
            Dictionary representation of the trade
        """

    def _validate_common(self) -> None:
        if self.notional <= 0:
            raise ValueError(f"Notional must be positive, got {self.notional}")
        if not isinstance(self.buy_sell, BuySell):
            raise ValueError(f"buy_sell must be a BuySell, got {self.buy_sell!r}")
