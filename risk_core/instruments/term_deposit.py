"""
Term deposit instrument and template.

A term deposit lends a notional on the start date and receives the
notional plus simple interest on the end date.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any

from risk_core._types import Currency
from risk_core.dates import Tenor, year_fraction
from risk_core.instruments.base import BuySell, CalibrationTrade, adjusted_date, spot_date


@dataclass(frozen=True)
class TermDepositTrade(CalibrationTrade):
    """
    Term deposit trade.

    Attributes
    ----------
    trade_date : date
        Trade date
    currency : str
        Currency of the deposit
    buy_sell : BuySell
        BUY to lend (place the deposit), SELL to borrow
    notional : float
        Deposit amount
    rate : float
        Simple interest rate (ACT/365F)
    start_date : date
        Date the notional is exchanged
    end_date : date
        Date the notional and interest are repaid

    Example
    -------
    >>> deposit = TermDepositTrade(
    ...     trade_date=date(2015, 4, 23),
    ...     currency="USD",
    ...     buy_sell=BuySell.BUY,
    ...     notional=1_000_000,
    ...     rate=0.0028,
    ...     start_date=date(2015, 4, 27),
    ...     end_date=date(2015, 7, 27),
    ... )
    """

    trade_date: date
    currency: Currency
    buy_sell: BuySell
    notional: float
    rate: float
    start_date: date
    end_date: date

    def __post_init__(self) -> None:
        """Validate deposit parameters."""
        self._validate_common()
        if self.end_date <= self.start_date:
            raise ValueError(
                f"End date ({self.end_date}) must be after start date ({self.start_date})"
            )

    @property
    def maturity_date(self) -> date:
        return self.end_date

    @property
    def accrual_factor(self) -> float:
        """ACT/365F accrual from start to end."""
        return year_fraction(self.start_date, self.end_date)

    @property
    def interest(self) -> float:
        """Interest amount paid at the end date."""
        return self.notional * self.rate * self.accrual_factor

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": "TERM_DEPOSIT",
            "trade_date": self.trade_date.isoformat(),
            "currency": self.currency,
            "buy_sell": self.buy_sell.value,
            "notional": self.notional,
            "rate": self.rate,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
        }


@dataclass(frozen=True)
class TermDepositTemplate:
    """
    Template for a deposit starting on spot, such as a 3M deposit.

    Attributes
    ----------
    deposit_period : Tenor
        Period from start to end
    currency : str
        Currency of the deposit
    spot_days : int
        Business days from trade date to start
    """

    deposit_period: Tenor
    currency: Currency
    spot_days: int = 2

    def __post_init__(self) -> None:
        object.__setattr__(self, "deposit_period", Tenor.parse(self.deposit_period))
        if self.deposit_period.amount == 0:
            raise ValueError("Deposit period must be non-zero")
        if self.spot_days < 0:
            raise ValueError(f"Spot days must be non-negative, got {self.spot_days}")

    def to_trade(
        self,
        trade_date: date,
        buy_sell: BuySell,
        notional: float,
        rate: float,
    ) -> TermDepositTrade:
        """Create a trade from the template."""
        start = spot_date(trade_date, self.spot_days)
        return TermDepositTrade(
            trade_date=trade_date,
            currency=self.currency,
            buy_sell=buy_sell,
            notional=notional,
            rate=rate,
            start_date=start,
            end_date=adjusted_date(start, self.deposit_period),
        )
