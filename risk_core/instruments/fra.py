"""
Forward rate agreement instrument and template.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any

from risk_core.dates import Tenor, year_fraction
from risk_core.instruments.base import BuySell, CalibrationTrade, adjusted_date, spot_date
from risk_core.market.curve import IborIndex


@dataclass(frozen=True)
class FraTrade(CalibrationTrade):
    """
    Forward rate agreement.

    Buying the FRA pays the fixed rate and receives the index rate over
    the accrual period from start date to end date.

    Attributes
    ----------
    trade_date : date
        Trade date
    index : IborIndex
        Floating rate index
    buy_sell : BuySell
        BUY to pay fixed
    notional : float
        Notional amount
    fixed_rate : float
        Agreed fixed rate (decimal)
    start_date : date
        Start of the accrual period
    end_date : date
        End of the accrual period
    """

    trade_date: date
    index: IborIndex
    buy_sell: BuySell
    notional: float
    fixed_rate: float
    start_date: date
    end_date: date

    def __post_init__(self) -> None:
        """Validate FRA parameters."""
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
        """ACT/365F accrual of the FRA period."""
        return year_fraction(self.start_date, self.end_date)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": "FRA",
            "trade_date": self.trade_date.isoformat(),
            "index": self.index.name,
            "buy_sell": self.buy_sell.value,
            "notional": self.notional,
            "fixed_rate": self.fixed_rate,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
        }


@dataclass(frozen=True)
class FraTemplate:
    """
    Template for a FRA such as 3x6 on a 3M index.

    Attributes
    ----------
    period_to_start : Tenor
        Period from spot to the start date
    period_to_end : Tenor
        Period from spot to the end date
    index : IborIndex
        Floating rate index
    spot_days : int
        Business days from trade date to spot
    """

    period_to_start: Tenor
    period_to_end: Tenor
    index: IborIndex
    spot_days: int = 2

    def __post_init__(self) -> None:
        object.__setattr__(self, "period_to_start", Tenor.parse(self.period_to_start))
        object.__setattr__(self, "period_to_end", Tenor.parse(self.period_to_end))
        if self.spot_days < 0:
            raise ValueError(f"Spot days must be non-negative, got {self.spot_days}")

    @classmethod
    def of(cls, period_to_start: Tenor | str, index: IborIndex) -> "FraTemplate":
        """Create a template whose end is the start plus the index tenor."""
        start = Tenor.parse(period_to_start)
        return cls(start, start + index.tenor, index)

    @property
    def name(self) -> str:
        """Market name of the FRA, e.g. '3Mx6M'."""
        return f"{self.period_to_start}x{self.period_to_end}"

    def to_trade(
        self,
        trade_date: date,
        buy_sell: BuySell,
        notional: float,
        fixed_rate: float,
    ) -> FraTrade:
        """Create a trade from the template."""
        spot = spot_date(trade_date, self.spot_days)
        return FraTrade(
            trade_date=trade_date,
            index=self.index,
            buy_sell=buy_sell,
            notional=notional,
            fixed_rate=fixed_rate,
            start_date=adjusted_date(spot, self.period_to_start),
            end_date=adjusted_date(spot, self.period_to_end),
        )
