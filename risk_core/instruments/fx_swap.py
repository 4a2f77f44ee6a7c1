"""
FX swap instrument and template.

An FX swap exchanges currencies on a near date and re-exchanges them on a
far date. The far rate is quoted as the near rate plus forward points.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from risk_core.dates import Tenor
from risk_core.instruments.base import (
    BuySell,
    CalibrationTrade,
    CurrencyPair,
    adjusted_date,
    spot_date,
)

_REFERENCE_DATE = date(2000, 1, 3)


@dataclass(frozen=True)
class FxSwapTrade(CalibrationTrade):
    """
    FX swap trade.

    Buying the swap buys the base currency on the near date and sells it
    back on the far date.

    Attributes
    ----------
    trade_date : date
        Trade date
    currency_pair : CurrencyPair
        Currency pair, rates quoted as counter per base
    buy_sell : BuySell
        BUY to buy base currency on the near leg
    notional : float
        Notional in base currency
    near_rate : float
        FX rate of the near exchange
    far_rate : float
        FX rate of the far exchange
    near_date : date
        Payment date of the near exchange
    far_date : date
        Payment date of the far exchange
    """

    trade_date: date
    currency_pair: CurrencyPair
    buy_sell: BuySell
    notional: float
    near_rate: float
    far_rate: float
    near_date: date
    far_date: date

    def __post_init__(self) -> None:
        """Validate swap parameters."""
        self._validate_common()
        if self.near_rate <= 0:
            raise ValueError(f"Near FX rate must be positive, got {self.near_rate}")
        if self.far_rate <= 0:
            raise ValueError(f"Far FX rate must be positive, got {self.far_rate}")
        if self.far_date <= self.near_date:
            raise ValueError(
                f"Far date ({self.far_date}) must be after near date ({self.near_date})"
            )

    @property
    def maturity_date(self) -> date:
        return self.far_date

    @property
    def forward_points(self) -> float:
        """Far rate minus near rate."""
        return self.far_rate - self.near_rate

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": "FX_SWAP",
            "trade_date": self.trade_date.isoformat(),
            "currency_pair": str(self.currency_pair),
            "buy_sell": self.buy_sell.value,
            "notional": self.notional,
            "near_rate": self.near_rate,
            "far_rate": self.far_rate,
            "near_date": self.near_date.isoformat(),
            "far_date": self.far_date.isoformat(),
        }


@dataclass(frozen=True)
class FxSwapTemplate:
    """
    Template for an FX swap with periods relative to the spot date.

    Attributes
    ----------
    currency_pair : CurrencyPair
        Currency pair of the swap
    period_to_far : Tenor
        Period from spot to the far date
    period_to_near : Tenor
        Period from spot to the near date (default 0D, i.e. spot)
    spot_days : int
        Business days from trade date to spot

    Example
    -------
    >>> template = FxSwapTemplate.of("EUR/USD", "3M")
    >>> trade = template.to_trade(date(2015, 4, 23), BuySell.BUY, 1.0, 1.08, 0.0012)
    """

    currency_pair: CurrencyPair
    period_to_far: Tenor
    period_to_near: Tenor = field(default=Tenor(0, "D"))
    spot_days: int = 2

    def __post_init__(self) -> None:
        object.__setattr__(self, "currency_pair", CurrencyPair.parse(self.currency_pair))
        object.__setattr__(self, "period_to_far", Tenor.parse(self.period_to_far))
        object.__setattr__(self, "period_to_near", Tenor.parse(self.period_to_near))
        if self.spot_days < 0:
            raise ValueError(f"Spot days must be non-negative, got {self.spot_days}")
        far = _REFERENCE_DATE + self.period_to_far.period
        if far <= _REFERENCE_DATE + self.period_to_near.period:
            raise ValueError(
                f"Period to far ({self.period_to_far}) must be longer than "
                f"period to near ({self.period_to_near})"
            )

    @classmethod
    def of(
        cls,
        currency_pair: CurrencyPair | str,
        period_to_far: Tenor | str,
        period_to_near: Tenor | str = "0D",
    ) -> "FxSwapTemplate":
        return cls(currency_pair, period_to_far, period_to_near)

    def to_trade(
        self,
        trade_date: date,
        buy_sell: BuySell,
        notional: float,
        near_fx_rate: float,
        forward_points: float,
    ) -> FxSwapTrade:
        """
        Create a trade from the template.

        Parameters
        ----------
        trade_date : date
            Trade date
        buy_sell : BuySell
            Direction of the near leg
        notional : float
            Notional in base currency
        near_fx_rate : float
            FX rate of the near exchange
        forward_points : float
            Far rate minus near rate

        Returns
        -------
        FxSwapTrade
            The materialised trade
        """
        spot = spot_date(trade_date, self.spot_days)
        return FxSwapTrade(
            trade_date=trade_date,
            currency_pair=self.currency_pair,
            buy_sell=buy_sell,
            notional=notional,
            near_rate=near_fx_rate,
            far_rate=near_fx_rate + forward_points,
            near_date=adjusted_date(spot, self.period_to_near),
            far_date=adjusted_date(spot, self.period_to_far),
        )
