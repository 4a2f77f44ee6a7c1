"""
Date and tenor utilities.

Provides market tenors ("3M", "1Y"), a Saturday/Sunday weekend calendar
and the ACT/365F year fraction used to place curve nodes in time.
Holiday calendars are out of scope: every weekday is a business day.
"""

import re
from dataclasses import dataclass
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

_TENOR_PATTERN = re.compile(r"^\s*P?(\d+)([DWMY])\s*$", re.IGNORECASE)
_DAY_UNITS = {"D": 1, "W": 7}
_MONTH_UNITS = {"M": 1, "Y": 12}


@dataclass(frozen=True)
class Tenor:
    """
    A market tenor such as 2W, 3M or 10Y.

    Attributes
    ----------
    amount : int
        Number of units
    unit : str
        One of 'D', 'W', 'M', 'Y'

    Example
    -------
    >>> Tenor.parse("3M") + Tenor.parse("6M")
    Tenor(amount=9, unit='M')
    """

    amount: int
    unit: str

    def __post_init__(self) -> None:
        """Validate tenor fields."""
        if self.unit not in _DAY_UNITS and self.unit not in _MONTH_UNITS:
            raise ValueError(f"Tenor unit must be one of D, W, M, Y, got {self.unit!r}")
        if self.amount < 0:
            raise ValueError(f"Tenor amount must be non-negative, got {self.amount}")

    @classmethod
    def parse(cls, text: "str | Tenor") -> "Tenor":
        """
        Parse a tenor from text such as '3M' or the ISO form 'P3M'.

        Raises
        ------
        ValueError
            If the text is not a recognised tenor
        """
        if isinstance(text, Tenor):
            return text
        match = _TENOR_PATTERN.match(text)
        if match is None:
            raise ValueError(f"Invalid tenor: {text!r}")
        return cls(int(match.group(1)), match.group(2).upper())

    @property
    def period(self) -> relativedelta:
        """Calendar period represented by this tenor."""
        if self.unit in _DAY_UNITS:
            return relativedelta(days=self.amount * _DAY_UNITS[self.unit])
        return relativedelta(months=self.amount * _MONTH_UNITS[self.unit])

    def __add__(self, other: "Tenor") -> "Tenor":
        if not isinstance(other, Tenor):
            return NotImplemented
        if self.unit in _MONTH_UNITS and other.unit in _MONTH_UNITS:
            if self.unit == other.unit:
                return Tenor(self.amount + other.amount, self.unit)
            months = self.amount * _MONTH_UNITS[self.unit] + other.amount * _MONTH_UNITS[other.unit]
            return Tenor(months, "M")
        if self.unit in _DAY_UNITS and other.unit in _DAY_UNITS:
            if self.unit == other.unit:
                return Tenor(self.amount + other.amount, self.unit)
            days = self.amount * _DAY_UNITS[self.unit] + other.amount * _DAY_UNITS[other.unit]
            return Tenor(days, "D")
        raise ValueError(f"Cannot add tenors {self} and {other}")

    def __str__(self) -> str:
        return f"{self.amount}{self.unit}"


def add_tenor(start: date, tenor: Tenor | str) -> date:
    """Add a tenor to a date without business day adjustment."""
    return start + Tenor.parse(tenor).period


def is_business_day(d: date) -> bool:
    """Return True if the date is not a Saturday or Sunday."""
    return d.weekday() < 5


def next_or_same_business_day(d: date) -> date:
    """Roll a date forward to the next business day, unless it is one."""
    while not is_business_day(d):
        d += timedelta(days=1)
    return d


def add_business_days(d: date, days: int) -> date:
    """
    Add a number of business days to a date.

    Parameters
    ----------
    d : date
        Start date (need not be a business day)
    days : int
        Non-negative number of business days

    Returns
    -------
    date
        The resulting business day
    """
    if days < 0:
        raise ValueError(f"Business days must be non-negative, got {days}")
    result = d
    for _ in range(days):
        result = next_or_same_business_day(result + timedelta(days=1))
    return result


def year_fraction(start: date, end: date) -> float:
    """ACT/365F year fraction between two dates (negative if end < start)."""
    return (end - start).days / 365.0
