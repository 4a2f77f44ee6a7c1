"""
Metadata locating a curve node in time.

Each node of a calibrated curve carries metadata describing the date of
the point and a label. The identifier is the value used to match nodes
across curves, for example when applying scenario shifts.
"""

from collections.abc import Hashable
from dataclasses import dataclass
from datetime import date

from risk_core.dates import Tenor


@dataclass(frozen=True)
class CurveNodeMetadata:
    """
    Base class for node metadata.

    Attributes
    ----------
    date : date
        Date of the curve point
    """

    date: date

    @property
    def label(self) -> str:
        """Human readable label of the node."""
        raise NotImplementedError

    @property
    def identifier(self) -> Hashable:
        """Value identifying the node within its curve."""
        raise NotImplementedError


@dataclass(frozen=True)
class TenorCurveNodeMetadata(CurveNodeMetadata):
    """Node metadata identified by a tenor such as '6M'."""

    tenor: Tenor

    def __post_init__(self) -> None:
        object.__setattr__(self, "tenor", Tenor.parse(self.tenor))

    @property
    def label(self) -> str:
        return str(self.tenor)

    @property
    def identifier(self) -> Tenor:
        return self.tenor


@dataclass(frozen=True)
class SimpleCurveNodeMetadata(CurveNodeMetadata):
    """Node metadata identified by a free-form label."""

    text: str

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("Curve node label must not be empty")

    @property
    def label(self) -> str:
        return self.text

    @property
    def identifier(self) -> str:
        return self.text
