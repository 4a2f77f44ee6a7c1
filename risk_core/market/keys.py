"""
Observable market quotes and the read-only lookup used to access them.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType

from risk_core.errors import MarketDataNotFoundError

DEFAULT_FIELD = "MarketValue"


@dataclass(frozen=True)
class ObservableKey:
    """
    Identifier of a single observable market quote.

    Attributes
    ----------
    identifier : str
        Ticker or other identifier of the quote (e.g., 'USD-FRA-3x6')
    field_name : str
        Quote field (default 'MarketValue')
    """

    identifier: str
    field_name: str = DEFAULT_FIELD

    def __post_init__(self) -> None:
        """Validate key fields."""
        if not self.identifier:
            raise ValueError("Observable key identifier must not be empty")

    @classmethod
    def of(cls, key: "ObservableKey | str") -> "ObservableKey":
        """Coerce a plain string into a key using the default field."""
        if isinstance(key, ObservableKey):
            return key
        return cls(key)

    def __str__(self) -> str:
        if self.field_name == DEFAULT_FIELD:
            return self.identifier
        return f"{self.identifier}/{self.field_name}"


@dataclass(frozen=True)
class MarketData:
    """
    Immutable snapshot of observable quotes on a valuation date.

    Attributes
    ----------
    valuation_date : date
        Date the quotes were observed
    values : Mapping[ObservableKey, float]
        Quote values by key (copied at construction)

    Example
    -------
    >>> md = MarketData.of(date(2015, 4, 23), {"USD-DEP-3M": 0.0028})
    >>> md.get_value(ObservableKey("USD-DEP-3M"))
    0.0028
    """

    valuation_date: date
    values: Mapping[ObservableKey, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Take a private, read-only copy of the quotes."""
        copied = {ObservableKey.of(k): float(v) for k, v in self.values.items()}
        object.__setattr__(self, "values", MappingProxyType(copied))

    @classmethod
    def of(
        cls,
        valuation_date: date,
        values: Mapping["ObservableKey | str", float] | None = None,
    ) -> "MarketData":
        """Create market data, accepting plain strings as keys."""
        return cls(valuation_date, dict(values or {}))

    def get_value(self, key: ObservableKey) -> float:
        """
        Look up the value of a quote.

        Raises
        ------
        MarketDataNotFoundError
            If no value is available for the key
        """
        try:
            return self.values[key]
        except KeyError:
            raise MarketDataNotFoundError(key) from None

    def contains_value(self, key: ObservableKey) -> bool:
        """Return True if a value is available for the key."""
        return key in self.values

    def keys(self) -> Iterator[ObservableKey]:
        """Iterate over available keys."""
        return iter(self.values)

    def with_values(self, values: Mapping["ObservableKey | str", float]) -> "MarketData":
        """Return a copy with the given quotes added or replaced."""
        merged = dict(self.values)
        merged.update({ObservableKey.of(k): v for k, v in values.items()})
        return MarketData(self.valuation_date, merged)

    def __len__(self) -> int:
        return len(self.values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MarketData):
            return NotImplemented
        return self.valuation_date == other.valuation_date and dict(self.values) == dict(
            other.values
        )

    def __hash__(self) -> int:
        return hash((self.valuation_date, frozenset(self.values.items())))
