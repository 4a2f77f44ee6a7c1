"""
Collections of point sensitivities.

``PointSensitivities`` is the immutable result of pricing one or more
trades. Entries referring to the same curve query may appear several
times until the collection is normalized, which sorts the entries by
query and merges duplicates by summing their values.

``MutablePointSensitivities`` is the builder used while sensitivities are
being gathered; ``build()`` freezes its current content.
"""

import math
from collections.abc import Callable, Iterable, Iterator
from functools import cmp_to_key

from risk_core.errors import ConfigurationError
from risk_core.sensitivity.point import PointSensitivity


def _merge_sorted(entries: list[PointSensitivity]) -> list[PointSensitivity]:
    """
    Sort entries by query and sum the entries of each query.

    Each group is summed with ``math.fsum``, so the merged value does not
    depend on the order in which contributions were added.
    """
    ordered = sorted(entries, key=cmp_to_key(PointSensitivity.compare_excluding_sensitivity))
    groups: list[list[PointSensitivity]] = [[ordered[0]]]
    for current in ordered[1:]:
        if current.compare_excluding_sensitivity(groups[-1][0]) == 0:
            groups[-1].append(current)
        else:
            groups.append([current])
    return [
        group[0] if len(group) == 1
        else group[0].with_sensitivity(math.fsum(s.sensitivity for s in group))
        for group in groups
    ]


class PointSensitivities:
    """
    Immutable sequence of point sensitivities.

    Order is not significant except during normalization. Equality is
    structural: two instances are equal when they hold equal entries in
    the same order.

    Example
    -------
    >>> a = ZeroRateSensitivity("USD", date(2016, 1, 4), 3.0)
    >>> b = ZeroRateSensitivity("USD", date(2016, 1, 4), -1.0)
    >>> PointSensitivities.of([a, b]).normalized().size()
    1
    """

    NONE: "PointSensitivities"

    __slots__ = ("_sensitivities",)

    def __init__(self, sensitivities: Iterable[PointSensitivity]) -> None:
        if sensitivities is None:
            raise ConfigurationError("Sensitivities must not be None")
        entries = tuple(sensitivities)
        for entry in entries:
            if not isinstance(entry, PointSensitivity):
                raise TypeError(
                    f"Expected PointSensitivity, got {type(entry).__name__}"
                )
        self._sensitivities = entries

    @classmethod
    def of(
        cls, sensitivities: "Iterable[PointSensitivity] | PointSensitivity"
    ) -> "PointSensitivities":
        """
        Create an instance from a single sensitivity or a list of them.

        The input is copied; later changes to the list are not visible.

        Raises
        ------
        ConfigurationError
            If ``sensitivities`` is None
        """
        if isinstance(sensitivities, PointSensitivity):
            return cls((sensitivities,))
        result = cls(sensitivities)
        return result if result._sensitivities else cls.NONE

    @property
    def sensitivities(self) -> tuple[PointSensitivity, ...]:
        """The entries, in their current order."""
        return self._sensitivities

    def size(self) -> int:
        """Number of entries, including duplicates of the same query."""
        return len(self._sensitivities)

    def combined_with(self, other: "PointSensitivities") -> "PointSensitivities":
        """Concatenate two collections, keeping all entries of both."""
        if not other._sensitivities:
            return self
        if not self._sensitivities:
            return other
        return PointSensitivities(self._sensitivities + other._sensitivities)

    def multiplied_by(self, factor: float) -> "PointSensitivities":
        """
        Scale every sensitivity value by a factor.

        Raises
        ------
        ValueError
            If a scaled value overflows to infinity or the factor is not finite
        """
        return self.map_sensitivities(lambda value: value * factor)

    def map_sensitivities(self, operator: Callable[[float], float]) -> "PointSensitivities":
        """
        Apply a transform to each sensitivity value independently.

        Raises
        ------
        ValueError
            If the transform returns a value that is not finite
        """
        return PointSensitivities(
            s.with_sensitivity(operator(s.sensitivity)) for s in self._sensitivities
        )

    def normalized(self) -> "PointSensitivities":
        """
        Sort the entries by query and merge entries for the same query.

        The result holds one entry per distinct query in ascending query
        order, each with the sum of the merged values. This must be applied
        once all contributions have been combined and before the result is
        used as a vector indexed by curve query.
        """
        if not self._sensitivities:
            return self
        return PointSensitivities(_merge_sorted(list(self._sensitivities)))

    def equal_with_tolerance(self, other: "PointSensitivities", tolerance: float) -> bool:
        """
        Compare with another instance, allowing a tolerance on the values.

        Both instances are normalized before comparison.
        """
        mine = self.normalized().sensitivities
        theirs = other.normalized().sensitivities
        if len(mine) != len(theirs):
            return False
        return all(
            a.compare_excluding_sensitivity(b) == 0
            and abs(a.sensitivity - b.sensitivity) <= tolerance
            for a, b in zip(mine, theirs)
        )

    def total(self) -> float:
        """Sum of all sensitivity values, ignoring currency."""
        return sum(s.sensitivity for s in self._sensitivities)

    def to_mutable(self) -> "MutablePointSensitivities":
        """Return a builder initialised with these entries."""
        return MutablePointSensitivities(self._sensitivities)

    def __len__(self) -> int:
        return len(self._sensitivities)

    def __iter__(self) -> Iterator[PointSensitivity]:
        return iter(self._sensitivities)

    def __getitem__(self, index: int) -> PointSensitivity:
        return self._sensitivities[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointSensitivities):
            return NotImplemented
        return self._sensitivities == other._sensitivities

    def __hash__(self) -> int:
        return hash(self._sensitivities)

    def __repr__(self) -> str:
        return f"PointSensitivities({list(self._sensitivities)!r})"


PointSensitivities.NONE = PointSensitivities(())


class MutablePointSensitivities:
    """
    Builder accumulating point sensitivities while pricing.

    Example
    -------
    >>> builder = MutablePointSensitivities()
    >>> builder.add(ZeroRateSensitivity("USD", date(2016, 1, 4), 2.5))
    >>> result = builder.build().normalized()
    """

    def __init__(self, sensitivities: Iterable[PointSensitivity] = ()) -> None:
        self._sensitivities: list[PointSensitivity] = list(sensitivities)

    def add(self, sensitivity: PointSensitivity) -> "MutablePointSensitivities":
        """Add a single sensitivity."""
        if not isinstance(sensitivity, PointSensitivity):
            raise TypeError(f"Expected PointSensitivity, got {type(sensitivity).__name__}")
        self._sensitivities.append(sensitivity)
        return self

    def add_all(
        self, sensitivities: "Iterable[PointSensitivity] | PointSensitivities"
    ) -> "MutablePointSensitivities":
        """Add all entries of another collection."""
        for sensitivity in sensitivities:
            self.add(sensitivity)
        return self

    def multiply_by(self, factor: float) -> "MutablePointSensitivities":
        """Scale all accumulated values in place; non-finite results raise ValueError."""
        self._sensitivities = [
            s.with_sensitivity(s.sensitivity * factor) for s in self._sensitivities
        ]
        return self

    def normalize(self) -> "MutablePointSensitivities":
        """Sort and merge the accumulated entries in place."""
        if self._sensitivities:
            self._sensitivities = _merge_sorted(self._sensitivities)
        return self

    def size(self) -> int:
        """Number of accumulated entries."""
        return len(self._sensitivities)

    def build(self) -> PointSensitivities:
        """Freeze the current content into an immutable collection."""
        return PointSensitivities.of(list(self._sensitivities))

    def __len__(self) -> int:
        return len(self._sensitivities)
