"""
Scenario definitions combining perturbation mappings.
"""

import logging
from dataclasses import dataclass

from risk_core.market.snapshot import MarketSnapshot
from risk_core.scenarios.filters import PerturbationMapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioDefinition:
    """
    A set of perturbation mappings sharing one scenario count.

    Scenario 0 is the base scenario. For every other scenario each curve
    of the snapshot is perturbed by the first mapping whose filter
    selects it; later mappings are ignored for that curve.

    Attributes
    ----------
    mappings : tuple[PerturbationMapping, ...]
        Mappings in priority order
    scenario_count : int
        Number of scenarios including the base scenario

    Example
    -------
    >>> definition = ScenarioDefinition.of_mappings(
    ...     PerturbationMapping(AnyDiscountCurveFilter(), shifts)
    ... )
    >>> perturbed = definition.apply(snapshot, 1)
    """

    mappings: tuple[PerturbationMapping, ...]
    scenario_count: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "mappings", tuple(self.mappings))
        if self.scenario_count < 1:
            raise ValueError(f"Scenario count must be at least 1, got {self.scenario_count}")

    @classmethod
    def of_mappings(
        cls, *mappings: PerturbationMapping, scenario_count: int | None = None
    ) -> "ScenarioDefinition":
        """
        Create a definition from mappings.

        The scenario count defaults to the largest count of the mappings.
        """
        if scenario_count is None:
            scenario_count = max((m.scenario_count for m in mappings), default=1)
        return cls(tuple(mappings), scenario_count)

    def apply(self, snapshot: MarketSnapshot, scenario_index: int) -> MarketSnapshot:
        """
        Derive the snapshot of one scenario.

        Raises
        ------
        IndexError
            If the scenario index is outside the definition
        """
        if not 0 <= scenario_index < self.scenario_count:
            raise IndexError(
                f"Scenario index {scenario_index} out of range [0, {self.scenario_count})"
            )
        if scenario_index == 0:
            return snapshot

        perturbed = {}
        for curve_id, curve in snapshot.curves.items():
            mapping = next((m for m in self.mappings if m.matches(curve_id, curve)), None)
            if mapping is None:
                continue
            shifted = mapping.shifts.apply_to(curve, scenario_index)
            if shifted is not curve:
                perturbed[curve_id] = shifted
        logger.debug("Scenario %d perturbs %d curves", scenario_index, len(perturbed))
        return snapshot.with_curves(perturbed)
