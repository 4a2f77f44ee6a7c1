"""
Scenario replay driver.

Prices the base snapshot and every perturbed scenario snapshot and
collects the valuations into a ``ScenarioSeries``. A pricing failure in
any scenario aborts the replay; no partial series is returned.
"""

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import FIRST_EXCEPTION, Executor, Future, wait
from datetime import date

from risk_core.errors import ScenarioReplayError
from risk_core.market.snapshot import MarketSnapshot
from risk_core.scenarios.definition import ScenarioDefinition
from risk_core.scenarios.series import ScenarioSeries

logger = logging.getLogger(__name__)

Pricer = Callable[[MarketSnapshot], float]


class ScenarioReplay:
    """
    Replays a scenario definition through a pricer.

    Parameters
    ----------
    definition : ScenarioDefinition
        Scenarios to replay
    pricer : Callable[[MarketSnapshot], float]
        Valuation of the portfolio under a snapshot
    executor : Executor | None
        If given, scenarios are priced concurrently on it

    Example
    -------
    >>> replay = ScenarioReplay(definition, lambda s: pricer.present_value(trade, RatesProvider(s)))
    >>> series = replay.run(base_snapshot)
    >>> series.var(0.99)
    """

    def __init__(
        self,
        definition: ScenarioDefinition,
        pricer: Pricer,
        executor: Executor | None = None,
    ) -> None:
        self.definition = definition
        self.pricer = pricer
        self.executor = executor

    def _price(self, base_snapshot: MarketSnapshot, scenario_index: int) -> float:
        snapshot = self.definition.apply(base_snapshot, scenario_index)
        value = float(self.pricer(snapshot))
        logger.debug("Scenario %d valued at %.6f", scenario_index, value)
        return value

    def _price_checked(self, base_snapshot: MarketSnapshot, scenario_index: int) -> float:
        try:
            return self._price(base_snapshot, scenario_index)
        except Exception as exc:
            raise ScenarioReplayError(scenario_index, exc) from exc

    def _run_serial(self, base_snapshot: MarketSnapshot) -> list[float]:
        return [
            self._price_checked(base_snapshot, i) for i in range(self.definition.scenario_count)
        ]

    def _run_concurrent(self, base_snapshot: MarketSnapshot) -> list[float]:
        futures: list[Future] = [
            self.executor.submit(self._price_checked, base_snapshot, i)  # type: ignore[union-attr]
            for i in range(self.definition.scenario_count)
        ]
        done, not_done = wait(futures, return_when=FIRST_EXCEPTION)
        failed = [f for f in futures if f in done and f.exception() is not None]
        if failed:
            for future in not_done:
                future.cancel()
            raise failed[0].exception()  # type: ignore[misc]
        return [future.result() for future in futures]

    def run(
        self,
        base_snapshot: MarketSnapshot,
        scenario_dates: Sequence[date] | None = None,
    ) -> ScenarioSeries:
        """
        Price every scenario.

        Parameters
        ----------
        base_snapshot : MarketSnapshot
            Unperturbed market
        scenario_dates : Sequence[date] | None
            Date of each scenario, base first

        Returns
        -------
        ScenarioSeries
            Valuations ordered by scenario index

        Raises
        ------
        ScenarioReplayError
            If pricing fails for any scenario
        ValueError
            If the number of dates does not match the scenario count
        """
        count = self.definition.scenario_count
        if scenario_dates is not None and len(scenario_dates) != count:
            raise ValueError(
                f"Expected {count} scenario dates, got {len(scenario_dates)}"
            )

        logger.info(
            "Replaying %d scenarios on %s%s",
            count,
            base_snapshot.valuation_date,
            " concurrently" if self.executor is not None else "",
        )
        if self.executor is None:
            values = self._run_serial(base_snapshot)
        else:
            values = self._run_concurrent(base_snapshot)

        series = ScenarioSeries(values, scenario_dates)
        logger.info("Replay finished: base value %.6f", series.base_value)
        return series
