"""
Scenario valuation series and historical VaR statistics.

Provides:
- P&L of each scenario against the base valuation
- Historical VaR
- Historical expected shortfall
"""

from collections.abc import Sequence
from datetime import date

import numpy as np
import pandas as pd

from risk_core._types import FloatArray


def _check_confidence(confidence: float) -> None:
    if not 0 < confidence < 1:
        raise ValueError(f"Confidence must be in (0, 1), got {confidence}")


class ScenarioSeries:
    """
    Valuations ordered by scenario index.

    Index 0 holds the base valuation, indices 1 to N-1 the valuations
    under each perturbed scenario.

    Parameters
    ----------
    values : Sequence[float]
        Valuation of each scenario, base first
    dates : Sequence[date] | None
        Date of each scenario, if known

    Example
    -------
    >>> series = ScenarioSeries([100.0, 101.2, 98.7])
    >>> series.pnl()
    array([ 1.2, -1.3])
    """

    def __init__(self, values: Sequence[float], dates: Sequence[date] | None = None) -> None:
        array = np.array(values, dtype=np.float64)
        if array.ndim != 1 or len(array) == 0:
            raise ValueError("Scenario series needs at least the base valuation")
        if dates is not None and len(dates) != len(array):
            raise ValueError(
                f"Expected {len(array)} scenario dates, got {len(dates)}"
            )
        array.setflags(write=False)
        self._values = array
        self._dates = tuple(dates) if dates is not None else None

    @property
    def values(self) -> FloatArray:
        return self._values

    @property
    def dates(self) -> tuple[date, ...] | None:
        return self._dates

    @property
    def scenario_count(self) -> int:
        """Number of scenarios including the base scenario."""
        return len(self._values)

    @property
    def base_value(self) -> float:
        return float(self._values[0])

    @property
    def scenario_values(self) -> FloatArray:
        """Valuations of scenarios 1 to N-1."""
        return self._values[1:]

    def pnl(self) -> FloatArray:
        """
        P&L of each perturbed scenario.

        PnL(i) = V(i) - V(0), for i >= 1
        """
        return self._values[1:] - self._values[0]

    def var(self, confidence: float = 0.99) -> float:
        """
        Historical value at risk.

        VaR(α) = -Quantile_{1-α}(PnL)

        Parameters
        ----------
        confidence : float
            Confidence level in (0, 1)

        Returns
        -------
        float
            Loss at the confidence level, positive for a loss
        """
        _check_confidence(confidence)
        pnl = self.pnl()
        if len(pnl) == 0:
            raise ValueError("VaR needs at least one perturbed scenario")
        return float(-np.quantile(pnl, 1.0 - confidence))

    def expected_shortfall(self, confidence: float = 0.99) -> float:
        """
        Historical expected shortfall.

        ES(α) = -E[PnL | PnL <= -VaR(α)]
        """
        var = self.var(confidence)
        pnl = self.pnl()
        tail = pnl[pnl <= -var]
        return float(-np.mean(tail))

    def to_frame(self) -> pd.DataFrame:
        """
        Series as a DataFrame indexed by scenario.

        Returns
        -------
        pd.DataFrame
            Columns: Value, PnL (and Date if dates are known)
        """
        df = pd.DataFrame(
            {
                "Value": self._values,
                "PnL": np.concatenate([[0.0], self.pnl()]),
            },
            index=pd.RangeIndex(len(self._values), name="Scenario"),
        )
        if self._dates is not None:
            df.insert(0, "Date", list(self._dates))
        return df

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScenarioSeries):
            return NotImplemented
        return np.array_equal(self._values, other._values) and self._dates == other._dates

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ScenarioSeries(base={self.base_value}, scenarios={len(self._values) - 1})"
