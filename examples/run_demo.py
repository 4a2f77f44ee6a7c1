#!/usr/bin/env python3
"""
Curve Risk Core - Demo Script

This script demonstrates the historical scenario workflow:
1. Describe the USD curve group and its calibration nodes
2. Generate a history of USD discount curves
3. Build day-on-day curve point shifts
4. Replay the scenarios through a term deposit pricer
5. Compute historical VaR and node sensitivities
6. Export results

Usage:
    python examples/run_demo.py
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from pathlib import Path

import numpy as np
import pandas as pd

from risk_core import (
    AnyDiscountCurveFilter,
    BuySell,
    DiscountCurveId,
    DiscountingTermDepositPricer,
    MarketSnapshot,
    NodalCurve,
    PerturbationMapping,
    RatesProvider,
    ScenarioDefinition,
    ScenarioReplay,
    TermDepositTemplate,
    build_historical_shifts,
)
from risk_core.config.loader import create_default_curve_group
from risk_core.dates import add_tenor, year_fraction
from risk_core.market import TenorCurveNodeMetadata
from risk_core.reporting import (
    create_summary_report,
    create_var_summary_table,
    format_amount,
)

TENORS = ["3M", "6M", "1Y", "2Y", "5Y"]
BASE_RATES = np.array([0.010, 0.012, 0.015, 0.020, 0.025])


def make_history(end: date, n_days: int, seed: int = 42) -> dict[date, MarketSnapshot]:
    """Random walk of the USD discount curve over business days ending at `end`."""
    rng = np.random.default_rng(seed)
    dates = [ts.date() for ts in pd.bdate_range(end=end, periods=n_days)]
    moves = rng.normal(0.0, 0.0004, size=(n_days, len(TENORS)))
    moves[0] = 0.0
    rates = BASE_RATES + np.cumsum(moves, axis=0)

    history = {}
    for d, y in zip(dates, rates):
        node_dates = [add_tenor(d, t) for t in TENORS]
        curve = NodalCurve(
            name="USD-Discount",
            x_values=np.array([year_fraction(d, nd) for nd in node_dates]),
            y_values=y,
            parameter_metadata=tuple(
                TenorCurveNodeMetadata(nd, t) for nd, t in zip(node_dates, TENORS)
            ),
        )
        history[d] = MarketSnapshot(d, {DiscountCurveId("USD"): curve})
    return history


def main() -> None:
    """Run the historical VaR demo."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("Curve Risk Core - Historical VaR Demo")
    print("=" * 60)
    print()

    # =========================================================================
    # 1. Curve group
    # =========================================================================
    print("1. Curve group...")

    group = create_default_curve_group()
    for definition in group.curve_definitions():
        print(f"   {definition.curve_id}: {definition.parameter_count} nodes, "
              f"{len(definition.requirements())} quotes required")
    print()

    # =========================================================================
    # 2. History
    # =========================================================================
    print("2. Generating curve history...")

    valuation_date = date(2015, 4, 23)
    history = make_history(valuation_date, n_days=251)
    dates = sorted(history)
    print(f"   {len(dates)} snapshots from {dates[0]} to {dates[-1]}")
    print()

    # =========================================================================
    # 3. Shifts
    # =========================================================================
    print("3. Building day-on-day shifts...")

    shifts = build_historical_shifts(DiscountCurveId("USD"), history, dates)
    definition = ScenarioDefinition.of_mappings(
        PerturbationMapping(AnyDiscountCurveFilter(), shifts)
    )
    print(f"   Scenarios: {definition.scenario_count - 1} (plus base)")
    print()

    # =========================================================================
    # 4. Replay
    # =========================================================================
    print("4. Replaying scenarios...")

    deposit = TermDepositTemplate("2Y", "USD").to_trade(
        valuation_date, BuySell.BUY, 10_000_000, 0.02
    )
    pricer = DiscountingTermDepositPricer()
    base = history[valuation_date]

    with ThreadPoolExecutor(max_workers=4) as executor:
        replay = ScenarioReplay(
            definition,
            lambda snapshot: pricer.present_value(deposit, RatesProvider(snapshot)),
            executor=executor,
        )
        series = replay.run(base, [valuation_date] + dates[1:])

    print(f"   Base PV: {format_amount(series.base_value)}")
    print(f"   99% VaR: {format_amount(series.var(0.99))}")
    print()

    # =========================================================================
    # 5. Risk
    # =========================================================================
    print("5. Risk measures...")

    print(create_var_summary_table(series).to_string(index=False))
    sensitivities = pricer.pv_parameter_sensitivity(deposit, RatesProvider(base))
    for sens in sensitivities:
        pv01 = sens.values * 1e-4
        labels = [m.label for m in sens.parameter_metadata]
        print(f"   PV01 {sens.curve_id.name}: "
              + ", ".join(f"{label}={v:,.2f}" for label, v in zip(labels, pv01)))
    print()

    # =========================================================================
    # 6. Export
    # =========================================================================
    print("6. Exporting results...")

    output_dir = Path("output")
    files = create_summary_report(series, output_dir, sensitivities=sensitivities)
    for name, path in files.items():
        print(f"   {name}: {path}")
    print()
    print("Done.")


if __name__ == "__main__":
    main()
