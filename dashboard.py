"""
One recomputation of every derived dashboard output for a filter selection.

Pipeline: records -> apply_filters() -> compute_kpis() -> generate_forecast()
(only when toggled) -> generate_insights(). Nothing here keeps state between
calls; identical inputs give identical snapshots.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

import pandas as pd

from filters import FilterSelection, apply_filters
from forecast import DEFAULT_HORIZON, combine_series, generate_forecast
from insights import generate_insights
from kpi import KPIResult, compute_kpis


@dataclass
class DashboardSnapshot:
    selection: FilterSelection
    kpis: KPIResult
    forecast: list[dict[str, Any]] = field(default_factory=list)
    insights: list[str] = field(default_factory=list)
    rows_used: int = 0


def build_snapshot(
    df: pd.DataFrame,
    selection: FilterSelection,
    show_forecast: bool = False,
    horizon: int | None = None,
    today: date | None = None,
    anchor: str = "today",
) -> DashboardSnapshot:
    filtered = apply_filters(df, selection, today=today, anchor=anchor)
    kpis = compute_kpis(filtered)
    forecast = []
    if show_forecast:
        forecast = generate_forecast(kpis.monthly_trend, DEFAULT_HORIZON if horizon is None else horizon)
    return DashboardSnapshot(
        selection=selection,
        kpis=kpis,
        forecast=forecast,
        insights=generate_insights(filtered),
        rows_used=len(filtered),
    )


def chart_rows(snapshot: DashboardSnapshot) -> list[dict[str, Any]]:
    return combine_series(snapshot.kpis.monthly_trend, snapshot.forecast)
