"""
Short-horizon revenue projection from the monthly series.

This is a trend/seasonality heuristic, not a fitted model: the base level is
the mean of the last (up to) 12 months, scaled by a linear trend and a
sinusoidal seasonal factor for the target calendar month.
"""

import logging
import math
from typing import Any

import pandas as pd

from sales_data import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_HORIZON = 3
BASE_WINDOW_MONTHS = 12
TREND_STEP = 0.03
SEASONAL_AMPLITUDE = 0.2
MAX_CONFIDENCE = 0.7
CONFIDENCE_STEP = 0.1
MIN_CONFIDENCE = 0.5


def forecast_confidence(step: int) -> float:
    return max(MAX_CONFIDENCE - step * CONFIDENCE_STEP, MIN_CONFIDENCE)


def _project(monthly: list[dict[str, Any]], horizon: int) -> list[dict[str, Any]]:
    history = sorted(monthly, key=lambda m: m["month"])
    last_period = pd.Period(history[-1]["month"], freq="M")

    recent = history[-BASE_WINDOW_MONTHS:]
    base = sum(m.get("revenue") or 0 for m in recent) / len(recent)

    points = []
    for i in range(1, horizon + 1):
        target = last_period + i
        trend = 1 + i * TREND_STEP
        # zero-based calendar month of the target, so January has no seasonal lift
        seasonality = 1 + SEASONAL_AMPLITUDE * math.sin((target.month - 1) * math.pi / 6)
        points.append({
            "month": target.strftime("%Y-%m"),
            "revenue": round_half_up(base * trend * seasonality),
            "type": "forecast",
            "confidence": forecast_confidence(i),
        })
    return points


def generate_forecast(monthly: list[dict[str, Any]], horizon: int = DEFAULT_HORIZON) -> list[dict[str, Any]]:
    """
    Project `horizon` future months after the last month in `monthly`.

    Returns [] for empty history or a non-positive horizon. Errors raised
    while projecting (e.g. an unparseable month key) are logged and also
    yield [].
    """
    if not monthly or horizon <= 0:
        return []
    try:
        return _project(monthly, horizon)
    except Exception as e:
        logger.warning("Error generating forecast: %s", e)
        return []


def combine_series(monthly: list[dict[str, Any]], forecast: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """History followed by forecast points, each tagged with its `type`, for charting."""
    combined = [{**m, "type": "historical"} for m in monthly]
    combined.extend(dict(p) for p in forecast)
    return combined
