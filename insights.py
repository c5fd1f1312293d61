"""
Template-based insight strings derived from the filtered record set.
"""

from decimal import ROUND_HALF_UP, Decimal

import pandas as pd

from kpi import category_revenue, monthly_trend, normalize_records

NO_DATA_MESSAGE = "📊 No data available for the selected filters."
GROWTH_WINDOW = 3


def fixed(value: float, places: int = 0) -> str:
    """Fixed-point text with ties rounded up, applied to the exact binary value of `value`."""
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def growth_over_last_quarter(monthly_revenues: list[float]) -> float | None:
    """Percent change from the earliest to the latest of the last three months, or None."""
    if len(monthly_revenues) < GROWTH_WINDOW:
        return None
    recent = monthly_revenues[-GROWTH_WINDOW:]
    if not recent[0] > 0:
        return None
    return (recent[-1] - recent[0]) / recent[0] * 100


def _top_performer(totals: pd.Series) -> tuple[str, float] | None:
    if totals.empty:
        return None
    # idxmax picks the first encountered name among ties
    name = totals.idxmax()
    return str(name), float(totals[name])


def generate_insights(df: pd.DataFrame) -> list[str]:
    if df is None or df.empty:
        return [NO_DATA_MESSAGE]

    df = normalize_records(df)
    insights = []

    top_product = _top_performer(category_revenue(df, "product"))
    if top_product:
        name, revenue = top_product
        insights.append(f"🏆 {name} is your top-performing product with {fixed(revenue / 1000)}K in revenue.")

    top_region = _top_performer(category_revenue(df, "region"))
    if top_region:
        name, revenue = top_region
        insights.append(f"🌍 {name} leads in regional sales with {fixed(revenue / 1000)}K revenue.")

    growth = growth_over_last_quarter([m["revenue"] for m in monthly_trend(df)])
    if growth is not None:
        direction = "Positive" if growth > 0 else "Negative"
        insights.append(f"📈 {direction} growth trend of {fixed(abs(growth), 1)}% over the last quarter.")

    return insights
