"""
Synthetic sales fact table: product x region x month rows with revenue and orders.
"""

import logging
import math

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

PRODUCTS = ("Laptops", "Smartphones", "Tablets", "Headphones", "Cameras", "Monitors")
REGIONS = ("North America", "Europe", "Asia Pacific", "Latin America", "Middle East")
BASE_YEAR = 2023
MONTHS = 24

RECORD_COLUMNS = ["month", "product", "region", "revenue", "orders", "avg_order_value", "date"]

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def round_half_up(value: float) -> int:
    """Arithmetic rounding (.5 goes up), unlike Python's bankers' round()."""
    return int(math.floor(value + 0.5))


def month_key(index: int, base_year: int = BASE_YEAR) -> str:
    year = base_year + index // 12
    return f"{year}-{index % 12 + 1:02d}"


def month_label(month: str) -> str:
    """'2023-01' -> 'Jan 2023'."""
    year, mon = month.split("-")
    return f"{_MONTH_ABBR[int(mon) - 1]} {year}"


def generate_sales_data(rng: np.random.Generator | None = None, seed: int | None = None) -> pd.DataFrame:
    """
    Build the 720-row fact table (24 months x 6 products x 5 regions).

    Pass a seeded `rng` (or `seed`) for reproducible output; otherwise every
    call draws a new dataset.
    """
    if rng is None:
        rng = np.random.default_rng(seed)

    rows = []
    for i in range(MONTHS):
        month = month_key(i)
        label = month_label(month)
        seasonality = 1 + 0.3 * math.sin(i * math.pi / 6)
        trend = 1 + i * 0.02
        for product in PRODUCTS:
            for region in REGIONS:
                base_revenue = rng.uniform(20000, 70000)
                noise = rng.uniform(0.8, 1.2)
                revenue = base_revenue * seasonality * trend * noise
                orders = int(math.floor(revenue / rng.uniform(200, 500)))
                rows.append({
                    "month": month,
                    "product": product,
                    "region": region,
                    "revenue": round_half_up(revenue),
                    "orders": orders,
                    "avg_order_value": round_half_up(revenue / orders) if orders > 0 else 0,
                    "date": label,
                })

    df = pd.DataFrame(rows, columns=RECORD_COLUMNS)
    logger.info(
        "Generated %d sales records (%s to %s)",
        len(df), df["month"].iloc[0], df["month"].iloc[-1],
    )
    return df
