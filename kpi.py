import logging

import pandas as pd
from typing import Any
from dataclasses import dataclass, field

from kpi_definitions import get_all_required_columns
from sales_data import round_half_up

logger = logging.getLogger(__name__)

NUMERIC_COLUMNS = ("revenue", "orders")
CATEGORY_COLUMNS = ("month", "product", "region")


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip() for c in df.columns]
    col_map = {
        "Month": "month",
        "Product": "product",
        "Region": "region",
        "Revenue": "revenue",
        "Orders": "orders",
        "avgOrderValue": "avg_order_value",
        "averageOrderValue": "avg_order_value",
    }
    for old, new in col_map.items():
        if old in df.columns and new not in df.columns:
            df = df.rename(columns={old: new})
    return df


def normalize_records(df: pd.DataFrame) -> pd.DataFrame:
    """
    Copy of `df` safe to aggregate: missing revenue/orders count as zero,
    missing or blank month/product/region become None so reductions skip them.
    """
    df = _normalize_columns(df)
    missing = [c for c in get_all_required_columns() if c not in df.columns]
    if missing and not df.empty:
        logger.warning("Records are missing columns %s; treating them as empty", missing)
    for col in NUMERIC_COLUMNS:
        if col not in df.columns:
            df[col] = 0
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0)
    for col in CATEGORY_COLUMNS:
        if col not in df.columns:
            df[col] = None
        values = df[col].astype(object)
        blank = values.isna() | values.astype(str).str.strip().eq("")
        df[col] = values.where(~blank, None)
    return df


def _plain(value: Any) -> int | float:
    """numpy scalar -> JSON-friendly int/float (int when integral)."""
    value = float(value)
    return int(value) if value.is_integer() else value


@dataclass
class KPIResult:
    total_revenue: int | float = 0
    total_orders: int | float = 0
    avg_order_value: int | float = 0
    unique_regions: int = 0
    monthly_trend: list[dict[str, Any]] = field(default_factory=list)
    product_totals: list[dict[str, Any]] = field(default_factory=list)
    region_totals: list[dict[str, Any]] = field(default_factory=list)

    def kpi_dict(self) -> dict[str, Any]:
        return {
            "totalRevenue": self.total_revenue,
            "totalOrders": self.total_orders,
            "avgOrderValue": self.avg_order_value,
            "uniqueRegions": self.unique_regions,
        }


def category_revenue(df: pd.DataFrame, col: str) -> pd.Series:
    """Unrounded revenue per category value, in first-encounter order. Expects normalized input."""
    rows = df[df[col].notna()]
    if rows.empty:
        return pd.Series(dtype=float)
    return rows.groupby(col, sort=False)["revenue"].sum()


def monthly_trend(df: pd.DataFrame) -> list[dict[str, Any]]:
    rows = df[df["month"].notna()]
    if rows.empty:
        return []
    monthly = rows.groupby("month", sort=True)[["revenue", "orders"]].sum().reset_index()
    trend = [
        {"month": str(row["month"]), "revenue": _plain(row["revenue"]), "orders": _plain(row["orders"])}
        for _, row in monthly.iterrows()
    ]
    trend.sort(key=lambda x: x["month"])
    return trend


def product_totals(df: pd.DataFrame) -> list[dict[str, Any]]:
    totals = [
        {"product": str(p), "revenue": round_half_up(s)}
        for p, s in category_revenue(df, "product").items()
    ]
    # list.sort is stable, so tied products keep encounter order
    totals.sort(key=lambda x: x["revenue"], reverse=True)
    return totals


def region_totals(df: pd.DataFrame) -> list[dict[str, Any]]:
    return [
        {"region": str(r), "revenue": round_half_up(s)}
        for r, s in category_revenue(df, "region").items()
    ]


def compute_kpis(df: pd.DataFrame) -> KPIResult:
    df = normalize_records(df)
    if df.empty:
        return KPIResult()

    total_revenue = df["revenue"].sum()
    total_orders = df["orders"].sum()
    avg_order_value = total_revenue / total_orders if total_orders > 0 else 0
    unique_regions = int(df["region"].dropna().nunique())

    return KPIResult(
        total_revenue=_plain(total_revenue),
        total_orders=_plain(total_orders),
        avg_order_value=_plain(avg_order_value),
        unique_regions=unique_regions,
        monthly_trend=monthly_trend(df),
        product_totals=product_totals(df),
        region_totals=region_totals(df),
    )
