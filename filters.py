"""
Filter stage: narrows the fact table by product, region and relative time window.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

ALL = "All"
TIME_RANGES = {
    "Last 6 Months": 6,
    "Last 12 Months": 12,
}
TIME_RANGE_OPTIONS = [ALL, *TIME_RANGES]


@dataclass(frozen=True)
class FilterSelection:
    """Snapshot of the user's filter choices. Owned by the UI, read-only here."""
    product: str = ALL
    region: str = ALL
    time_range: str = ALL

    def to_dict(self) -> dict[str, Any]:
        return {"product": self.product, "region": self.region, "timeRange": self.time_range}

    def is_identity(self) -> bool:
        return self.product == ALL and self.region == ALL and self.time_range == ALL


def parse_months(months: pd.Series) -> pd.Series:
    """Parse 'YYYY-MM' strings to month-start timestamps; malformed values become NaT."""
    return pd.to_datetime(months.astype("string"), format="%Y-%m", errors="coerce")


def lookback_months(time_range: str) -> int:
    try:
        return TIME_RANGES[time_range]
    except KeyError:
        raise ValueError(f"Unknown time range: {time_range!r}. Expected one of {TIME_RANGE_OPTIONS}") from None


def time_window_cutoff(time_range: str, anchor: date | pd.Timestamp) -> pd.Timestamp | None:
    """First day of the month N calendar months before `anchor`'s month (None for 'All')."""
    if time_range == ALL:
        return None
    return _month_start_before(anchor, lookback_months(time_range))


def _month_start_before(anchor: date | pd.Timestamp, months_back: int) -> pd.Timestamp:
    return (pd.Period(pd.Timestamp(anchor), freq="M") - months_back).to_timestamp()


def apply_time_filter(
    df: pd.DataFrame,
    time_range: str,
    today: date | None = None,
    anchor: str = "today",
) -> pd.DataFrame:
    """
    Keep rows whose month is on or after the window cutoff.

    anchor="today" measures the window from the real-world date (or `today`);
    anchor="latest" measures it from the latest month present in `df`.
    Rows with a missing or malformed month are dropped.
    """
    if time_range == ALL:
        return df
    months_back = lookback_months(time_range)
    if "month" not in df.columns:
        return df.iloc[0:0]

    months = parse_months(df["month"])
    if anchor == "latest":
        if months.isna().all():
            return df.iloc[0:0]
        reference = months.max()
    else:
        reference = today or date.today()

    cutoff = _month_start_before(reference, months_back)
    mask = months.notna() & (months >= cutoff)
    return df.loc[mask]


def apply_filters(
    df: pd.DataFrame,
    selection: FilterSelection,
    today: date | None = None,
    anchor: str = "today",
) -> pd.DataFrame:
    """AND of product, region and time-window predicates. Input order is preserved."""
    if selection.is_identity():
        return df.copy()

    filtered = df
    if selection.product != ALL:
        col = filtered["product"] if "product" in filtered.columns else pd.Series(index=filtered.index, dtype=object)
        filtered = filtered[col == selection.product]
    if selection.region != ALL:
        col = filtered["region"] if "region" in filtered.columns else pd.Series(index=filtered.index, dtype=object)
        filtered = filtered[col == selection.region]
    filtered = apply_time_filter(filtered, selection.time_range, today=today, anchor=anchor)

    logger.debug("Filter %s kept %d of %d rows", selection.to_dict(), len(filtered), len(df))
    return filtered.copy()
