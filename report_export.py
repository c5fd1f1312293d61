"""
JSON snapshot of the active filters and every derived dashboard output.

The document shape is flat and unversioned:
generatedAt, filters, kpis, insights, chartData, productData, regionData.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any

from filters import FilterSelection
from kpi import KPIResult

logger = logging.getLogger(__name__)

REPORT_KEYS = ("generatedAt", "filters", "kpis", "insights", "chartData", "productData", "regionData")


def iso_timestamp(moment: datetime | None = None) -> str:
    """UTC ISO-8601 with millisecond precision, e.g. 2024-05-01T09:30:00.000Z."""
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment.isoformat(timespec="milliseconds") + "Z"


def build_report(
    selection: FilterSelection,
    kpis: KPIResult,
    insights: list[str],
    generated_at: datetime | None = None,
) -> dict[str, Any]:
    return {
        "generatedAt": iso_timestamp(generated_at),
        "filters": selection.to_dict(),
        "kpis": kpis.kpi_dict(),
        "insights": list(insights),
        "chartData": [dict(m) for m in kpis.monthly_trend],
        "productData": [dict(p) for p in kpis.product_totals],
        "regionData": [dict(r) for r in kpis.region_totals],
    }


def export_report_json(
    selection: FilterSelection,
    kpis: KPIResult,
    insights: list[str],
    generated_at: datetime | None = None,
) -> str:
    payload = build_report(selection, kpis, insights, generated_at)
    return json.dumps(payload, indent=2, ensure_ascii=False)


def load_report(text: str | bytes) -> dict[str, Any]:
    payload = json.loads(text)
    missing = [k for k in REPORT_KEYS if k not in payload]
    if missing:
        raise ValueError(f"Not a sales report: missing {missing}")
    return payload


def report_filename(moment: datetime | None = None) -> str:
    stamp = iso_timestamp(moment).split("T")[0]
    return f"sales-report-{stamp}.json"


def save_report(payload: dict[str, Any], output_dir: str) -> str:
    """Write `payload` to `<output_dir>/sales-report-<date>.json` and return the path."""
    os.makedirs(output_dir, exist_ok=True)
    generated = payload.get("generatedAt")
    moment = datetime.fromisoformat(generated.replace("Z", "+00:00")) if generated else None
    path = os.path.join(output_dir, report_filename(moment))
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
    logger.info("Saved sales report to %s", path)
    return path
