"""
Template-based Markdown summary of a dashboard snapshot.
"""

from dashboard import DashboardSnapshot


def _k(value: float) -> str:
    return f"{value / 1000:,.0f}K"


def generate_template_report(snapshot: DashboardSnapshot) -> str:
    kpis = snapshot.kpis
    filters = snapshot.selection
    sections = []

    sections.append("## 1. Overview")
    sections.append(
        f"Filters: product {filters.product}, region {filters.region}, time range {filters.time_range}."
    )
    if snapshot.rows_used:
        sections.append(
            f"Total revenue {kpis.total_revenue:,.0f} from {kpis.total_orders:,.0f} orders "
            f"(average order value {kpis.avg_order_value:,.2f}) across {kpis.unique_regions} region(s)."
        )
    else:
        sections.append("No records match the selected filters.")
    sections.append("")

    sections.append("## 2. Trend")
    if len(kpis.monthly_trend) >= 2:
        first = kpis.monthly_trend[0]
        latest = kpis.monthly_trend[-1]
        prev = kpis.monthly_trend[-2]
        change = latest["revenue"] - prev["revenue"]
        pct = (change / prev["revenue"] * 100) if prev["revenue"] else 0
        direction = "increased" if change >= 0 else "decreased"
        sections.append(f"Covers {first['month']} to {latest['month']} ({len(kpis.monthly_trend)} months).")
        sections.append(
            f"Monthly revenue {direction} from {prev['month']} ({_k(prev['revenue'])}) to "
            f"{latest['month']} ({_k(latest['revenue'])}). Change: {pct:+.1f}%."
        )
    else:
        sections.append("Insufficient months for trend analysis.")
    sections.append("")

    sections.append("## 3. Top Drivers")
    if kpis.product_totals:
        for p in kpis.product_totals:
            sections.append(f"- {p['product']}: {_k(p['revenue'])}")
    else:
        sections.append("No product data available.")
    sections.append("")

    sections.append("## 4. Regional Breakdown")
    if kpis.region_totals and kpis.total_revenue:
        for r in kpis.region_totals:
            share = 100 * r["revenue"] / kpis.total_revenue
            sections.append(f"- {r['region']}: {_k(r['revenue'])} ({share:.1f}%)")
    else:
        sections.append("No regional data available.")
    sections.append("")

    sections.append("## 5. Forecast")
    if snapshot.forecast:
        for f in snapshot.forecast:
            sections.append(f"- {f['month']}: {_k(f['revenue'])} (confidence {f['confidence']:.0%})")
    else:
        sections.append("Forecast not requested or not available.")
    sections.append("")

    sections.append("## 6. Insights")
    for insight in snapshot.insights:
        sections.append(f"- {insight}")

    return "\n".join(sections)
