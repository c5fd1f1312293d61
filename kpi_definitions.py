"""
KPI Definitions — source columns, formula, and the question each output answers.

Each entry has:
- required_columns: record columns needed for computation
- formula: short text describing the computation
- business_question: what the dashboard viewer learns from it
- output_type: scalar | series | table | text

Everything is recomputed from the filtered records on each filter change.
"""

KPI_DEFINITIONS = {
    "total_revenue": {
        "name": "total_revenue",
        "export_key": "totalRevenue",
        "required_columns": ["revenue"],
        "formula": "sum(revenue), missing values count as 0",
        "business_question": "How much revenue does the current selection represent?",
        "output_type": "scalar",
    },
    "total_orders": {
        "name": "total_orders",
        "export_key": "totalOrders",
        "required_columns": ["orders"],
        "formula": "sum(orders), missing values count as 0",
        "business_question": "How many orders were placed?",
        "output_type": "scalar",
    },
    "avg_order_value": {
        "name": "avg_order_value",
        "export_key": "avgOrderValue",
        "required_columns": ["revenue", "orders"],
        "formula": "total_revenue / total_orders, or 0 when there are no orders",
        "business_question": "What is a typical order worth?",
        "output_type": "scalar",
    },
    "unique_regions": {
        "name": "unique_regions",
        "export_key": "uniqueRegions",
        "required_columns": ["region"],
        "formula": "nunique(region), blanks excluded",
        "business_question": "How many regions are active in the selection?",
        "output_type": "scalar",
    },
    "monthly_trend": {
        "name": "monthly_trend",
        "export_key": "chartData",
        "required_columns": ["month", "revenue", "orders"],
        "formula": "groupby(month).sum(revenue, orders), ascending by month",
        "business_question": "How does revenue evolve over time?",
        "output_type": "series",
    },
    "product_totals": {
        "name": "product_totals",
        "export_key": "productData",
        "required_columns": ["product", "revenue"],
        "formula": "round(groupby(product).sum(revenue)), descending",
        "business_question": "Which products drive the most revenue?",
        "output_type": "table",
    },
    "region_totals": {
        "name": "region_totals",
        "export_key": "regionData",
        "required_columns": ["region", "revenue"],
        "formula": "round(groupby(region).sum(revenue))",
        "business_question": "How is revenue distributed geographically?",
        "output_type": "table",
    },
    "forecast": {
        "name": "forecast",
        "export_key": None,
        "required_columns": ["month", "revenue"],
        "formula": "mean(last 12 months) * (1 + 0.03*i) * (1 + 0.2*sin(month_index*pi/6)); "
                   "confidence = max(0.7 - 0.1*i, 0.5)",
        "business_question": "Where is revenue heading over the next few months?",
        "output_type": "series",
    },
    "insights": {
        "name": "insights",
        "export_key": "insights",
        "required_columns": ["month", "product", "region", "revenue"],
        "formula": "top product, top region, 100 * (m[-1] - m[-3]) / m[-3] over the last three months",
        "business_question": "What stands out in the current selection?",
        "output_type": "text",
    },
}


def get_kpi_definitions() -> dict[str, dict]:
    return KPI_DEFINITIONS


def get_all_required_columns() -> list[str]:
    """Union of all required columns across KPIs. normalize_records() checks incoming records against it."""
    seen: set[str] = set()
    for defn in KPI_DEFINITIONS.values():
        for col in defn["required_columns"]:
            seen.add(col)
    return sorted(seen)
