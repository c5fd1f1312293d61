"""Tests for the Markdown summary report and the KPI definitions it relies on."""
from datetime import date

from dashboard import build_snapshot
from filters import FilterSelection
from kpi import KPIResult
from kpi_definitions import KPI_DEFINITIONS, get_all_required_columns
from sales_data import RECORD_COLUMNS
from template_report import generate_template_report


class TestTemplateReport:

    def test_all_sections_present(self, sales_df, today):
        snapshot = build_snapshot(sales_df, FilterSelection(region="Europe"), show_forecast=True, today=today)
        report = generate_template_report(snapshot)
        for heading in ("## 1. Overview", "## 2. Trend", "## 3. Top Drivers",
                        "## 4. Regional Breakdown", "## 5. Forecast", "## 6. Insights"):
            assert heading in report
        assert "region Europe" in report
        assert "Covers 2023-01 to 2024-12 (24 months)." in report
        assert "- Europe:" in report and "(100.0%)" in report
        assert "confidence 60%" in report
        for insight in snapshot.insights:
            assert f"- {insight}" in report

    def test_empty_snapshot_explains_missing_data(self, sales_df):
        snapshot = build_snapshot(sales_df, FilterSelection(time_range="Last 6 Months"), today=date(2026, 10, 19))
        report = generate_template_report(snapshot)
        assert "No records match the selected filters." in report
        assert "Insufficient months for trend analysis." in report
        assert "No product data available." in report
        assert "No regional data available." in report
        assert "Forecast not requested or not available." in report


class TestKpiDefinitions:

    def test_every_exported_kpi_is_defined(self):
        export_keys = {d["export_key"] for d in KPI_DEFINITIONS.values()}
        assert set(KPIResult().kpi_dict()) <= export_keys
        assert {"chartData", "productData", "regionData", "insights"} <= export_keys

    def test_required_columns_exist_on_records(self):
        assert set(get_all_required_columns()) <= set(RECORD_COLUMNS)
