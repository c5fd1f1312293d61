"""Tests for the forecast stage."""
import copy
import logging

import pytest

from forecast import combine_series, forecast_confidence, generate_forecast
from kpi import compute_kpis


def _series(revenues, start_year=2024, start_month=1):
    out = []
    year, month = start_year, start_month
    for r in revenues:
        out.append({"month": f"{year}-{month:02d}", "revenue": r, "orders": 1})
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return out


class TestEmptyAndDegenerate:

    def test_empty_history_gives_empty_forecast(self):
        assert generate_forecast([]) == []

    def test_zero_horizon_gives_empty_forecast(self):
        assert generate_forecast(_series([100]), horizon=0) == []

    def test_malformed_month_degrades_to_empty(self, caplog):
        with caplog.at_level(logging.WARNING, logger="forecast"):
            result = generate_forecast([{"month": "someday", "revenue": 100}])
        assert result == []
        assert "Error generating forecast" in caplog.text

    def test_missing_month_key_degrades_to_empty(self):
        assert generate_forecast([{"revenue": 100}]) == []


class TestProjection:

    def test_returns_horizon_points(self):
        assert len(generate_forecast(_series([100, 200, 300]))) == 3
        assert len(generate_forecast(_series([100, 200, 300]), horizon=5)) == 5

    def test_months_roll_over_year_boundary(self):
        result = generate_forecast(_series([100, 200], start_month=10))
        assert [p["month"] for p in result] == ["2024-12", "2025-01", "2025-02"]

    def test_points_are_tagged_forecast_without_orders(self):
        for point in generate_forecast(_series([100])):
            assert point["type"] == "forecast"
            assert "orders" not in point
            assert set(point) == {"month", "revenue", "type", "confidence"}

    def test_trend_and_seasonality_applied(self):
        result = generate_forecast(_series([100000], start_month=12))
        # January has no seasonal lift; February and March do
        assert [p["revenue"] for p in result] == [103000, 116600, 127879]

    def test_base_is_mean_of_last_12_months(self):
        history = _series([10 ** 9] + [120000] * 12, start_year=2023)
        result = generate_forecast(history, horizon=1)
        assert result[0]["month"] == "2024-02"
        assert result[0]["revenue"] == 135960

    def test_fewer_than_12_months_uses_all(self):
        result = generate_forecast(_series([100000, 200000], start_month=11), horizon=1)
        assert result[0]["month"] == "2025-01"
        assert result[0]["revenue"] == 154500

    def test_missing_revenue_counts_as_zero(self):
        history = [{"month": "2024-11", "revenue": None}, {"month": "2024-12", "revenue": 200000}]
        assert generate_forecast(history, horizon=1)[0]["revenue"] == 103000

    def test_unsorted_input_is_sorted_without_mutation(self):
        history = list(reversed(_series([100, 200, 300])))
        before = copy.deepcopy(history)
        result = generate_forecast(history)
        assert result[0]["month"] == "2024-04"
        assert history == before

    def test_forecast_from_aggregated_dataset(self, sales_df):
        result = generate_forecast(compute_kpis(sales_df).monthly_trend)
        assert [p["month"] for p in result] == ["2025-01", "2025-02", "2025-03"]
        assert all(p["revenue"] > 0 for p in result)


class TestConfidence:

    def test_confidence_decays_and_floors(self):
        result = generate_forecast(_series([100]), horizon=6)
        confidences = [p["confidence"] for p in result]
        assert confidences[0] == pytest.approx(0.6)
        assert all(c == pytest.approx(0.5) for c in confidences[1:])
        assert all(a >= b for a, b in zip(confidences, confidences[1:]))
        assert all(0.5 <= c <= 0.7 for c in confidences)

    def test_confidence_helper(self):
        assert forecast_confidence(0) == pytest.approx(0.7)
        assert forecast_confidence(1) == pytest.approx(0.6)
        assert forecast_confidence(10) == 0.5


class TestCombineSeries:

    def test_history_then_forecast(self):
        history = _series([100, 200])
        forecast = generate_forecast(history, horizon=2)
        combined = combine_series(history, forecast)
        assert [c["type"] for c in combined] == ["historical", "historical", "forecast", "forecast"]
        assert [c["month"] for c in combined] == ["2024-01", "2024-02", "2024-03", "2024-04"]
        assert "type" not in history[0]
