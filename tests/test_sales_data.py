"""Tests for the synthetic record generator."""
import numpy as np
import pandas as pd

from sales_data import (
    MONTHS,
    PRODUCTS,
    RECORD_COLUMNS,
    REGIONS,
    generate_sales_data,
    month_key,
    month_label,
    round_half_up,
)


class TestGenerateSalesData:

    def test_produces_720_records(self, sales_df):
        assert len(sales_df) == 24 * 6 * 5 == 720
        assert list(sales_df.columns) == RECORD_COLUMNS

    def test_covers_fixed_24_month_span(self, sales_df):
        expected = [f"2023-{m:02d}" for m in range(1, 13)] + [f"2024-{m:02d}" for m in range(1, 13)]
        assert sorted(sales_df["month"].unique()) == expected

    def test_every_cell_appears_once(self, sales_df):
        cells = sales_df.groupby(["month", "product", "region"]).size()
        assert len(cells) == MONTHS * len(PRODUCTS) * len(REGIONS)
        assert (cells == 1).all()

    def test_orders_positive_whenever_revenue_positive(self, sales_df):
        with_revenue = sales_df[sales_df["revenue"] > 0]
        assert (with_revenue["orders"] > 0).all()

    def test_revenue_within_generated_bounds(self, sales_df):
        # lowest: 20000 * 0.7 * 1.0 * 0.8, highest: 70000 * 1.3 * 1.46 * 1.2
        assert sales_df["revenue"].min() >= 11200
        assert sales_df["revenue"].max() <= 159432

    def test_average_order_value_matches_revenue_over_orders(self, sales_df):
        ratio = sales_df["revenue"] / sales_df["orders"]
        assert ((sales_df["avg_order_value"] - ratio).abs() <= 1).all()

    def test_date_label(self, sales_df):
        first = sales_df.iloc[0]
        assert first["month"] == "2023-01"
        assert first["date"] == "Jan 2023"

    def test_same_seed_same_dataset(self):
        a = generate_sales_data(rng=np.random.default_rng(7))
        b = generate_sales_data(seed=7)
        pd.testing.assert_frame_equal(a, b)

    def test_different_seeds_give_different_universes(self):
        a = generate_sales_data(seed=1)
        b = generate_sales_data(seed=2)
        assert not a["revenue"].equals(b["revenue"])
        assert a["month"].equals(b["month"])


class TestHelpers:

    def test_month_key_rolls_into_next_year(self):
        assert month_key(0) == "2023-01"
        assert month_key(11) == "2023-12"
        assert month_key(12) == "2024-01"
        assert month_key(23) == "2024-12"

    def test_month_label(self):
        assert month_label("2024-12") == "Dec 2024"

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.4999) == 2
        assert round_half_up(0) == 0
