"""
Shared fixtures for the dashboard test suite.

The generator is always seeded and the time-window filter always receives an
explicit `today`, so results do not depend on when the suite runs.
"""

from datetime import date

import numpy as np
import pandas as pd
import pytest

from sales_data import generate_sales_data


@pytest.fixture
def sales_df():
    """Full 720-row synthetic dataset from a fixed seed."""
    return generate_sales_data(rng=np.random.default_rng(42))


@pytest.fixture
def today():
    """A 'current date' in the last month of the synthetic data."""
    return date(2024, 12, 15)


@pytest.fixture
def quarter_df():
    """Three months of a single product/region: 100K, 120K, 90K (oldest first)."""
    return pd.DataFrame([
        {"month": "2024-01", "product": "Laptops", "region": "Europe", "revenue": 100000, "orders": 400},
        {"month": "2024-02", "product": "Laptops", "region": "Europe", "revenue": 120000, "orders": 480},
        {"month": "2024-03", "product": "Laptops", "region": "Europe", "revenue": 90000, "orders": 300},
    ])


@pytest.fixture
def messy_df():
    """Records with missing numbers, blank categories and a missing month."""
    return pd.DataFrame([
        {"month": "2024-02", "product": "A", "region": "X", "revenue": 100, "orders": 2},
        {"month": "2024-01", "product": "B", "region": "Y", "revenue": 300, "orders": 3},
        {"month": "2024-02", "product": "B", "region": "X", "revenue": None, "orders": 1},
        {"month": None, "product": None, "region": "", "revenue": 50, "orders": None},
    ])
