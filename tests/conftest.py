"""Shared fixtures: small results covering the shapes the renderers handle."""

from __future__ import annotations

import pytest

from analytics_frontend.core.config import Settings
from analytics_frontend.core.enums import Aggregation
from analytics_frontend.result.model import (
    DimensionField,
    MeasureField,
    Month,
    Result,
    Unit,
)

USD = Unit(label="USD", signature="currency:USD")


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def monthly_result() -> Result:
    """One sequential dimension, two measures sharing a unit."""
    return Result.from_records(
        dimensions=[DimensionField("month", "Month")],
        measures=[
            MeasureField("revenue", "Revenue", USD),
            MeasureField("cost", "Cost", USD),
        ],
        records=[
            {"month": Month(2024, 1), "revenue": 100, "cost": 60},
            {"month": Month(2024, 2), "revenue": 120, "cost": 70},
            {"month": Month(2024, 3), "revenue": 90, "cost": None},
        ],
    )


@pytest.fixture
def country_result() -> Result:
    """One categorical dimension, one unitless measure."""
    return Result.from_records(
        dimensions=[DimensionField("country", "Country")],
        measures=[MeasureField("count", "Count")],
        records=[
            {"country": "ID", "count": 12},
            {"country": "MY", "count": 7},
            {"country": "SG", "count": 3},
        ],
    )


@pytest.fixture
def two_dim_result() -> Result:
    """Country by month; MY has no February row."""
    return Result.from_records(
        dimensions=[
            DimensionField("country", "Country"),
            DimensionField("month", "Month"),
        ],
        measures=[MeasureField("revenue", "Revenue", USD)],
        records=[
            {"country": "ID", "month": Month(2024, 1), "revenue": 10},
            {"country": "ID", "month": Month(2024, 2), "revenue": 20},
            {"country": "MY", "month": Month(2024, 1), "revenue": 5},
        ],
    )


@pytest.fixture
def unordered_result() -> Result:
    """Rows not grouped by their first dimension, so no tree can be built."""
    return Result.from_records(
        dimensions=[DimensionField("country", "Country")],
        measures=[MeasureField("count", "Count")],
        records=[
            {"country": "ID", "count": 1},
            {"country": "MY", "count": 2},
            {"country": "ID", "count": 3},
        ],
    )


@pytest.fixture
def empty_result() -> Result:
    return Result(
        dimensions=[DimensionField("country", "Country")],
        measures=[MeasureField("count", "Count")],
        rows=[],
    )


@pytest.fixture
def product_result() -> Result:
    """Products ranked by revenue within each country; only revenue is summable."""
    return Result.from_records(
        dimensions=[
            DimensionField("country", "Country"),
            DimensionField("product", "Product"),
        ],
        measures=[
            MeasureField("revenue", "Revenue", USD, aggregation=Aggregation.SUM),
            MeasureField("orders", "Orders"),
        ],
        records=[
            {"country": "ID", "product": "b", "revenue": 9, "orders": 3},
            {"country": "ID", "product": "a", "revenue": 5, "orders": 2},
            {"country": "MY", "product": "a", "revenue": 8, "orders": 4},
            {"country": "MY", "product": "b", "revenue": 1, "orders": 1},
        ],
    )
