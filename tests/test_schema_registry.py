"""Tests for metric schemas and the schema registry."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from dashboard.schemas.reports import MetricColumn, MetricSchema, ReportType
from dashboard.services.schema_registry import (
    CASH_FLOW_STATEMENT_SCHEMA,
    INCOME_STATEMENT_SCHEMA,
    PRICE_SCHEMA,
    SchemaRegistry,
    report_title,
    schema_registry,
)


def test_statement_schemas_start_with_fiscal_period():
    for report_type in ("incomeStatement", "balanceSheet", "cashFlowStatement"):
        schema = schema_registry.get(report_type)
        assert schema.period_key == "fiscalDateEnding"
        assert schema.columns[0].label == "Fiscal Year End Date"
        assert "fiscalDateEnding" not in schema.selectable_keys


def test_price_schema():
    assert PRICE_SCHEMA.keys == ["date", "price"]
    assert PRICE_SCHEMA.default_metric == "price"
    assert schema_registry.get(ReportType.STOCKS) is PRICE_SCHEMA


def test_income_statement_metrics_present():
    assert INCOME_STATEMENT_SCHEMA.has_key("grossProfit")
    assert INCOME_STATEMENT_SCHEMA.has_key("netIncome")
    assert INCOME_STATEMENT_SCHEMA.default_metric == "grossProfit"


def test_unknown_report_type_yields_empty_schema():
    """Lookups for unregistered tags never raise."""
    schema = schema_registry.get("earnings")
    assert schema.report_type == "earnings"
    assert len(schema) == 0
    assert schema.period_key is None
    assert schema.default_metric is None


def test_label_for_falls_back_to_raw_key():
    assert schema_registry.label_for("incomeStatement", "netIncome") == "Net Income"
    assert schema_registry.label_for("incomeStatement", "madeUpKey") == "madeUpKey"
    assert CASH_FLOW_STATEMENT_SCHEMA.label_for("netIncome") == "Net Income"


def test_keys_unique_within_each_schema():
    for report_type in schema_registry.report_types():
        keys = schema_registry.get(report_type).keys
        assert len(keys) == len(set(keys)), report_type


def test_duplicate_keys_rejected():
    with pytest.raises(ValidationError, match="duplicate metric keys"):
        MetricSchema(
            report_type="custom",
            columns=(
                MetricColumn(key="period", label="Period"),
                MetricColumn(key="revenue", label="Revenue"),
                MetricColumn(key="revenue", label="Revenue again"),
            ),
        )


def test_custom_registry_membership():
    custom = MetricSchema(report_type="earnings", columns=(MetricColumn(key="quarter", label="Quarter"),))
    registry = SchemaRegistry([custom])
    assert "earnings" in registry
    assert "incomeStatement" not in registry
    assert registry.get("earnings") is custom
    assert registry.report_types() == ["earnings"]


@pytest.mark.parametrize(
    "report_type, expected",
    [
        ("incomeStatement", "Annual Income Statement"),
        (ReportType.BALANCE_SHEET, "Annual Balance Sheet"),
        ("cashFlowStatement", "Annual Cash Flow Statement"),
        ("stocks", "Stocks"),
        ("overview", "Overview"),
    ],
)
def test_report_title(report_type, expected):
    assert report_title(report_type) == expected
