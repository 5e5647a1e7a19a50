"""Metric schemas per report type.

Every table and chart is driven by these column lists; views never carry
their own header arrays.  Keys follow the field names the data service
passes through from Alpha Vantage.
"""

from __future__ import annotations

import re

from dashboard.schemas.reports import STATEMENT_TYPES, MetricColumn, MetricSchema, ReportType, report_tag


def _schema(report_type: ReportType, columns: list[tuple[str, str]]) -> MetricSchema:
    return MetricSchema(
        report_type=report_type.value,
        columns=tuple(MetricColumn(key=key, label=label) for key, label in columns),
    )


PRICE_SCHEMA = _schema(
    ReportType.STOCKS,
    [
        ("date", "Date"),
        ("price", "Price (USD)"),
    ],
)

INCOME_STATEMENT_SCHEMA = _schema(
    ReportType.INCOME_STATEMENT,
    [
        ("fiscalDateEnding", "Fiscal Year End Date"),
        ("grossProfit", "Gross Profit"),
        ("totalRevenue", "Total Revenue"),
        ("costOfRevenue", "Cost of Revenue"),
        ("costofGoodsAndServicesSold", "Cost of Goods and Services Sold"),
        ("operatingIncome", "Operating Income"),
        ("sellingGeneralAndAdministrative", "Selling, General and Administrative"),
        ("researchAndDevelopment", "Research and Development"),
        ("operatingExpenses", "Operating Expenses"),
        ("investmentIncomeNet", "Investment Income Net"),
        ("netInterestIncome", "Net Interest Income"),
        ("interestIncome", "Interest Income"),
        ("interestExpense", "Interest Expense"),
        ("nonInterestIncome", "Non-Interest Income"),
        ("otherNonOperatingIncome", "Other Non-Operating Income"),
        ("depreciation", "Depreciation"),
        ("depreciationAndAmortization", "Depreciation and Amortization"),
        ("incomeBeforeTax", "Income Before Tax"),
        ("incomeTaxExpense", "Income Tax Expense"),
        ("interestAndDebtExpense", "Interest and Debt Expense"),
        ("netIncomeFromContinuingOperations", "Net Income From Continuing Operations"),
        ("comprehensiveIncomeNetOfTax", "Comprehensive Income Net of Tax"),
        ("ebit", "EBIT"),
        ("ebitda", "EBITDA"),
        ("netIncome", "Net Income"),
    ],
)

BALANCE_SHEET_SCHEMA = _schema(
    ReportType.BALANCE_SHEET,
    [
        ("fiscalDateEnding", "Fiscal Year End Date"),
        ("totalAssets", "Total Assets"),
        ("totalCurrentAssets", "Total Current Assets"),
        ("cashAndCashEquivalentsAtCarryingValue", "Cash and Cash Equivalents"),
        ("cashAndShortTermInvestments", "Cash and Short-Term Investments"),
        ("inventory", "Inventory"),
        ("currentNetReceivables", "Current Net Receivables"),
        ("totalNonCurrentAssets", "Total Non-Current Assets"),
        ("propertyPlantEquipment", "Property, Plant and Equipment"),
        ("intangibleAssets", "Intangible Assets"),
        ("goodwill", "Goodwill"),
        ("longTermInvestments", "Long-Term Investments"),
        ("shortTermInvestments", "Short-Term Investments"),
        ("otherCurrentAssets", "Other Current Assets"),
        ("totalLiabilities", "Total Liabilities"),
        ("totalCurrentLiabilities", "Total Current Liabilities"),
        ("currentAccountsPayable", "Current Accounts Payable"),
        ("deferredRevenue", "Deferred Revenue"),
        ("currentDebt", "Current Debt"),
        ("shortTermDebt", "Short-Term Debt"),
        ("totalNonCurrentLiabilities", "Total Non-Current Liabilities"),
        ("longTermDebt", "Long-Term Debt"),
        ("shortLongTermDebtTotal", "Short and Long-Term Debt Total"),
        ("otherCurrentLiabilities", "Other Current Liabilities"),
        ("totalShareholderEquity", "Total Shareholder Equity"),
        ("treasuryStock", "Treasury Stock"),
        ("retainedEarnings", "Retained Earnings"),
        ("commonStock", "Common Stock"),
        ("commonStockSharesOutstanding", "Common Stock Shares Outstanding"),
    ],
)

CASH_FLOW_STATEMENT_SCHEMA = _schema(
    ReportType.CASH_FLOW_STATEMENT,
    [
        ("fiscalDateEnding", "Fiscal Year End Date"),
        ("operatingCashflow", "Operating Cash Flow"),
        ("paymentsForOperatingActivities", "Payments for Operating Activities"),
        ("proceedsFromOperatingActivities", "Proceeds from Operating Activities"),
        ("changeInOperatingLiabilities", "Change in Operating Liabilities"),
        ("changeInOperatingAssets", "Change in Operating Assets"),
        ("depreciationDepletionAndAmortization", "Depreciation, Depletion and Amortization"),
        ("capitalExpenditures", "Capital Expenditures"),
        ("changeInReceivables", "Change in Receivables"),
        ("changeInInventory", "Change in Inventory"),
        ("profitLoss", "Profit (Loss)"),
        ("cashflowFromInvestment", "Cash Flow from Investment"),
        ("cashflowFromFinancing", "Cash Flow from Financing"),
        ("proceedsFromRepaymentsOfShortTermDebt", "Proceeds from Repayments of Short-Term Debt"),
        ("paymentsForRepurchaseOfCommonStock", "Payments for Repurchase of Common Stock"),
        ("paymentsForRepurchaseOfEquity", "Payments for Repurchase of Equity"),
        ("paymentsForRepurchaseOfPreferredStock", "Payments for Repurchase of Preferred Stock"),
        ("dividendPayout", "Dividend Payout"),
        ("dividendPayoutCommonStock", "Dividend Payout (Common Stock)"),
        ("dividendPayoutPreferredStock", "Dividend Payout (Preferred Stock)"),
        ("proceedsFromIssuanceOfCommonStock", "Proceeds from Issuance of Common Stock"),
        (
            "proceedsFromIssuanceOfLongTermDebtAndCapitalSecuritiesNet",
            "Proceeds from Issuance of Long-Term Debt and Capital Securities",
        ),
        ("proceedsFromIssuanceOfPreferredStock", "Proceeds from Issuance of Preferred Stock"),
        ("proceedsFromRepurchaseOfEquity", "Proceeds from Repurchase of Equity"),
        ("proceedsFromSaleOfTreasuryStock", "Proceeds from Sale of Treasury Stock"),
        ("changeInCashAndCashEquivalents", "Change in Cash and Cash Equivalents"),
        ("changeInExchangeRate", "Change in Exchange Rate"),
        ("netIncome", "Net Income"),
    ],
)


class SchemaRegistry:
    """Lookup of metric schemas by report-type tag.

    Pure and synchronous.  Unknown tags resolve to an empty schema and
    unknown keys to their raw name, so lookups never raise.
    """

    def __init__(self, schemas: list[MetricSchema] | None = None) -> None:
        self._schemas: dict[str, MetricSchema] = {}
        for schema in schemas or []:
            self._schemas[schema.report_type] = schema

    def get(self, report_type: str) -> MetricSchema:
        tag = report_tag(report_type)
        schema = self._schemas.get(tag)
        if schema is None:
            return MetricSchema(report_type=tag)
        return schema

    def label_for(self, report_type: str, key: str) -> str:
        return self.get(report_type).label_for(key)

    def report_types(self) -> list[str]:
        return list(self._schemas)

    def __contains__(self, report_type: object) -> bool:
        return isinstance(report_type, str) and report_tag(report_type) in self._schemas


_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_STATEMENT_TAGS = frozenset(rt.value for rt in STATEMENT_TYPES)


def report_title(report_type: str) -> str:
    """Section heading, e.g. ``"Annual Income Statement"`` or ``"Stocks"``."""
    tag = report_tag(report_type)
    words = _CAMEL_BOUNDARY.sub(r"\1 \2", tag)
    title = " ".join(word.capitalize() for word in words.split())
    if tag in _STATEMENT_TAGS:
        return f"Annual {title}"
    return title


# Module-level singleton used by the projectors and the dashboard session.
schema_registry = SchemaRegistry(
    [
        PRICE_SCHEMA,
        INCOME_STATEMENT_SCHEMA,
        BALANCE_SHEET_SCHEMA,
        CASH_FLOW_STATEMENT_SCHEMA,
    ]
)
