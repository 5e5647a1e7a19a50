"""Sample data-service payloads shared by the test modules."""

from __future__ import annotations

# Statements arrive newest first.
INCOME_STATEMENT = [
    {
        "fiscalDateEnding": "2023-09-30",
        "reportedCurrency": "USD",
        "grossProfit": 169148000000,
        "totalRevenue": 383285000000,
        "operatingIncome": 114301000000,
        "netIncome": 96995000000,
    },
    {
        "fiscalDateEnding": "2022-09-30",
        "reportedCurrency": "USD",
        "grossProfit": 170782000000,
        "totalRevenue": 394328000000,
        "operatingIncome": 119437000000,
        "netIncome": 99803000000,
    },
    {
        "fiscalDateEnding": "2021-09-30",
        "reportedCurrency": "USD",
        "grossProfit": 152836000000,
        "totalRevenue": 365817000000,
        "operatingIncome": 108949000000,
        "netIncome": 94680000000,
    },
]

BALANCE_SHEET = [
    {"fiscalDateEnding": "2023-09-30", "totalAssets": "352583000000", "totalLiabilities": "290437000000"},
    {"fiscalDateEnding": "2022-09-30", "totalAssets": "352755000000", "totalLiabilities": "302083000000"},
]

CASH_FLOW = [
    {"fiscalDateEnding": "2023-09-30", "operatingCashflow": "110543000000", "capitalExpenditures": "10959000000"},
    {"fiscalDateEnding": "2022-09-30", "operatingCashflow": "122151000000", "capitalExpenditures": "None"},
]

# Price history arrives oldest first.
PRICES = [
    {"symbol": "AAPL", "price": 171.21, "date": "2023-10-31"},
    {"symbol": "AAPL", "price": 189.95, "date": "2023-11-30"},
    {"symbol": "AAPL", "price": 192.53, "date": "2023-12-29"},
]

OVERVIEW = {
    "symbol": "AAPL",
    "name": "Apple Inc",
    "description": "Apple Inc. designs, manufactures and markets smartphones.",
    "latestQuarter": "2023-12-30",
    "marketCapitalization": 2900000000000,
    "peRatio": 29.4,
    "dividendYield": 0.0051,
    "evToEBITDA": 22.61,
    "beta": 1.29,
    "analystTargetPrice": None,
}
