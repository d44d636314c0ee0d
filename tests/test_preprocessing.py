"""
Statistics preprocessor tests
"""

from retail_insights.core.models import AnalysisRequest, DataType, FileData
from retail_insights.features.preprocessing import coerce_numeric, compute_stats, find_column, top_values


def test_empty_rowset():
    stats = compute_stats(AnalysisRequest(type=DataType.SALES_DATA, data=[]))

    assert stats.record_count == 0
    assert stats.column_names == []
    assert stats.total_sales is None
    assert stats.top_products is None


def test_total_sales_treats_non_numeric_as_zero(sales_rows):
    stats = compute_stats(AnalysisRequest(type=DataType.SALES_DATA, data=sales_rows, location="Aberdeen"))

    # "N/A", "", None and "1,099" contribute 0
    expected = 999 + 19.99 + 24.5 + 19.99 + 12 + 15
    assert stats.record_count == 10
    assert stats.sales_column == "Revenue"
    assert abs(stats.total_sales - expected) < 1e-9
    assert abs(stats.avg_sale - expected / 10) < 1e-9
    assert stats.column_names == ["Invoice #", "Product", "Revenue"]


def test_top_products_ties_keep_first_seen_order(sales_rows):
    stats = compute_stats(AnalysisRequest(type=DataType.SALES_DATA, data=sales_rows))

    assert stats.product_column == "Product"
    assert stats.top_products == [
        {"name": "USB-C Cable", "count": 3},
        {"name": "iPhone 14 Pro", "count": 2},
        {"name": "Wall Charger", "count": 2},
        {"name": "Phone Case", "count": 2},
        {"name": "Screen Protector", "count": 1},
    ]


def test_stats_for_other_single_types():
    rows = [{"SKU": "A1", "On Hand": 3, "Total Value": "30"}, {"SKU": "A1", "On Hand": 1, "Total Value": 10}]
    stats = compute_stats(AnalysisRequest(type=DataType.INVENTORY, data=rows))

    assert stats.total_sales == 40.0
    assert stats.top_products == [{"name": "A1", "count": 2}]


def test_missing_columns_omit_stats():
    stats = compute_stats(AnalysisRequest(type=DataType.INVENTORY, data=[{"On Hand": 3}]))

    assert stats.record_count == 1
    assert stats.to_dict() == {"recordCount": 1, "columnNames": ["On Hand"]}


def test_combined_stats_are_per_file():
    files = [
        FileData("sales.csv", DataType.SALES_DATA, [{"Invoice #": 1}, {"Invoice #": 2}]),
        FileData("stock.xlsx", DataType.INVENTORY, []),
    ]
    stats = compute_stats(AnalysisRequest(type=DataType.COMBINED, data=files))

    assert stats.record_count == 2
    assert stats.to_dict() == {"fileStats": [
        {"fileName": "sales.csv", "type": "sales_data", "recordCount": 2, "columnNames": ["Invoice #"]},
        {"fileName": "stock.xlsx", "type": "inventory", "recordCount": 0, "columnNames": []},
    ]}


def test_find_column_is_case_insensitive():
    assert find_column({"Date": 1, "Sales Amount": 2}, ("sales", "amount")) == "Sales Amount"
    assert find_column({"Date": 1}, ("sales",)) is None


def test_coerce_numeric():
    values = coerce_numeric([1, "2.5", "abc", None, True, float("inf"), " 3 "])
    assert list(values) == [1.0, 2.5, 0.0, 0.0, 1.0, 0.0, 3.0]


def test_top_values_limit():
    rows = [{"Item": str(i)} for i in range(8)]
    assert len(top_values(rows, "Item")) == 5
