import json

from sales_performance.metrics.calculations import SalesReport, analyze_sales_data, default_options
from sales_performance.reporting.formatter import format_text_report, report_to_dict, rows_to_dicts


def _report(dataset):
    return SalesReport(source_name="unit", rows=analyze_sales_data(dataset, default_options()))


def test_report_to_dict_is_json_serialisable(sample_dataset):
    payload = report_to_dict(_report(sample_dataset))

    assert payload["source"] == "unit"
    assert payload["seller_count"] == 4
    assert payload["totals"] == {"revenue": 235.0, "profit": 125.0, "bonus": 16.0, "sales_count": 4}
    assert [seller["seller_id"] for seller in payload["sellers"]] == ["seller_2", "seller_1", "seller_3", "seller_4"]
    assert json.loads(json.dumps(payload)) == payload


def test_rows_to_dicts_keeps_rank_order(sample_dataset):
    rows = analyze_sales_data(sample_dataset, default_options())

    dicts = rows_to_dicts(rows)

    assert [entry["seller_id"] for entry in dicts] == [row.seller_id for row in rows]
    assert dicts[1]["top_products"] == [{"sku": "SKU_002", "quantity": 4}, {"sku": "SKU_001", "quantity": 3}]


def test_text_report_lists_sellers_by_profit(sample_dataset):
    text = format_text_report(_report(sample_dataset))
    lines = text.splitlines()

    assert lines[0] == "Source: unit"
    assert lines[1].startswith("Totals: Revenue 235.00, Profit 125.00, Bonus 16.00")
    assert lines[2] == "Sellers (by profit):"
    assert lines[3].startswith("1. Maria Ivanova (seller_2) - Revenue 60.00, Profit 70.00")
    assert "Top SKUs SKU_002 x4, SKU_001 x3" in lines[4]
    assert lines[6].endswith("Top SKUs n/a")


def test_text_report_without_rows():
    text = format_text_report(SalesReport(source_name="empty", rows=[]))

    assert text.splitlines()[-1] == "No seller records available."
