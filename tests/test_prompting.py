"""
Prompt builder tests
"""

from retail_insights.core.models import AnalysisRequest, DataType, FileData
from retail_insights.core.prompts import SECTION_HEADINGS
from retail_insights.features.preprocessing import compute_stats
from retail_insights.features.prompting import PromptBuilder, build_prompt, serialize_rows


def _rows(count):
    return [{"Invoice #": f"INV-{i:04d}", "Product": "USB-C Cable", "Revenue": i} for i in range(1, count + 1)]


def test_sample_is_capped_at_ten_records():
    rows = _rows(25)
    request = AnalysisRequest(type=DataType.SALES_DATA, data=rows, location="Aberdeen")
    prompt = build_prompt(request, compute_stats(request))

    assert serialize_rows(rows[:10]) in prompt
    assert "INV-0010" in prompt
    assert "INV-0011" not in prompt
    assert "Total records: 25" in prompt


def test_small_inputs_are_embedded_whole():
    rows = _rows(3)
    prompt = build_prompt(AnalysisRequest(type=DataType.INVENTORY, data=rows))

    assert serialize_rows(rows) in prompt
    assert "Total records: 3" in prompt


def test_location_is_optional():
    rows = _rows(2)
    with_location = build_prompt(AnalysisRequest(type=DataType.SALES_DATA, data=rows, location="Aberdeen"))
    without_location = build_prompt(AnalysisRequest(type=DataType.SALES_DATA, data=rows))
    blank_location = build_prompt(AnalysisRequest(type=DataType.SALES_DATA, data=rows, location="  "))

    assert "mobile retail store in Aberdeen." in with_location
    assert "mobile retail store." in without_location
    assert "None" not in without_location
    assert blank_location == without_location


def test_every_template_requests_the_shared_headings():
    rows = _rows(2)
    for data_type in (DataType.PURCHASE_ORDERS, DataType.SALES_DATA, DataType.INVENTORY, DataType.UNKNOWN):
        prompt = build_prompt(AnalysisRequest(type=data_type, data=rows))
        positions = [prompt.upper().find(heading.title.upper()) for heading in SECTION_HEADINGS]
        assert all(position >= 0 for position in positions), data_type
        assert positions == sorted(positions), data_type


def test_purchase_order_template_uses_numbered_upper_headings():
    prompt = build_prompt(AnalysisRequest(type=DataType.PURCHASE_ORDERS, data=_rows(1)))

    assert "1. KEY INSIGHTS:" in prompt
    assert "7. SALES FORECASTS:" in prompt
    assert "senior supply chain expert" in prompt


def test_stats_block_is_rendered():
    rows = _rows(4)
    request = AnalysisRequest(type=DataType.SALES_DATA, data=rows)
    prompt = build_prompt(request, compute_stats(request))

    assert "Pre-computed statistics" in prompt
    assert "Total Revenue: 10.00" in prompt
    assert "USB-C Cable (4)" in prompt


def test_combined_prompt_samples_per_file():
    files = [
        FileData("sales_oct.xlsx", DataType.SALES_DATA, _rows(6)),
        FileData("sales_nov.xlsx", DataType.SALES_DATA, _rows(4)),
        FileData("stock.csv", DataType.INVENTORY, [{"SKU": f"SKU-{i}", "On Hand": i} for i in range(5)]),
    ]
    request = AnalysisRequest(type=DataType.COMBINED, data=files, location="Aberdeen")
    prompt = build_prompt(request, compute_stats(request))

    assert "--- SALES_DATA DATA (sales_oct.xlsx) ---" in prompt
    assert "--- INVENTORY DATA (stock.csv) ---" in prompt
    assert "2 sales files, 1 inventory file" in prompt
    assert "SKU-1" in prompt
    assert "SKU-2" not in prompt
    assert "INV-0003" not in prompt
    assert "Total files: 3" in prompt
    assert "Total records across all files: 15" in prompt
    assert "<p>, <ul>, <li>" in prompt
    assert "in Aberdeen" in prompt


def test_combined_sample_size_is_configurable():
    files = [FileData("stock.csv", DataType.INVENTORY, [{"SKU": f"SKU-{i}"} for i in range(5)])]
    prompt = PromptBuilder(combined_sample_rows=3).build_prompt(AnalysisRequest(type=DataType.COMBINED, data=files))

    assert "SKU-2" in prompt
    assert "SKU-3" not in prompt
    assert "limited to 3 rows per file" in prompt
