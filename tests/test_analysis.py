"""
Pipeline and orchestrator tests
"""

import pytest

from retail_insights.core.exceptions import EmptyDatasetError, UnclassifiedFilesError
from retail_insights.core.models import AnalysisRequest, DataType, FileData
from retail_insights.core.prompts import SECTION_HEADINGS, SECTION_KEYS
from retail_insights.features.analysis import AnalysisOrchestrator, AnalysisService
from retail_insights.features.analysis.models import FilePayload
from retail_insights.features.llm import LLMService, StubRepository
from retail_insights.features.llm.repositories import canned_analysis_text
from retail_insights.features.preprocessing import compute_stats
from retail_insights.features.prompting import serialize_rows


def test_aberdeen_sales_end_to_end(analysis_service, stub_repository, sales_rows):
    request = AnalysisRequest(type=DataType.SALES_DATA, data=sales_rows, location="Aberdeen")

    stats = compute_stats(request)
    assert abs(stats.total_sales - (999 + 19.99 + 24.5 + 19.99 + 12 + 15)) < 1e-9

    result = analysis_service.analyze(request)

    prompt = stub_repository.requests[-1].messages[0]["content"]
    assert "Aberdeen" in prompt
    assert serialize_rows(sales_rows[:10]) in prompt

    assert set(result.sections) == set(SECTION_KEYS)
    assert result.sections["keyInsights"] == (
        "Accessories turn faster than handsets. The top selling category is Accessories."
    )
    assert result.sections["salesForecasts"] == "Expect a 10% lift in accessory sales next quarter."
    for heading in SECTION_HEADINGS:
        body = result.sections[heading.key]
        assert body
        assert body == body.strip()
        assert all(other.title.upper() not in body for other in SECTION_HEADINGS)

    assert result.metrics["inventoryTurnover"] == "4.8"
    assert result.metrics["fulfillmentRate"] == "94.0%"
    assert result.metrics["stockoutRate"] == "2.1%"
    assert result.metrics["avgDaysOnOrder"] == "5.5"
    assert result.metrics["topCategory"] == "Accessories"
    assert result.metrics["topProduct"] == "N/A"


def test_canned_answer_lists_headings_in_order():
    text = canned_analysis_text()
    positions = [text.find(heading.numbered(i, upper=True)) for i, heading in enumerate(SECTION_HEADINGS, 1)]
    assert positions == sorted(positions)
    assert -1 not in positions


def test_empty_request_fails_before_prompting(analysis_service, stub_repository):
    with pytest.raises(EmptyDatasetError):
        analysis_service.analyze(AnalysisRequest(type=DataType.SALES_DATA, data=[]))
    assert stub_repository.requests == []


def _batch_files():
    return [
        FileData("sales_oct.csv", DataType.SALES_DATA, [{"Invoice #": "A1", "Revenue": 10}]),
        FileData("stock.xlsx", DataType.INVENTORY, [{"On Hand": 4, "SKU": "S1"}]),
        FileData("sales_nov.csv", DataType.SALES_DATA, [{"Invoice #": "A2", "Revenue": 5}]),
    ]


def test_orchestrator_runs_combined_then_each_type(orchestrator, stub_repository):
    batch = orchestrator.run(_batch_files(), "Aberdeen")

    assert list(batch.results) == ["all", "sales_data", "inventory"]
    assert batch.errors == []
    assert len(stub_repository.requests) == 3

    combined_prompt = stub_repository.requests[0].messages[0]["content"]
    sales_prompt = stub_repository.requests[1].messages[0]["content"]
    assert "Total files: 3" in combined_prompt
    assert "Total records: 2" in sales_prompt
    assert sales_prompt.index('"A1"') < sales_prompt.index('"A2"')


def test_orchestrator_isolates_failures(config_manager):
    # only the inventory prompt opens with this sentence
    repository = StubRepository(fail_when_prompt_contains="inventory data for a mobile retail store")
    orchestrator = AnalysisOrchestrator(AnalysisService(LLMService(repository, config_manager)))

    batch = orchestrator.run(_batch_files())

    assert list(batch.results) == ["all", "sales_data"]
    assert len(batch.errors) == 1
    error = batch.errors[0]
    assert error["type"] == "inventory"
    assert error["error_type"] == "provider_error"
    assert error["details"] == {"message": "Stub provider failure", "status": 529, "type": "overloaded_error"}
    assert error["error"].startswith("Error analyzing inventory:")


def test_orchestrator_refuses_unclassified_files(orchestrator, stub_repository):
    files = _batch_files() + [FileData("notes.csv", DataType.UNKNOWN, [{"Note": "x"}])]

    with pytest.raises(UnclassifiedFilesError) as excinfo:
        orchestrator.run(files)

    assert excinfo.value.file_names == ["notes.csv"]
    assert stub_repository.requests == []


def test_batch_to_dict(orchestrator):
    data = orchestrator.run(_batch_files()).to_dict()

    assert set(data) == {"results", "errors"}
    assert set(data["results"]["all"]) == {"sections", "metrics", "charts"}


def test_later_types_still_run_after_a_failure(config_manager):
    # sales_data is the first per-type request of the batch
    repository = StubRepository(fail_when_prompt_contains="sales data for a mobile retail store")
    orchestrator = AnalysisOrchestrator(AnalysisService(LLMService(repository, config_manager)))

    batch = orchestrator.run(_batch_files())

    assert list(batch.results) == ["all", "inventory"]
    assert [error["type"] for error in batch.errors] == ["sales_data"]
    assert len(repository.requests) == 3


def test_combined_failure_is_recorded(config_manager):
    repository = StubRepository(fail_when_prompt_contains="multiple retail data files")
    orchestrator = AnalysisOrchestrator(AnalysisService(LLMService(repository, config_manager)))

    batch = orchestrator.run(_batch_files(), "Aberdeen")

    assert list(batch.results) == ["sales_data", "inventory"]
    assert len(batch.errors) == 1
    assert batch.errors[0]["type"] == "all"
    assert batch.errors[0]["error_type"] == "provider_error"
    assert batch.errors[0]["error"].startswith("Error analyzing all:")


def test_file_payload_accepts_alias_and_field_name():
    by_alias = FilePayload.model_validate({"fileName": "stock.csv", "data": [{"SKU": "S1", "On Hand": 4}]})
    by_name = FilePayload.model_validate({"file_name": "stock.csv", "data": [{"SKU": "S1", "On Hand": 4}]})

    assert by_alias.file_name == by_name.file_name == "stock.csv"
    assert by_name.to_file_data().type == DataType.INVENTORY
    assert "example" in FilePayload.model_json_schema()
