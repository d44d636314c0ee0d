"""
HTTP surface tests (Flask test client, stub provider)
"""

import io

from retail_insights.app import create_app
from retail_insights.core.exceptions import ProviderError
from retail_insights.features.llm import StubRepository


def test_analyze_mobile_retail(client, sales_rows):
    response = client.post("/api/analyze-mobile-retail", json={
        "data": {"type": "sales_data", "location": "Aberdeen", "data": sales_rows}
    })

    assert response.status_code == 200
    body = response.get_json()
    assert set(body) == {"sections", "metrics", "charts"}
    assert body["sections"]["vendorRecommendations"] == "Consolidate accessory orders with the fastest vendor."
    assert body["metrics"]["fulfillmentRate"] == "94.0%"


def test_analyze_combined_request(client, stub_repository):
    response = client.post("/api/analyze-mobile-retail", json={"data": {
        "type": "combined",
        "location": "Aberdeen",
        "data": [
            {"fileName": "sales.csv", "type": "sales_data", "data": [{"Invoice #": "A1"}]},
            {"fileName": "stock.csv", "data": [{"On Hand": 2}]},
        ]
    }})

    assert response.status_code == 200
    prompt = stub_repository.requests[-1].messages[0]["content"]
    assert "--- INVENTORY DATA (stock.csv) ---" in prompt


def test_malformed_body(client):
    assert client.post("/api/analyze-mobile-retail", json={}).status_code == 400

    response = client.post("/api/analyze-mobile-retail", json={"data": {"location": "Aberdeen"}})
    assert response.status_code == 400
    assert response.get_json()["error_type"] == "validation_error"


def test_empty_dataset_is_rejected(client, stub_repository):
    response = client.post("/api/analyze-mobile-retail", json={"data": {"type": "sales_data", "data": []}})

    assert response.status_code == 400
    assert stub_repository.requests == []


def test_provider_error_envelope(sales_rows):
    repository = StubRepository(error=ProviderError("Overloaded", status_code=529, provider_type="overloaded_error"))
    client = create_app(environment="test", llm_repository=repository, environ={}).test_client()

    response = client.post("/api/analyze-mobile-retail", json={"data": {"type": "sales_data", "data": sales_rows}})

    assert response.status_code == 500
    body = response.get_json()
    assert body["error"] == "Claude API Error: Overloaded"
    assert body["error_type"] == "provider_error"
    assert body["details"] == {"message": "Overloaded", "status": 529, "type": "overloaded_error"}


def test_missing_api_key_is_reported_early(sales_rows):
    client = create_app(environment="production", environ={}).test_client()

    response = client.post("/api/analyze-mobile-retail", json={"data": {"type": "sales_data", "data": sales_rows}})

    assert response.status_code == 500
    body = response.get_json()
    assert body["error_type"] == "configuration_error"
    assert "ANTHROPIC_API_KEY" in body["error"]
    assert client.get("/api/health").status_code == 503


def test_test_claude(client):
    response = client.get("/api/test-claude")

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "message": "API test successful"}


def test_test_claude_failure():
    repository = StubRepository(error=ProviderError("invalid x-api-key", status_code=401,
                                                    provider_type="authentication_error"))
    client = create_app(environment="test", llm_repository=repository, environ={}).test_client()

    response = client.get("/api/test-claude")

    assert response.status_code == 500
    assert response.get_json()["error"] == "API Test Failed: invalid x-api-key"


def test_check_env_only_in_debug():
    debug_client = create_app(environment="test", environ={"ANTHROPIC_API_KEY": "sk-ant-0123456789abc"}).test_client()
    assert debug_client.get("/api/check-env").get_json() == {
        "hasKey": True, "keyLength": 20, "keyStart": "sk-ant-012..."
    }

    production_client = create_app(environment="production", environ={}).test_client()
    assert production_client.get("/api/check-env").status_code == 404


def test_analyze_batch(client):
    response = client.post("/api/analyze-batch", json={
        "location": "Aberdeen",
        "files": [
            {"fileName": "sales.csv", "type": "sales_data", "data": [{"Invoice #": "A1"}]},
            {"fileName": "stock.csv", "type": "inventory", "data": [{"On Hand": 2}]},
        ]
    })

    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert set(body["results"]) == {"all", "sales_data", "inventory"}
    assert body["errors"] == []


def test_analyze_batch_with_unclassified_file(client):
    response = client.post("/api/analyze-batch", json={
        "files": [{"fileName": "notes.csv", "data": [{"Note": "call vendor"}]}]
    })

    assert response.status_code == 400
    assert response.get_json()["details"] == {"unclassified_files": ["notes.csv"]}


def test_upload(client):
    response = client.post("/api/upload", data={
        "files": [
            (io.BytesIO(b"On Hand,SKU\n4,S1\n"), "stock.csv"),
            (io.BytesIO(b"hello"), "notes.txt"),
        ]
    }, content_type="multipart/form-data")

    assert response.status_code == 200
    body = response.get_json()
    assert [file["fileName"] for file in body["files"]] == ["stock.csv"]
    assert body["files"][0]["type"] == "inventory"
    assert body["files"][0]["rowCount"] == 1
    assert body["errors"][0]["fileName"] == "notes.txt"


def test_upload_without_files(client):
    response = client.post("/api/upload", data={}, content_type="multipart/form-data")
    assert response.status_code == 400


def test_unknown_endpoint(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.get_json()["error_type"] == "not_found"


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] == "healthy"
    assert body["services"]["llm"]["provider"] == "stub"


def test_check_env_hidden_without_flask_env(monkeypatch):
    monkeypatch.delenv("FLASK_ENV", raising=False)
    client = create_app(environ={"ANTHROPIC_API_KEY": "sk-ant-0123456789abc"}).test_client()

    assert client.get("/api/check-env").status_code == 404


def test_test_claude_unexpected_failure():
    class BrokenRepository(StubRepository):
        def execute_prompt(self, request):
            raise RuntimeError("socket closed")

    client = create_app(environment="test", llm_repository=BrokenRepository(), environ={}).test_client()

    response = client.get("/api/test-claude")

    assert response.status_code == 500
    body = response.get_json()
    assert body["error"] == "API Test Failed: socket closed"
    assert body["error_type"] == "provider_error"
