"""
Shared fixtures: offline stub provider, test configuration, Flask test client
"""

import pytest

from retail_insights.app import create_app
from retail_insights.core.config import LLMConfigManager
from retail_insights.features.analysis import AnalysisOrchestrator, AnalysisService
from retail_insights.features.llm import LLMService, StubRepository


@pytest.fixture
def stub_repository():
    return StubRepository()


@pytest.fixture
def config_manager():
    return LLMConfigManager(environment="test", environ={})


@pytest.fixture
def llm_service(stub_repository, config_manager):
    return LLMService(repository=stub_repository, config_manager=config_manager)


@pytest.fixture
def analysis_service(llm_service):
    return AnalysisService(llm_service)


@pytest.fixture
def orchestrator(analysis_service):
    return AnalysisOrchestrator(analysis_service)


@pytest.fixture
def app(stub_repository):
    app = create_app(environment="test", llm_repository=stub_repository, environ={})
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sales_rows():
    products = ["iPhone 14 Pro", "USB-C Cable", "USB-C Cable", "Wall Charger", "iPhone 14 Pro",
                "Phone Case", "USB-C Cable", "Screen Protector", "Wall Charger", "Phone Case"]
    revenues = [999, "19.99", "N/A", 24.5, "1,099", "", 19.99, 12, None, "15"]
    return [
        {"Invoice #": f"INV-{i:04d}", "Product": product, "Revenue": revenue}
        for i, (product, revenue) in enumerate(zip(products, revenues), 1)
    ]
