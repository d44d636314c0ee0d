"""
LLM Repositories
Completion backend access, one repository per provider
"""

import anthropic
from typing import Dict, Any, Optional, List
from retail_insights.core.exceptions import ProviderError
from retail_insights.core.llm.interfaces import BaseLLMRepository, LLMRequest, LLMResponse
from retail_insights.core.prompts import SECTION_HEADINGS
from retail_insights.utils.logging_utils import get_logger

logger = get_logger(__name__)

CONNECTIVITY_PROBE = "Please respond with 'API test successful'"


def _provider_error_type(error: Exception) -> Optional[str]:
    """Error type reported by the provider body ({"error": {"type": ...}})"""
    body = getattr(error, 'body', None)
    if isinstance(body, dict):
        inner = body.get('error')
        if isinstance(inner, dict) and inner.get('type'):
            return inner['type']
        if body.get('type') and body.get('type') != 'error':
            return body['type']
    return None


class AnthropicRepository(BaseLLMRepository):
    """Anthropic Messages API repository"""

    def __init__(self, api_key: str, default_model: str = "claude-sonnet-4-5", client=None):
        """
        Args:
            api_key: Anthropic API key
            default_model: model used when a request does not name one
            client: preconfigured anthropic.Anthropic (tests)
        """
        self.api_key = api_key
        self.default_model = default_model

        # SDK-level retries are disabled; a failed call is reported, never repeated
        self.client = client or anthropic.Anthropic(api_key=api_key, max_retries=0)
        logger.success("Anthropic repository initialized")

    def execute_prompt(self, request: LLMRequest) -> LLMResponse:
        """
        Run one Messages API call

        Raises:
            ProviderError: any SDK failure, with status and provider error type
        """
        kwargs = {
            "model": request.model or self.default_model,
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
            "messages": request.messages
        }
        if request.system:
            kwargs["system"] = request.system

        try:
            response = self.client.messages.create(**kwargs)
        except anthropic.APIStatusError as e:
            error_type = _provider_error_type(e) or type(e).__name__
            logger.provider_error(f"Anthropic API error ({e.status_code}, {error_type}): {e.message}")
            raise ProviderError(e.message, status_code=e.status_code, provider_type=error_type) from e
        except anthropic.APIConnectionError as e:
            logger.provider_error(f"Anthropic API connection failure: {str(e)}")
            raise ProviderError(str(e), provider_type="api_connection_error") from e
        except anthropic.APIError as e:
            logger.provider_error(f"Anthropic API failure: {str(e)}")
            raise ProviderError(str(e), provider_type=_provider_error_type(e) or "api_error") from e

        content = response.content[0].text if response.content else ""

        usage = None
        if getattr(response, 'usage', None):
            usage = {
                "input_tokens": getattr(response.usage, 'input_tokens', 0),
                "output_tokens": getattr(response.usage, 'output_tokens', 0)
            }

        return LLMResponse(
            content=content,
            usage=usage,
            model=getattr(response, 'model', request.model),
            finish_reason=getattr(response, 'stop_reason', None)
        )

    def get_model_info(self) -> Dict[str, Any]:
        return {
            "provider": "anthropic",
            "default_model": self.default_model,
            "supports_system_message": True
        }


def canned_analysis_text() -> str:
    """Deterministic seven-section answer in the numbered-heading format"""
    bodies = {
        "keyInsights": "Accessories turn faster than handsets. The top selling category is Accessories.",
        "inventoryAnalysis": "Inventory turnover of 4.8 with a stockout rate of 2.1% on flagship phones.",
        "inventoryRecommendations": "Raise safety stock for USB-C cables and reduce case overstock.",
        "vendorAnalysis": "The fulfillment rate is 94.0% and average days on order is 5.5 across vendors.",
        "vendorRecommendations": "Consolidate accessory orders with the fastest vendor.",
        "salesTrends": "Smartphone revenue grows month over month into the holiday season.",
        "salesForecasts": "Expect a 10% lift in accessory sales next quarter.",
    }
    return "\n\n".join(
        f"{heading.numbered(position, upper=True)}:\n{bodies[heading.key]}"
        for position, heading in enumerate(SECTION_HEADINGS, 1)
    )


class StubRepository(BaseLLMRepository):
    """
    Deterministic in-process provider

    Used for offline development (LLM_PROVIDER=stub) and tests. Records
    every request it receives.
    """

    def __init__(self, api_key: str = "stub", default_model: str = "stub-model",
                 response_text: Optional[str] = None, error: Optional[ProviderError] = None,
                 fail_when_prompt_contains: Optional[str] = None):
        """
        Args:
            api_key: ignored
            default_model: model name echoed in responses
            response_text: fixed answer (canned seven-section answer when None)
            error: raised on every call when set
            fail_when_prompt_contains: raise a ProviderError only for prompts containing this text
        """
        self.api_key = api_key
        self.default_model = default_model
        self.response_text = response_text
        self.error = error
        self.fail_when_prompt_contains = fail_when_prompt_contains
        self.requests: List[LLMRequest] = []

    def execute_prompt(self, request: LLMRequest) -> LLMResponse:
        self.requests.append(request)

        if self.error is not None:
            raise self.error

        prompt = request.messages[-1]["content"] if request.messages else ""
        if self.fail_when_prompt_contains and self.fail_when_prompt_contains in prompt:
            raise ProviderError("Stub provider failure", status_code=529, provider_type="overloaded_error")

        if prompt == CONNECTIVITY_PROBE:
            content = "API test successful"
        elif self.response_text is not None:
            content = self.response_text
        else:
            content = canned_analysis_text()

        return LLMResponse(content=content, model=request.model or self.default_model, finish_reason="end_turn")

    def get_model_info(self) -> Dict[str, Any]:
        return {
            "provider": "stub",
            "default_model": self.default_model,
            "supports_system_message": True
        }
