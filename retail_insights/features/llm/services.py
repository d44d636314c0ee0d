"""
LLM Service
Completion client: fixed sampling parameters per operating mode around a provider repository
"""

from typing import Any, Dict, Optional

from retail_insights.core.config.llm_config import LLMConfigManager
from retail_insights.core.exceptions import ProviderError
from retail_insights.core.llm.interfaces import BaseLLMRepository, LLMRequest
from retail_insights.core.prompts import SystemPrompts
from retail_insights.utils.logging_utils import get_logger
from .repositories import CONNECTIVITY_PROBE

logger = get_logger(__name__)


class LLMService:
    """Completion client"""

    def __init__(self, repository: BaseLLMRepository, config_manager: LLMConfigManager):
        """
        Args:
            repository: completion provider repository
            config_manager: analysis configuration (mode, model tier, token budget)
        """
        self.repository = repository
        self.config_manager = config_manager
        logger.success("LLMService initialized")

    @property
    def mode(self) -> str:
        return self.config_manager.config.mode

    def system_instruction(self, mode: Optional[str] = None) -> str:
        return SystemPrompts.for_mode(mode or self.mode)

    def complete(self, system_instruction: str, prompt: str, mode: Optional[str] = None) -> str:
        """
        Send one prompt to the completion backend

        Args:
            system_instruction: system prompt
            prompt: user prompt
            mode: operating mode (configured mode when None)

        Returns:
            raw completion text

        Raises:
            ProviderError: transport, authentication or provider-side failure
        """
        config = self.config_manager.get_mode_config(mode)
        request = LLMRequest(
            model=config.model_id,
            system=system_instruction,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=config.max_tokens,
            temperature=config.temperature
        )

        logger.calling(f"Calling completion backend: model={config.model_id}, prompt={len(prompt)} chars")
        try:
            response = self.repository.execute_prompt(request)
        except ProviderError:
            raise
        except Exception as e:
            logger.provider_error(f"Unexpected completion failure: {str(e)}")
            raise ProviderError(str(e), provider_type=type(e).__name__) from e

        logger.success(f"Completion received: {len(response.content)} chars")
        return response.content

    def analyze(self, prompt: str, mode: Optional[str] = None) -> str:
        """Completion with the mode's system instruction"""
        return self.complete(self.system_instruction(mode), prompt, mode)

    def test_connection(self) -> str:
        """
        No-argument connectivity check

        Returns:
            backend reply text

        Raises:
            ProviderError: the backend cannot be reached or rejects the call
        """
        config = self.config_manager.get_connectivity_config()
        request = LLMRequest(
            model=config.model_id,
            messages=[{"role": "user", "content": CONNECTIVITY_PROBE}],
            max_tokens=config.max_tokens,
            temperature=config.temperature
        )
        logger.calling("Testing completion backend connection...")
        try:
            response = self.repository.execute_prompt(request)
        except ProviderError:
            raise
        except Exception as e:
            logger.provider_error(f"Unexpected connection test failure: {str(e)}")
            raise ProviderError(str(e), provider_type=type(e).__name__) from e
        logger.success(f"Test response received: {response.content}")
        return response.content

    def get_model_info(self) -> Dict[str, Any]:
        info = dict(self.repository.get_model_info())
        info["mode"] = self.mode
        info["mode_config"] = self.config_manager.get_mode_config().to_dict()
        return info
