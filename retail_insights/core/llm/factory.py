"""
LLM Factory
Creates completion repositories by provider name
"""

from typing import Dict, Any
from retail_insights.utils.logging_utils import get_logger
from .interfaces import BaseLLMRepository

logger = get_logger(__name__)


class LLMFactory:
    """LLM Repository factory with a pluggable provider registry"""

    _providers: Dict[str, type] = {}

    @classmethod
    def register_provider(cls, name: str, repository_class: type):
        """
        Register a provider

        Args:
            name: provider name
            repository_class: BaseLLMRepository subclass
        """
        cls._providers[name] = repository_class
        logger.success(f"LLM provider '{name}' registered")

    @classmethod
    def create_repository(cls, provider: str, config: Dict[str, Any]) -> BaseLLMRepository:
        """
        Create a repository

        Args:
            provider: provider name ('anthropic', 'stub')
            config: constructor arguments (api_key, default_model, ...)

        Returns:
            BaseLLMRepository instance

        Raises:
            ValueError: unknown provider
        """
        if not cls._providers:
            cls._initialize_default_providers()

        if provider not in cls._providers:
            supported = ", ".join(sorted(cls._providers.keys()))
            raise ValueError(f"Unsupported LLM provider: {provider}. Supported: {supported}")

        try:
            repository = cls._providers[provider](**config)
            logger.created(f"{provider} LLM repository created")
            return repository
        except Exception as e:
            logger.error(f"Failed to create {provider} LLM repository: {str(e)}")
            raise

    @classmethod
    def supported_providers(cls):
        if not cls._providers:
            cls._initialize_default_providers()
        return sorted(cls._providers.keys())

    @classmethod
    def _initialize_default_providers(cls):
        """Late import to avoid a circular dependency with features.llm"""
        from retail_insights.features.llm.repositories import AnthropicRepository, StubRepository
        cls.register_provider("anthropic", AnthropicRepository)
        cls.register_provider("stub", StubRepository)
