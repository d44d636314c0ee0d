"""
LLM Provider Interfaces
Contract every text-completion backend implementation must satisfy
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, List
from dataclasses import dataclass


@dataclass
class LLMRequest:
    """Completion request"""
    model: str
    messages: List[Dict[str, str]]
    max_tokens: int = 4000
    temperature: float = 0.2
    system: Optional[str] = None


@dataclass
class LLMResponse:
    """Completion response"""
    content: str
    usage: Optional[Dict[str, int]] = None
    model: Optional[str] = None
    finish_reason: Optional[str] = None


class BaseLLMRepository(ABC):
    """
    Text completion provider interface
    One implementation per backend, plus a deterministic in-process stub
    """

    @abstractmethod
    def __init__(self, api_key: str, **kwargs):
        """
        Args:
            api_key: backend credential
            **kwargs: provider-specific settings
        """
        pass

    @abstractmethod
    def execute_prompt(self, request: LLMRequest) -> LLMResponse:
        """
        Run one completion

        Args:
            request: LLM request

        Returns:
            LLMResponse

        Raises:
            ProviderError: transport, authentication or provider-side failure
        """
        pass

    @abstractmethod
    def get_model_info(self) -> Dict[str, Any]:
        """
        Returns:
            Dict: provider name and configured model information
        """
        pass
