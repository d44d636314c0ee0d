"""
Core LLM Package
Completion provider interfaces and factory
"""

from .interfaces import BaseLLMRepository, LLMRequest, LLMResponse
from .factory import LLMFactory

__all__ = [
    'BaseLLMRepository',
    'LLMRequest',
    'LLMResponse',
    'LLMFactory'
]
