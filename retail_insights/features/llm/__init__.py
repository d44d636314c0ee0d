"""
LLM Feature Package
Completion providers and the completion client service
"""

from .services import LLMService
from .repositories import AnthropicRepository, StubRepository

__all__ = [
    'LLMService',
    'AnthropicRepository',
    'StubRepository'
]
