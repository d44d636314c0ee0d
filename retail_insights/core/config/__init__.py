from .models import AnalysisConfig, LLMModelConfig, DETAILED_MODE, LIGHTWEIGHT_MODE
from .config_loader import ConfigLoader
from .llm_config import LLMConfigManager
from .credentials import require_api_key, describe_api_key, API_KEY_ENV

__all__ = [
    'AnalysisConfig',
    'LLMModelConfig',
    'DETAILED_MODE',
    'LIGHTWEIGHT_MODE',
    'ConfigLoader',
    'LLMConfigManager',
    'require_api_key',
    'describe_api_key',
    'API_KEY_ENV'
]
