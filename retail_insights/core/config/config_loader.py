"""Configuration file loader

Loads YAML configuration files and applies environment variable overrides.
"""

import os
import yaml
from typing import Dict, Any, Optional
from pathlib import Path
from retail_insights.utils.logging_utils import get_logger

logger = get_logger(__name__)

# Environment variable -> (config path, value type)
ENV_MAPPINGS = {
    "LLM_PROVIDER": (["llm", "provider"], str),
    "LLM_TEMPERATURE": (["llm", "temperature"], float),

    "ANALYSIS_MODE": (["analysis", "mode"], str),
    "ANALYSIS_SAMPLE_ROWS": (["analysis", "sample_rows"], int),
    "ANALYSIS_COMBINED_SAMPLE_ROWS": (["analysis", "combined_sample_rows"], int),

    "LLM_DETAILED_MODEL": (["llm", "modes", "detailed", "model"], str),
    "LLM_DETAILED_MAX_TOKENS": (["llm", "modes", "detailed", "max_tokens"], int),
    "LLM_LIGHTWEIGHT_MODEL": (["llm", "modes", "lightweight", "model"], str),
    "LLM_LIGHTWEIGHT_MAX_TOKENS": (["llm", "modes", "lightweight", "max_tokens"], int),
    "LLM_CONNECTIVITY_MODEL": (["llm", "connectivity", "model"], str),

    "DEBUG_ENDPOINTS": (["app", "debug_endpoints"], bool),
    "ALLOWED_ORIGINS": (["app", "allowed_origins"], list),
}


def _convert(value: str, value_type: type) -> Any:
    if value_type is bool:
        return value.strip().lower() in ("1", "true", "yes", "on")
    if value_type is list:
        return [item.strip() for item in value.split(",") if item.strip()]
    return value_type(value)


class ConfigLoader:
    """Configuration file loader

    Layered loading:
    1. default.yaml (defaults)
    2. {environment}.yaml (per-environment overrides)
    3. environment variables (highest priority)
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Args:
            config_dir: directory holding the YAML files
        """
        if config_dir is None:
            # retail_insights/config/
            self.config_dir = Path(__file__).parent.parent.parent / "config"
        else:
            self.config_dir = Path(config_dir)

        if not self.config_dir.exists():
            raise ValueError(f"Config directory not found: {self.config_dir}")

        logger.config(f"ConfigLoader initialized with directory: {self.config_dir}")

    def load_yaml_file(self, filename: str) -> Dict[str, Any]:
        """Load one YAML file; a missing file yields an empty dict"""
        filepath = self.config_dir / filename

        if not filepath.exists():
            logger.warning(f"Config file not found: {filepath}")
            return {}

        with open(filepath, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}
            logger.loading(f"Loaded config from {filename}")
            return config

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursive dictionary merge; values in override win"""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self.deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def apply_env_overrides(self, config: Dict[str, Any], environ=None) -> Dict[str, Any]:
        """Apply environment variable overrides (see ENV_MAPPINGS)

        Args:
            config: merged YAML configuration
            environ: environment mapping (os.environ when None)

        Returns:
            configuration with overrides applied
        """
        environ = os.environ if environ is None else environ

        for env_var, (path, value_type) in ENV_MAPPINGS.items():
            value = environ.get(env_var)
            if value is None:
                continue

            current = config
            for key in path[:-1]:
                current = current.setdefault(key, {})

            current[path[-1]] = _convert(value, value_type)
            logger.config(f"Applied env override: {env_var} = {value}")

        return config

    def load_config(self, environment: Optional[str] = None, environ=None) -> Dict[str, Any]:
        """Load the complete configuration

        Args:
            environment: environment name (FLASK_ENV when None)
            environ: environment mapping used for overrides

        Returns:
            configuration dictionary
        """
        if environment is None:
            environment = os.getenv('FLASK_ENV', 'development')

        logger.loading(f"Loading config for environment: {environment}")

        config = self.load_yaml_file("default.yaml")

        env_config = self.load_yaml_file(f"{environment}.yaml")
        if env_config:
            config = self.deep_merge(config, env_config)

        return self.apply_env_overrides(config, environ)
