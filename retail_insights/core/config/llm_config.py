"""LLM configuration manager

Central access point for the analysis configuration: file loading,
caching and runtime reload.
"""

import os
from typing import Optional, Dict, Any
from retail_insights.core.config.models import (
    AnalysisConfig, LLMModelConfig, ANALYSIS_MODES, DETAILED_MODE
)
from retail_insights.core.config.config_loader import ConfigLoader
from retail_insights.utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_TEMPERATURE = 0.2

# Used when a mode section is missing from the YAML files
MODE_DEFAULTS = {
    "detailed": {"model": "claude-sonnet-4-5", "max_tokens": 4000},
    "lightweight": {"model": "claude-haiku-4-5", "max_tokens": 2000},
}
CONNECTIVITY_DEFAULTS = {"model": "claude-haiku-4-5", "max_tokens": 100}


class LLMConfigManager:
    """Analysis configuration manager

    - completion parameters per operating mode
    - runtime reload
    - hard-coded fallback when the files cannot be parsed
    """

    def __init__(self, config_loader: Optional[ConfigLoader] = None,
                 environment: Optional[str] = None, environ=None):
        """
        Args:
            config_loader: configuration loader (default one when None)
            environment: environment name (FLASK_ENV when None)
            environ: environment mapping for overrides (os.environ when None)
        """
        self.config_loader = config_loader or ConfigLoader()
        self.environment = environment
        self.environ = environ
        self._config: Optional[AnalysisConfig] = None

        self.reload_config()

    def _parse_config(self, raw_config: Dict[str, Any]) -> AnalysisConfig:
        """Raw YAML dictionary -> AnalysisConfig"""
        llm_section = raw_config.get("llm", {})
        analysis_section = raw_config.get("analysis", {})
        app_section = raw_config.get("app", {})

        temperature = float(llm_section.get("temperature", DEFAULT_TEMPERATURE))
        modes_section = llm_section.get("modes", {})

        modes = {}
        for mode_name in ANALYSIS_MODES:
            mode_data = {**MODE_DEFAULTS[mode_name], **(modes_section.get(mode_name) or {})}
            modes[mode_name] = LLMModelConfig(
                model_id=mode_data["model"],
                max_tokens=int(mode_data["max_tokens"]),
                temperature=float(mode_data.get("temperature", temperature))
            )

        connectivity_data = {**CONNECTIVITY_DEFAULTS, **(llm_section.get("connectivity") or {})}
        connectivity = LLMModelConfig(
            model_id=connectivity_data["model"],
            max_tokens=int(connectivity_data["max_tokens"]),
            temperature=float(connectivity_data.get("temperature", temperature))
        )

        return AnalysisConfig(
            mode=analysis_section.get("mode", DETAILED_MODE),
            modes=modes,
            connectivity=connectivity,
            sample_rows=int(analysis_section.get("sample_rows", 10)),
            combined_sample_rows=int(analysis_section.get("combined_sample_rows", 2)),
            provider=llm_section.get("provider", "anthropic"),
            debug_endpoints=bool(app_section.get("debug_endpoints", False)),
            allowed_origins=list(app_section.get("allowed_origins", ["http://localhost:3000"]))
        )

    def reload_config(self) -> None:
        """Re-read the configuration files"""
        try:
            explicit_environment = self.environment or os.getenv('FLASK_ENV')
            raw_config = self.config_loader.load_config(explicit_environment, self.environ)
            self._config = self._parse_config(raw_config)

            # Debug endpoints require an explicit environment
            if self._config.debug_endpoints and not explicit_environment:
                logger.warning("FLASK_ENV is not set; debug endpoints stay disabled")
                self._config.debug_endpoints = False

            logger.config(f"Analysis config reloaded. Mode: {self._config.mode}, "
                          f"provider: {self._config.provider}")
            for mode_name, model_config in self._config.modes.items():
                logger.debug(f"Mode '{mode_name}': model={model_config.model_id}, "
                             f"max_tokens={model_config.max_tokens}, "
                             f"temperature={model_config.temperature}")

        except Exception as e:
            logger.error(f"Failed to reload config: {str(e)}")
            if self._config is None:
                self._create_fallback_config()

    def _create_fallback_config(self) -> None:
        """Hard-coded defaults used when the configuration cannot be loaded"""
        logger.warning("Using fallback config due to load failure")

        self._config = AnalysisConfig(
            mode=DETAILED_MODE,
            modes={
                name: LLMModelConfig(values["model"], values["max_tokens"], DEFAULT_TEMPERATURE)
                for name, values in MODE_DEFAULTS.items()
            },
            connectivity=LLMModelConfig(
                CONNECTIVITY_DEFAULTS["model"], CONNECTIVITY_DEFAULTS["max_tokens"], DEFAULT_TEMPERATURE
            )
        )

    @property
    def config(self) -> AnalysisConfig:
        if self._config is None:
            self.reload_config()
        return self._config

    def get_mode_config(self, mode: Optional[str] = None) -> LLMModelConfig:
        """Completion parameters of a mode (active mode when None)"""
        return self.config.get_mode_config(mode)

    def get_connectivity_config(self) -> LLMModelConfig:
        return self.config.connectivity
