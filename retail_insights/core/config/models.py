"""Analysis configuration data models

Completion parameters per operating mode (detailed / lightweight), prompt
sampling limits and connectivity-check settings.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any

DETAILED_MODE = "detailed"
LIGHTWEIGHT_MODE = "lightweight"
ANALYSIS_MODES = (DETAILED_MODE, LIGHTWEIGHT_MODE)


@dataclass
class LLMModelConfig:
    """Completion parameters for one operating mode

    Attributes:
        model_id: backend model identifier
        max_tokens: output length ceiling
        temperature: sampling temperature (0.0-1.0)
    """
    model_id: str
    max_tokens: int
    temperature: float

    def __post_init__(self):
        """Value validation"""
        if not 0 <= self.temperature <= 1:
            raise ValueError(f"Temperature must be between 0 and 1, got {self.temperature}")
        if self.max_tokens <= 0:
            raise ValueError(f"Max tokens must be positive, got {self.max_tokens}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model": self.model_id,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature
        }


@dataclass
class AnalysisConfig:
    """Complete analysis configuration

    Attributes:
        mode: active operating mode (detailed | lightweight)
        modes: completion parameters per mode
        connectivity: parameters of the connectivity-check probe
        sample_rows: records embedded in single-type prompts
        combined_sample_rows: records per file embedded in the combined prompt
        provider: completion provider name
        debug_endpoints: expose the credential diagnostic endpoint
    """
    mode: str
    modes: Dict[str, LLMModelConfig]
    connectivity: LLMModelConfig
    sample_rows: int = 10
    combined_sample_rows: int = 2
    provider: str = "anthropic"
    debug_endpoints: bool = False
    allowed_origins: list = field(default_factory=lambda: ["http://localhost:3000"])

    def __post_init__(self):
        if self.mode not in ANALYSIS_MODES:
            raise ValueError(f"Unknown analysis mode: {self.mode}. Expected one of {ANALYSIS_MODES}")
        if self.sample_rows <= 0 or self.combined_sample_rows <= 0:
            raise ValueError("Sample sizes must be positive")

    def get_mode_config(self, mode: Optional[str] = None) -> LLMModelConfig:
        """Completion parameters for a mode (active mode when None)

        Raises:
            ValueError: unknown mode
        """
        mode = mode or self.mode
        if mode not in self.modes:
            raise ValueError(f"Unknown analysis mode: {mode}")
        return self.modes[mode]
