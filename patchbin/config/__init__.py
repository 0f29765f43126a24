"""
patchbin - Configuration package

Pydantic models for the patch engine settings and the JSON/YAML loader.
"""

from .io import get_config_path, load_config, save_config
from .models import (
    EncodingConfig,
    LimitsConfig,
    LoggingConfig,
    OutputConfig,
    PatchbinConfig,
    validate_config,
)

__all__ = [
    "EncodingConfig",
    "LimitsConfig",
    "LoggingConfig",
    "OutputConfig",
    "PatchbinConfig",
    "get_config_path",
    "load_config",
    "save_config",
    "validate_config",
]
