"""Config I/O utilities."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigurationError, ValidationError
from .models import PatchbinConfig, validate_config

logger = logging.getLogger(__name__)

CONFIG_ENV = "PATCHBIN_CONFIG"

# environment variable -> (section, key)
_ENV_OVERRIDES = {
    "PATCHBIN_HEX_POLICY": ("encoding", "hex_policy"),
    "PATCHBIN_CLEANUP_ON_FAILURE": ("output", "cleanup_on_failure"),
    "PATCHBIN_LOG_JSON": ("logging", "structured_json"),
}


def get_config_path() -> str:
    override = os.environ.get(CONFIG_ENV)
    if override:
        return override
    return os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "config.json")


def _read_payload(config_path: Path) -> Dict[str, Any]:
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {config_path}: {exc}",
                                 file_path=str(config_path)) from exc

    try:
        if config_path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, ValueError) as exc:
        raise ConfigurationError(f"Cannot parse config file {config_path}: {exc}",
                                 file_path=str(config_path)) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must hold a mapping",
                                 file_path=str(config_path))
    return data


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    for env_name, (section, key) in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value is None:
            continue
        section_data = data.setdefault(section, {})
        if not isinstance(section_data, dict):
            continue
        section_data[key] = value.strip()
        logger.debug("Config override from %s: %s.%s", env_name, section, key)
    return data


def load_config(config_path: Optional[Union[str, Path]] = None) -> PatchbinConfig:
    """Load, override and validate the configuration.

    Args:
        config_path: JSON or YAML file; defaults to $PATCHBIN_CONFIG or the packaged config.json

    Raises:
        ConfigurationError: the file cannot be read or parsed
        ValidationError: the content does not match the config model
    """
    path = Path(config_path if config_path is not None else get_config_path())
    data = _read_payload(path)
    data.pop("_metadata", None)
    data = _apply_env_overrides(data)

    try:
        return validate_config(data)
    except PydanticValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        field_name = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ValidationError(f"Invalid configuration in {path}: {exc}",
                              field_name=field_name, file_path=str(path)) from exc


def save_config(config: PatchbinConfig, config_path: Union[str, Path]) -> None:
    path = Path(config_path)
    data = config.model_dump(mode="json")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                yaml.safe_dump(data, f, sort_keys=False)
            else:
                json.dump(data, f, indent=2)
    except OSError as exc:
        raise ConfigurationError(f"Cannot write config file {path}: {exc}", file_path=str(path)) from exc
