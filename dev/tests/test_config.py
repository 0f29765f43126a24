from __future__ import annotations

import json
from pathlib import Path

import pytest

from patchbin.config.io import load_config, save_config
from patchbin.config.models import PatchbinConfig
from patchbin.exceptions import ConfigurationError, ValidationError
from patchbin.patching.encoder import HexPolicy


def test_packaged_defaults() -> None:
    config = load_config()

    assert config.limits.max_text_len == 48
    assert config.limits.max_binary_len == 8
    assert config.limits.max_address == 0xFFFFFFFF
    assert config.encoding.hex_policy is HexPolicy.STRICT
    assert config.output.cleanup_on_failure is False


def test_yaml_file(tmp_path: Path) -> None:
    path = tmp_path / "patchbin.yaml"
    path.write_text("encoding:\n  hex_policy: permissive\noutput:\n  copy_chunk_size: 4096\n", encoding="utf-8")

    config = load_config(path)

    assert config.encoding.hex_policy is HexPolicy.PERMISSIVE
    assert config.output.copy_chunk_size == 4096
    assert config.limits.max_text_len == 48


def test_env_selects_file_and_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "patchbin.json"
    path.write_text(json.dumps({"logging": {"level": "DEBUG"}}), encoding="utf-8")
    monkeypatch.setenv("PATCHBIN_CONFIG", str(path))
    monkeypatch.setenv("PATCHBIN_CLEANUP_ON_FAILURE", "1")
    monkeypatch.setenv("PATCHBIN_LOG_JSON", "true")

    config = load_config()

    assert config.logging.level == "DEBUG"
    assert config.output.cleanup_on_failure is True
    assert config.logging.structured_json is True


def test_unknown_key_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "patchbin.json"
    path.write_text(json.dumps({"output": {"cleanup_on_falure": True}}), encoding="utf-8")

    with pytest.raises(ValidationError) as excinfo:
        load_config(path)
    assert excinfo.value.details["field_name"] == "output.cleanup_on_falure"


def test_limit_above_hard_ceiling_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "patchbin.json"
    path.write_text(json.dumps({"limits": {"max_binary_len": 9}}), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_config(path)


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_unparseable_file(tmp_path: Path, content: str) -> None:
    path = tmp_path / "patchbin.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config(path)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        load_config(tmp_path / "absent.json")
    assert excinfo.value.error_code == "CONFIG_ERROR"


def test_save_then_load(tmp_path: Path) -> None:
    config = PatchbinConfig.model_validate({"encoding": {"hex_policy": "permissive"}})
    path = tmp_path / "nested" / "patchbin.yml"

    save_config(config, path)

    assert load_config(path) == config
