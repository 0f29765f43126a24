from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

_CONFIG_ENV = (
    "PATCHBIN_CONFIG",
    "PATCHBIN_HEX_POLICY",
    "PATCHBIN_CLEANUP_ON_FAILURE",
    "PATCHBIN_LOG_JSON",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch):
    """Keep the caller's PATCHBIN_* settings out of every test."""
    for name in _CONFIG_ENV:
        monkeypatch.delenv(name, raising=False)
    yield
    from patchbin.logging_config import cleanup_logging

    cleanup_logging()


@pytest.fixture
def zero_file(tmp_path: Path) -> Path:
    path = tmp_path / "zeros.bin"
    path.write_bytes(bytes(16))
    return path
