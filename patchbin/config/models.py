from __future__ import annotations

from typing import Any, Dict, Optional, cast

from pydantic import BaseModel, ConfigDict, Field

from ..patching.encoder import HexPolicy
from ..patching.models import MAX_ADDRESS, MAX_PAYLOAD_LEN


class _BaseConfigModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class LimitsConfig(_BaseConfigModel):
    max_text_len: int = Field(default=48, ge=1, le=MAX_PAYLOAD_LEN)
    max_binary_len: int = Field(default=8, ge=1, le=8)
    max_address: int = Field(default=MAX_ADDRESS, ge=0, le=MAX_ADDRESS)


class EncodingConfig(_BaseConfigModel):
    hex_policy: HexPolicy = HexPolicy.STRICT
    text_encoding: str = "utf-8"


class OutputConfig(_BaseConfigModel):
    cleanup_on_failure: bool = False
    copy_chunk_size: int = Field(default=1024 * 1024, ge=1)


class LoggingConfig(_BaseConfigModel):
    level: str = "INFO"
    structured_json: bool = False
    log_file: Optional[str] = None
    max_log_size: str = "10MB"
    backup_count: int = Field(default=3, ge=0)


class PatchbinConfig(_BaseConfigModel):
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    encoding: EncodingConfig = Field(default_factory=EncodingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def validate_config(payload: Dict[str, Any]) -> PatchbinConfig:
    return cast(PatchbinConfig, PatchbinConfig.model_validate(payload))
