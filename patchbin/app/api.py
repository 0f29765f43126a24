"""Public API: run one patch request from start to finish.

The pipeline is PatchPlanner -> PatchWriter. Both steps report through the
Ok/Err result type, so callers never need a try block; ``exit_code_for`` and
``describe_result`` turn the outcome into what a command line shows.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Type

from ..config.models import PatchbinConfig
from ..exceptions import (
    BaseError,
    ConfigurationError,
    EncodingError,
    InputNotFound,
    InvalidRequest,
    PatchIOError,
    PatchOutOfBounds,
    PatternNotFound,
)
from ..patching.models import PatchReport, PatchRequest, ResolvedPatch
from ..patching.planner import PatchPlanner
from ..patching.writer import PatchWriter
from ..utils.result import Err, Ok, Result, and_then

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

EXIT_CODES: Dict[Type[BaseError], int] = {
    InvalidRequest: 2,
    EncodingError: 3,
    PatternNotFound: 4,
    InputNotFound: 5,
    PatchOutOfBounds: 6,
    PatchIOError: 7,
    ConfigurationError: 8,
}


def run_patch(request: PatchRequest, config: Optional[PatchbinConfig] = None) -> Result[PatchReport]:
    """Resolve and apply one patch request.

    Args:
        request: Validated request from the command line layer
        config: Engine settings; defaults to the built-in limits

    Returns:
        Ok(PatchReport) on success, Err(PatchError) otherwise
    """
    config = config or PatchbinConfig()
    planner = PatchPlanner.from_config(config)
    writer = PatchWriter.from_config(config)

    logger.info("Input file: %s", request.input_path)
    logger.info("Output file: %s", request.output_path)

    def _write(patch: ResolvedPatch) -> Result[PatchReport]:
        logger.info("Patching %s of length %d byte(s), to address 0X%X",
                    patch.payload.hex().upper(), len(patch.payload), patch.offset)
        written = writer.apply(patch, request.input_path, request.output_path)
        if isinstance(written, Err):
            return written
        return Ok(PatchReport(
            input_path=request.input_path,
            output_path=request.output_path,
            offset=patch.offset,
            payload=patch.payload,
            bytes_written=written.value,
        ))

    result = and_then(planner.plan(request), _write)

    if isinstance(result, Err):
        error = result.error
        extra = {"error": error.to_dict()} if isinstance(error, BaseError) else {}
        logger.error("%s", error, extra=extra)
    else:
        logger.info("Success!")
    return result


def exit_code_for(result: Result[PatchReport]) -> int:
    """Process exit code: 0 on success, one distinct code per failure kind."""
    if isinstance(result, Ok):
        return EXIT_OK
    for error_type, code in EXIT_CODES.items():
        if isinstance(result.error, error_type):
            return code
    return EXIT_FAILURE


def describe_result(result: Result[PatchReport]) -> str:
    if isinstance(result, Ok):
        report = result.value
        return f"Patched {report.bytes_written} byte(s) at 0x{report.offset:X} in {report.output_path}"
    return str(result.error)
