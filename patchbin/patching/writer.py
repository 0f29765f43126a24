"""Patch Writer - copies the input file and overwrites the resolved range.

The output is a byte-for-byte copy of the input with ``len(payload)`` bytes
replaced at ``offset``. Nothing is inserted, so the output length always
equals the input length. The range is checked against the number of bytes
actually copied; a patch that would run past the end is refused.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, BinaryIO

from ..exceptions import InputNotFound, InvalidRequest, PatchError, PatchIOError, PatchOutOfBounds
from ..security.security_utils import is_same_file
from ..utils.result import Result, capture
from .models import ResolvedPatch

if TYPE_CHECKING:
    from ..config.models import PatchbinConfig

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024 * 1024


class PatchWriter:
    """Writes a ResolvedPatch into a fresh copy of the input file."""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE, cleanup_on_failure: bool = False):
        """Initialize writer.

        Args:
            chunk_size: Bytes read per copy step
            cleanup_on_failure: Delete the output file this writer created when
                the bounds check or a write fails. Off by default, which leaves
                the unpatched copy on disk.
        """
        self.chunk_size = chunk_size
        self.cleanup_on_failure = cleanup_on_failure

    @classmethod
    def from_config(cls, config: "PatchbinConfig") -> "PatchWriter":
        return cls(chunk_size=config.output.copy_chunk_size,
                   cleanup_on_failure=config.output.cleanup_on_failure)

    def apply(self, patch: ResolvedPatch, input_path: str, output_path: str) -> Result[int]:
        """Apply a patch, reporting failures as Err instead of raising."""
        return capture(lambda: self.write(patch, input_path, output_path), PatchError)

    def write(self, patch: ResolvedPatch, input_path: str, output_path: str) -> int:
        """Copy ``input_path`` to ``output_path`` and overwrite the patch range.

        Returns:
            Number of bytes written, always ``len(patch.payload)``

        Raises:
            InvalidRequest: input and output are the same file
            InputNotFound: the input cannot be opened
            PatchOutOfBounds: ``offset + len(payload)`` exceeds the file size
            PatchIOError: the output cannot be created, copied, seeked or written
        """
        try:
            same_file = is_same_file(input_path, output_path)
        except ValueError as exc:
            raise InvalidRequest(str(exc), field_name="output_path") from exc
        if same_file:
            raise InvalidRequest(f"Output file {output_path} is the input file, in-place patching is not supported",
                                 field_name="output_path")

        try:
            fin = open(input_path, "rb")
        except OSError as exc:
            raise InputNotFound(f"Input file {input_path} not found, exiting.", file_path=input_path) from exc

        created = False
        with fin:
            try:
                with open(output_path, "wb") as fout:
                    created = True
                    file_size = self._copy(fin, fout)

                    if patch.end > file_size:
                        raise PatchOutOfBounds(offset=patch.offset, length=len(patch.payload), file_size=file_size)

                    fout.seek(patch.offset)
                    written = fout.write(patch.payload)
            except PatchOutOfBounds:
                logger.warning("Patch %r does not fit into %s", patch, input_path)
                self._discard(output_path, created)
                raise
            except OSError as exc:
                self._discard(output_path, created)
                raise PatchIOError(f"Cannot write output file {output_path}: {exc}",
                                   file_path=output_path, operation="write") from exc

        logger.debug("Wrote %d byte(s) at 0x%X into %s (%d bytes total)", written, patch.offset, output_path, file_size)
        return written

    def _copy(self, fin: BinaryIO, fout: BinaryIO) -> int:
        file_size = 0
        while True:
            data = fin.read(self.chunk_size)
            if not data:
                break
            fout.write(data)
            file_size += len(data)
        return file_size

    def _discard(self, output_path: str, created: bool) -> None:
        if not (self.cleanup_on_failure and created):
            return
        try:
            os.remove(output_path)
            logger.info("Removed unpatched output %s", output_path)
        except OSError as exc:
            logger.warning("Could not remove output %s: %s", output_path, exc)


def apply_patch(patch: ResolvedPatch, input_path: str, output_path: str) -> Result[int]:
    """Apply a patch with default writer settings."""
    return PatchWriter().apply(patch, input_path, output_path)
