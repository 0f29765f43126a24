"""Patch Planner - resolves a PatchRequest into an offset and payload.

The search spec decides where the patch goes:

- FIXED_ADDRESS: the address is the offset
- TEXT_MARKER: the raw bytes of the text are located in the input file
- BINARY_MARKER: the hex-ASCII marker is decoded, then located like text

The replacement spec decides what is written, independent of the search:
a BINARY_VALUE is decoded from hex-ASCII (big-endian, at most 8 bytes), a
TEXT_VALUE is taken byte for byte (at most 48 bytes).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Tuple

from ..exceptions import InputNotFound, InvalidRequest, PatchError, PatternNotFound
from ..utils.result import Result, capture
from .encoder import ByteEncoder, HexPolicy
from .locator import PatternLocator
from .models import (
    MAX_ADDRESS,
    MAX_PAYLOAD_LEN,
    PatchRequest,
    ReplacementKind,
    ResolvedPatch,
    SearchKind,
)

if TYPE_CHECKING:
    from ..config.models import PatchbinConfig

logger = logging.getLogger(__name__)


def read_source_buffer(input_path: str) -> bytes:
    """Read the whole input file; the buffer only lives for one resolution."""
    try:
        with open(input_path, "rb") as f:
            return f.read()
    except OSError as exc:
        raise InputNotFound(f"Input file {input_path} not found, exiting.", file_path=input_path) from exc


class PatchPlanner:
    """Turns a PatchRequest into a ResolvedPatch."""

    def __init__(
        self,
        encoder: Optional[ByteEncoder] = None,
        locator: Optional[PatternLocator] = None,
        text_encoding: str = "utf-8",
        max_text_len: int = MAX_PAYLOAD_LEN,
        max_binary_len: int = 8,
        max_address: int = MAX_ADDRESS,
    ):
        self.encoder = encoder or ByteEncoder()
        self.locator = locator or PatternLocator()
        self.text_encoding = text_encoding
        self.max_text_len = max_text_len
        self.max_binary_len = max_binary_len
        self.max_address = max_address

    @classmethod
    def from_config(cls, config: "PatchbinConfig") -> "PatchPlanner":
        return cls(
            encoder=ByteEncoder(HexPolicy(config.encoding.hex_policy)),
            text_encoding=config.encoding.text_encoding,
            max_text_len=config.limits.max_text_len,
            max_binary_len=config.limits.max_binary_len,
            max_address=config.limits.max_address,
        )

    def plan(self, request: PatchRequest) -> Result[ResolvedPatch]:
        """Resolve a request, reporting failures as Err instead of raising."""
        return capture(lambda: self.resolve(request), PatchError)

    def resolve(self, request: PatchRequest) -> ResolvedPatch:
        """Resolve a request into offset and payload.

        Raises:
            InvalidRequest: spec combination or limits violated
            EncodingError: malformed hex marker or value
            InputNotFound: input file unreadable while searching
            PatternNotFound: marker absent from the input file
        """
        search_kind = self._single_search_kind(request)
        replacement_kind = self._single_replacement_kind(request)

        # payload first: a bad value should not cost a read of the input
        payload = self._resolve_payload(request, replacement_kind)
        offset, marker = self._resolve_offset(request, search_kind)

        patch = ResolvedPatch(offset=offset, payload=payload, search_kind=search_kind, marker=marker)
        logger.debug("Resolved %r via %s", patch, search_kind.name)
        return patch

    @staticmethod
    def _single_search_kind(request: PatchRequest) -> SearchKind:
        kinds = request.search_kinds()
        if not kinds:
            raise InvalidRequest("Please specify one search pattern with -a, -t or -b", field_name="search")
        if len(kinds) > 1:
            raise InvalidRequest("Too many search pattern specifiers, choose only one of -a, -t or -b",
                                 field_name="search", details={'kinds': [k.name for k in kinds]})
        return kinds[0]

    @staticmethod
    def _single_replacement_kind(request: PatchRequest) -> ReplacementKind:
        kinds = request.replacement_kinds()
        if not kinds:
            raise InvalidRequest("Please specify one patch pattern with -B or -T", field_name="replacement")
        if len(kinds) > 1:
            raise InvalidRequest("Too many patch pattern specifiers, choose only one of -B or -T",
                                 field_name="replacement", details={'kinds': [k.name for k in kinds]})
        return kinds[0]

    def _resolve_payload(self, request: PatchRequest, kind: ReplacementKind) -> bytes:
        if kind is ReplacementKind.BINARY_VALUE:
            return self.encoder.encode(request.binary_value, max_len=self.max_binary_len)

        payload = self.encoder.encode_text(request.text_value, self.text_encoding)
        if not payload:
            raise InvalidRequest("Nothing to patch - exiting.", field_name="text_value")
        if len(payload) > self.max_text_len:
            raise InvalidRequest(f"Patch text data too large, must be {self.max_text_len} characters or less",
                                 field_name="text_value")
        return payload

    def _resolve_offset(self, request: PatchRequest, kind: SearchKind) -> Tuple[int, Optional[bytes]]:
        if kind is SearchKind.FIXED_ADDRESS:
            address = request.fixed_address
            if address < 0 or address > self.max_address:
                raise InvalidRequest(f"Invalid patch start address 0x{address:X}, must be 0x0 to 0x{self.max_address:X}",
                                     field_name="fixed_address")
            return address, None

        if kind is SearchKind.TEXT_MARKER:
            marker = self.encoder.encode_text(request.text_marker, self.text_encoding)
            if not marker:
                raise InvalidRequest("Text search pattern is empty", field_name="text_marker")
            if len(marker) > self.max_text_len:
                raise InvalidRequest(f"Text search pattern too large, must be {self.max_text_len} characters or less",
                                     field_name="text_marker")
        else:
            marker = self.encoder.encode(request.binary_marker, max_len=self.max_binary_len)

        buffer = read_source_buffer(request.input_path)
        offset = self.locator.locate(buffer, marker, request.anchor_at_match_start)

        if offset is None:
            raise PatternNotFound(pattern=marker)
        return offset, marker


def plan_patch(request: PatchRequest) -> Result[ResolvedPatch]:
    """Plan a request with default limits."""
    return PatchPlanner().plan(request)
