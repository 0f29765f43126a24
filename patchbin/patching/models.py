"""Value types flowing through the patch pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from ..exceptions import InvalidRequest

# Hard ceiling on a single payload; the configured limits may only be lower.
MAX_PAYLOAD_LEN = 48
MAX_ADDRESS = 0xFFFFFFFF


class SearchKind(Enum):
    """How the patch location is found."""

    FIXED_ADDRESS = auto()
    TEXT_MARKER = auto()
    BINARY_MARKER = auto()


class ReplacementKind(Enum):
    """How the replacement bytes are given."""

    BINARY_VALUE = auto()
    TEXT_VALUE = auto()


@dataclass(frozen=True)
class PatchRequest:
    """One patch invocation, built once by the command line layer.

    Exactly one of ``fixed_address``, ``text_marker`` and ``binary_marker``
    and exactly one of ``binary_value`` and ``text_value`` are expected.
    Hex-ASCII fields keep their raw text; decoding happens in the planner.
    """

    input_path: str
    output_path: str
    fixed_address: Optional[int] = None
    text_marker: Optional[str] = None
    binary_marker: Optional[str] = None
    binary_value: Optional[str] = None
    text_value: Optional[str] = None
    anchor_at_match_start: bool = False

    def search_kinds(self) -> List[SearchKind]:
        kinds = []
        if self.fixed_address is not None:
            kinds.append(SearchKind.FIXED_ADDRESS)
        if self.text_marker is not None:
            kinds.append(SearchKind.TEXT_MARKER)
        if self.binary_marker is not None:
            kinds.append(SearchKind.BINARY_MARKER)
        return kinds

    def replacement_kinds(self) -> List[ReplacementKind]:
        kinds = []
        if self.binary_value is not None:
            kinds.append(ReplacementKind.BINARY_VALUE)
        if self.text_value is not None:
            kinds.append(ReplacementKind.TEXT_VALUE)
        return kinds


@dataclass(frozen=True)
class ResolvedPatch:
    """A concrete (offset, payload) pair ready to be written."""

    offset: int
    payload: bytes
    search_kind: SearchKind = SearchKind.FIXED_ADDRESS
    marker: Optional[bytes] = None

    def __post_init__(self):
        if self.offset < 0 or self.offset > MAX_ADDRESS:
            raise InvalidRequest(f"Patch offset 0x{self.offset:X} is outside 0x0..0x{MAX_ADDRESS:X}",
                                 field_name="offset")
        if not self.payload:
            raise InvalidRequest("Nothing to patch - exiting.", field_name="payload")
        if len(self.payload) > MAX_PAYLOAD_LEN:
            raise InvalidRequest(f"Patch data too large, must be {MAX_PAYLOAD_LEN} bytes or less",
                                 field_name="payload")

    @property
    def end(self) -> int:
        return self.offset + len(self.payload)

    def __repr__(self):
        return f"(ResolvedPatch {self.offset:08X}h..{self.end:08X}h, {len(self.payload)} bytes)"


@dataclass(frozen=True)
class PatchReport:
    """Outcome of a successful patch run."""

    input_path: str
    output_path: str
    offset: int
    payload: bytes
    bytes_written: int
