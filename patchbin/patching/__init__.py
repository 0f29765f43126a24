"""Binary patch engine.

Features:
- ByteEncoder: hex-ASCII values and markers to big-endian bytes
- PatternLocator: first-occurrence marker search
- PatchPlanner: request to (offset, payload)
- PatchWriter: bounds-checked overwrite into a copy of the input
"""

from .encoder import ByteEncoder, HexPolicy, encode
from .locator import PatternLocator, locate
from .models import (
    PatchReport,
    PatchRequest,
    ReplacementKind,
    ResolvedPatch,
    SearchKind,
)
from .planner import PatchPlanner, plan_patch, read_source_buffer
from .preview import format_hex_rows, read_region, render_region
from .writer import PatchWriter, apply_patch

__all__ = [
    # encoding
    "ByteEncoder",
    "HexPolicy",
    "encode",
    # search
    "PatternLocator",
    "locate",
    # model
    "PatchReport",
    "PatchRequest",
    "ReplacementKind",
    "ResolvedPatch",
    "SearchKind",
    # planning
    "PatchPlanner",
    "plan_patch",
    "read_source_buffer",
    # writing
    "PatchWriter",
    "apply_patch",
    # preview
    "format_hex_rows",
    "read_region",
    "render_region",
]
