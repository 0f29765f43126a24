"""Hex rows for showing a patched region before and after.

Rows look like ``0x000100 02 01 00 00 00 00``: a six digit file offset
followed by the bytes in hex.
"""

from __future__ import annotations

from typing import List, Tuple

from ..exceptions import PatchIOError


def format_hex_rows(data: bytes, base_offset: int = 0, width: int = 16) -> List[str]:
    rows = []
    for start in range(0, len(data), width):
        chunk = data[start:start + width]
        rows.append(f"0x{base_offset + start:06X} " + " ".join(f"{byte:02X}" for byte in chunk))
    return rows


def read_region(path: str, offset: int, length: int, context: int = 0) -> Tuple[int, bytes]:
    """Read ``length`` bytes at ``offset`` plus ``context`` bytes on each side.

    Returns:
        (first offset actually read, bytes); the window is clipped to the file
    """
    start = max(0, offset - context)
    try:
        with open(path, "rb") as f:
            f.seek(start)
            return start, f.read(offset - start + length + context)
    except OSError as exc:
        raise PatchIOError(f"Cannot read {path}: {exc}", file_path=path, operation="read") from exc


def render_region(path: str, offset: int, length: int, context: int = 0, width: int = 16) -> List[str]:
    start, data = read_region(path, offset, length, context)
    return format_hex_rows(data, start, width)
