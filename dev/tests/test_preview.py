from __future__ import annotations

from pathlib import Path

import pytest

from patchbin.exceptions import PatchIOError
from patchbin.patching.preview import format_hex_rows, read_region, render_region


def test_rows_carry_file_offsets() -> None:
    rows = format_hex_rows(bytes(range(20)), base_offset=0x100, width=16)

    assert rows == [
        "0x000100 00 01 02 03 04 05 06 07 08 09 0A 0B 0C 0D 0E 0F",
        "0x000110 10 11 12 13",
    ]


def test_region_is_clipped_to_file(tmp_path: Path) -> None:
    path = tmp_path / "f.bin"
    path.write_bytes(b"\x00\x55\xaa\x55\xaa\x55")

    start, data = read_region(str(path), offset=1, length=2, context=4)

    assert start == 0
    assert data == b"\x00\x55\xaa\x55\xaa\x55"
    assert render_region(str(path), 4, 2) == ["0x000004 AA 55"]


def test_unreadable_file(tmp_path: Path) -> None:
    with pytest.raises(PatchIOError):
        read_region(str(tmp_path / "missing.bin"), 0, 1)
