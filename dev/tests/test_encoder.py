from __future__ import annotations

import pytest

from patchbin.exceptions import EncodingError
from patchbin.patching.encoder import ByteEncoder, HexPolicy, encode


def test_prefix_is_optional() -> None:
    assert encode("0x1234") == encode("1234") == b"\x12\x34"
    assert encode("0X1234") == b"\x12\x34"


def test_odd_length_is_left_padded() -> None:
    assert encode("123") == b"\x01\x23"
    assert encode("0xF") == b"\x0f"


def test_leading_zeros_keep_their_bytes() -> None:
    assert encode("0x0001") == b"\x00\x01"
    assert encode("0000") == b"\x00\x00"


def test_most_significant_byte_comes_first() -> None:
    assert encode("0x0201") == b"\x02\x01"
    assert encode("0x1234567890ABCDEF") == bytes.fromhex("1234567890abcdef")


@pytest.mark.parametrize("text", ["", "0x", "0X", "12G4", "0x12 34", "1x23"])
def test_strict_rejects_malformed_input(text: str) -> None:
    with pytest.raises(EncodingError):
        encode(text)


def test_max_len_is_enforced() -> None:
    assert len(encode("0x1234567890ABCDEF", max_len=8)) == 8
    with pytest.raises(EncodingError) as excinfo:
        encode("0x1234567890ABCDEF01", max_len=8)
    assert excinfo.value.details["length"] == 9


def test_permissive_mirrors_numeric_stream_parse() -> None:
    encoder = ByteEncoder(HexPolicy.PERMISSIVE)

    # leading hex run is the value, the junk still counts towards the length
    assert encoder.encode("0x12zz") == b"\x00\x12"
    # no hex digits at all parses as zero
    assert encoder.encode("zz") == b"\x00"
    # everything up to the first x is dropped, wherever it is
    assert encoder.encode("ab x0201") == b"\x02\x01"


def test_permissive_still_rejects_empty_value() -> None:
    with pytest.raises(EncodingError):
        ByteEncoder(HexPolicy.PERMISSIVE).encode("0x")


def test_parse_int() -> None:
    encoder = ByteEncoder()
    assert encoder.parse_int("0x100") == 0x100
    assert encoder.parse_int("FFFFFFFF") == 0xFFFFFFFF
    with pytest.raises(EncodingError):
        encoder.parse_int("0x10g")
    assert ByteEncoder("permissive").parse_int("0x10g") == 0x10


def test_encode_text_keeps_raw_bytes() -> None:
    assert ByteEncoder.encode_text("TREVOR    ") == b"TREVOR    "
    assert ByteEncoder.encode_text("\\n") == b"\\n"
    with pytest.raises(EncodingError):
        ByteEncoder.encode_text("café", "ascii")
