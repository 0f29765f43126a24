"""Hex-ASCII to big-endian byte conversion.

Turns user supplied strings such as ``0x0201`` into the byte sequence that is
searched for or written into the file. The first output byte is the most
significant byte of the value, so ``0x0201`` becomes ``02 01``.

Two parsing policies are available:

- STRICT: one leading ``0x``/``0X`` is removed and the rest must be hex digits.
- PERMISSIVE: behaves like a naive numeric-stream parse. Everything up to the
  first ``x`` (or ``X``) is dropped, the value is the leading run of hex digits
  (zero if there is none) and trailing junk is ignored, but still counts
  towards the output length.
"""

from __future__ import annotations

import string
from enum import Enum
from typing import Optional

from ..exceptions import EncodingError

_HEX_DIGITS = frozenset(string.hexdigits)


class HexPolicy(str, Enum):
    """How malformed hex-ASCII input is treated."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


class ByteEncoder:
    """Converts hex-ASCII strings into bytes of a known length."""

    def __init__(self, policy: HexPolicy = HexPolicy.STRICT):
        self.policy = HexPolicy(policy)

    def clean(self, text: str) -> str:
        """Remove the ``0x`` prefix according to the active policy."""
        if self.policy is HexPolicy.PERMISSIVE:
            for marker in ("x", "X"):
                pos = text.find(marker)
                if pos >= 0:
                    return text[pos + 1:]
            return text

        if text[:2].lower() == "0x":
            return text[2:]
        return text

    def _digits_value(self, original: str, digits: str) -> int:
        if not digits:
            raise EncodingError(f"Nothing to patch - '{original}' holds no hex digits", value=original)

        if self.policy is HexPolicy.STRICT:
            if not all(ch in _HEX_DIGITS for ch in digits):
                raise EncodingError(f"Invalid hex value '{original}'", value=original)
            return int(digits, 16)

        end = 0
        while end < len(digits) and digits[end] in _HEX_DIGITS:
            end += 1
        return int(digits[:end], 16) if end else 0

    def parse_int(self, text: str) -> int:
        """Parse a hex-ASCII string such as ``0x100`` into an integer."""
        return self._digits_value(text, self.clean(text))

    def encode(self, text: str, max_len: Optional[int] = None) -> bytes:
        """Encode a hex-ASCII string as big-endian bytes.

        The output holds ``ceil(len(digits) / 2)`` bytes, so ``123`` yields
        ``01 23`` and leading zeros are kept (``0x0001`` yields ``00 01``).

        Raises:
            EncodingError: empty or malformed input, or more than ``max_len`` bytes
        """
        digits = self.clean(text)
        value = self._digits_value(text, digits)
        length = (len(digits) + 1) // 2

        if max_len is not None and length > max_len:
            raise EncodingError(f"Hex value '{text}' is {length} bytes long, maximum is {max_len} bytes",
                                value=text, details={'length': length, 'max_len': max_len})

        return value.to_bytes(length, "big")

    @staticmethod
    def encode_text(text: str, encoding: str = "utf-8") -> bytes:
        """Return the raw bytes of a text value, without escaping or terminator."""
        try:
            return text.encode(encoding)
        except (UnicodeEncodeError, LookupError) as exc:
            raise EncodingError(f"Text '{text}' cannot be encoded as {encoding}: {exc}", value=text) from exc


def encode(text: str, max_len: Optional[int] = None, policy: HexPolicy = HexPolicy.STRICT) -> bytes:
    """Encode hex-ASCII text with a throwaway ByteEncoder."""
    return ByteEncoder(policy).encode(text, max_len=max_len)
