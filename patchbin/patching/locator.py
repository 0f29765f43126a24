"""Marker search inside a byte buffer.

The matcher walks the buffer once, keeping a running count of how many
pattern bytes matched so far. On a mismatch the count drops back to zero and
the current byte is NOT re-tried as the start of a new match. This is not a
general substring search: a candidate that starts inside a failed partial
match is missed. For example ``AAB`` is not found in ``AAAB``. The behaviour
is kept on purpose so resolved offsets stay identical to earlier releases of
the tool; do not swap in ``bytes.find``.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..exceptions import InvalidRequest

logger = logging.getLogger(__name__)


class PatternLocator:
    """Finds the first occurrence of a byte pattern in a buffer."""

    def locate(self, buffer: bytes, pattern: bytes, anchor_at_start: bool = False) -> Optional[int]:
        """Locate ``pattern`` in ``buffer``.

        Args:
            buffer: Bytes to scan
            pattern: Marker to look for
            anchor_at_start: Return the index where the match starts instead of
                the index immediately after it

        Returns:
            Byte index, or None when the pattern does not occur
        """
        if not pattern:
            raise InvalidRequest("Search pattern is empty", field_name="pattern")

        size = len(pattern)
        matched = 0
        for index, byte in enumerate(buffer):
            if byte == pattern[matched]:
                matched += 1
            else:
                matched = 0

            if matched == size:
                if anchor_at_start:
                    return index - size + 1
                return index + 1

        logger.debug("Pattern %s not found in %d bytes", pattern.hex(), len(buffer))
        return None


def locate(buffer: bytes, pattern: bytes, anchor_at_start: bool = False) -> Optional[int]:
    """Locate a pattern with a throwaway PatternLocator."""
    return PatternLocator().locate(buffer, pattern, anchor_at_start)
