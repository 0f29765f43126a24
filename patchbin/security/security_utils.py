#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""patchbin - Path checks applied before any output file is opened for writing."""

import logging
import os
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


def resolve_path_safe(path: Union[str, Path]) -> Path:
    """Normalize and resolve a path to an absolute Path without requiring it to exist."""
    raw = str(path)
    if not raw or "\x00" in raw:
        raise ValueError(f"Invalid path: {raw!r}")
    return Path(os.path.normpath(raw)).expanduser().resolve()


def is_same_file(first: Union[str, Path], second: Union[str, Path]) -> bool:
    """Check whether two paths name the same file (following links when both exist)."""
    first_path = resolve_path_safe(first)
    second_path = resolve_path_safe(second)

    if first_path.exists() and second_path.exists():
        try:
            return os.path.samefile(first_path, second_path)
        except OSError as e:
            logger.warning(f"Could not compare {first_path} and {second_path}: {e}")

    return first_path == second_path
