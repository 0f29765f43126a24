"""Path safety helpers."""

from .security_utils import is_same_file, resolve_path_safe

__all__ = ["is_same_file", "resolve_path_safe"]
