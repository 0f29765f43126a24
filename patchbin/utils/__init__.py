"""Small shared helpers."""

from .result import Err, Ok, Result, and_then, capture, error_message, is_err, is_ok, unwrap

__all__ = [
    "Err",
    "Ok",
    "Result",
    "and_then",
    "capture",
    "error_message",
    "is_err",
    "is_ok",
    "unwrap",
]
