"""Application layer between the command line and the patch engine."""

from .api import EXIT_CODES, describe_result, exit_code_for, run_patch

__all__ = [
    "EXIT_CODES",
    "describe_result",
    "exit_code_for",
    "run_patch",
]
