#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
patchbin - Consolidated Exception Classes

All exception classes used by the patch engine and its configuration layer,
kept in one place so every failure kind carries the same structured fields.
"""

from datetime import datetime
from typing import Dict, Any, Optional


class BaseError(Exception):
    """Base class for all project-specific errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code or "ERROR"
        self.details = details or {}
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Converts the exception to a dictionary for structured logging."""
        return {
            'error_code': self.error_code,
            'message': str(self),
            'details': self.details,
            'timestamp': self.timestamp.isoformat()
        }


# =====================================================================================================
# Configuration-related errors
# =====================================================================================================

class ConfigurationError(BaseError):
    """Base class for configuration errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        config_details = details or {}
        if file_path:
            config_details['file_path'] = str(file_path)
        super().__init__(message, error_code or "CONFIG_ERROR", config_details)


class ValidationError(ConfigurationError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        validation_details = details or {}
        if field_name:
            validation_details['field_name'] = field_name
        super().__init__(message, "VALIDATION_ERROR", file_path, validation_details)


# =====================================================================================================
# Patch engine errors
# =====================================================================================================

class PatchError(BaseError):
    """Base class for every failure of a single patch invocation."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code or "PATCH_ERROR", details)


class EncodingError(PatchError):
    """Raised when a hex-ASCII string cannot be turned into bytes."""

    def __init__(self, message: str, value: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        encoding_details = details or {}
        if value is not None:
            encoding_details['value'] = value
        super().__init__(message, "ENCODING_ERROR", encoding_details)


class PatternNotFound(PatchError):
    """Raised when the search marker does not occur in the input file."""

    def __init__(self, message: str = "Pattern not found, exiting!",
                 pattern: Optional[bytes] = None,
                 details: Optional[Dict[str, Any]] = None):
        pattern_details = details or {}
        if pattern is not None:
            pattern_details['pattern'] = pattern.hex()
        super().__init__(message, "PATTERN_NOT_FOUND", pattern_details)


class InvalidRequest(PatchError):
    """Raised for a malformed or contradictory patch request."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        request_details = details or {}
        if field_name:
            request_details['field_name'] = field_name
        super().__init__(message, "INVALID_REQUEST", request_details)


class InputNotFound(PatchError):
    """Raised when the source file is missing or cannot be opened."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        file_details = details or {}
        if file_path:
            file_details['file_path'] = str(file_path)
        super().__init__(message, "INPUT_NOT_FOUND", file_details)


class PatchOutOfBounds(PatchError):
    """Raised when offset + payload length runs past the end of the file."""

    def __init__(self, message: str = "Patch data is outside file, exiting.",
                 offset: Optional[int] = None, length: Optional[int] = None,
                 file_size: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None):
        bounds_details = details or {}
        if offset is not None:
            bounds_details['offset'] = offset
        if length is not None:
            bounds_details['length'] = length
        if file_size is not None:
            bounds_details['file_size'] = file_size
        super().__init__(message, "PATCH_OUT_OF_BOUNDS", bounds_details)


class PatchIOError(PatchError):
    """Raised when copying, seeking or writing the output file fails."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 operation: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        file_details = details or {}
        if file_path:
            file_details['file_path'] = str(file_path)
        if operation:
            file_details['operation'] = operation
        super().__init__(message, "IO_ERROR", file_details)
