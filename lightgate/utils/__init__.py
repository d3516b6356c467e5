"""Utility functions for lightgate."""

from lightgate.utils.helpers import ensure_dir, get_data_path
from lightgate.utils.exceptions import (
    LightGateError,
    AlreadyRunningError,
    NotInitializedError,
    ClientConfigError,
    ClientStartError,
    ClientRequestError,
    ErrorCategory,
    classify_exception,
    describe_exception,
    sanitize_error_message,
)

__all__ = [
    "ensure_dir",
    "get_data_path",
    "LightGateError",
    "AlreadyRunningError",
    "NotInitializedError",
    "ClientConfigError",
    "ClientStartError",
    "ClientRequestError",
    "ErrorCategory",
    "classify_exception",
    "describe_exception",
    "sanitize_error_message",
]
