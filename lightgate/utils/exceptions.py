"""
Exception hierarchy and error handling utilities for lightgate.

Provides:
- Custom exception classes with error codes
- Error categorization (recoverable, retryable, fatal)
- Safe error message formatting (no credential leak from RPC URLs)
"""

from __future__ import annotations

import asyncio
import json
import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    RECOVERABLE = "recoverable"
    RETRYABLE = "retryable"
    FATAL = "fatal"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"


class LightGateError(Exception):
    """Base exception for all lightgate errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


class AlreadyRunningError(LightGateError):
    """A light client is already published or being initialized."""

    def __init__(self, message: str = "Light client is already running"):
        super().__init__(message, code="ALREADY_RUNNING", category=ErrorCategory.CONFLICT)


class NotInitializedError(LightGateError):
    """No light client has been published yet."""

    def __init__(self, message: str = "Light client not initialized"):
        super().__init__(message, code="NOT_INITIALIZED", category=ErrorCategory.UNAVAILABLE)


class ClientConfigError(LightGateError):
    """Light client cannot be built from the given configuration."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="CLIENT_CONFIG_ERROR", category=ErrorCategory.VALIDATION, details=details)


class ClientStartError(LightGateError):
    """Construction, start or sync of the light client failed."""

    def __init__(self, stage: str, message: str):
        super().__init__(
            f"Failed to {stage} client: {message}",
            code="CLIENT_START_FAILED",
            category=ErrorCategory.RETRYABLE,
            details={"stage": stage},
        )
        self.stage = stage


class ClientRequestError(LightGateError):
    """A call against the light client's upstream failed."""

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        status_code: int | None = None,
        is_retryable: bool = False,
    ):
        category = ErrorCategory.RETRYABLE if is_retryable else ErrorCategory.FATAL
        super().__init__(
            message,
            code="CLIENT_REQUEST_ERROR",
            category=category,
            details={"method": method, "status_code": status_code, "is_retryable": is_retryable},
        )


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    # Provider keys embedded in RPC URL paths, e.g. https://eth-mainnet.g.alchemy.com/v2/<key>
    re.compile(r"(?<=/v[0-9]/)[a-zA-Z0-9_\-]{16,}"),
    re.compile(r"(?<=://)[^/\s:@]+:[^/\s@]+(?=@)"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove sensitive information from error messages."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def classify_exception(exc: BaseException) -> tuple[str, ErrorCategory, bool]:
    """
    Classify an exception and return (error_code, category, should_retry).

    Returns:
        Tuple of (error_code, category, should_retry)
    """
    exc_str = str(exc).lower()

    if isinstance(exc, LightGateError):
        return exc.code, exc.category, exc.category == ErrorCategory.RETRYABLE

    if isinstance(exc, asyncio.TimeoutError):
        return "TIMEOUT", ErrorCategory.TIMEOUT, True

    if isinstance(exc, ConnectionError):
        return "CONNECTION_ERROR", ErrorCategory.RETRYABLE, True

    if isinstance(exc, json.JSONDecodeError):
        return "JSON_PARSE_ERROR", ErrorCategory.VALIDATION, False

    if isinstance(exc, ValueError):
        return "INVALID_VALUE", ErrorCategory.VALIDATION, False

    if isinstance(exc, KeyError):
        return "MISSING_KEY", ErrorCategory.VALIDATION, False

    if isinstance(exc, TypeError):
        return "TYPE_ERROR", ErrorCategory.VALIDATION, False

    if "timeout" in exc_str or "timed out" in exc_str:
        return "TIMEOUT", ErrorCategory.TIMEOUT, True

    if "connection" in exc_str or "network" in exc_str:
        return "CONNECTION_ERROR", ErrorCategory.RETRYABLE, True

    return "INTERNAL_ERROR", ErrorCategory.FATAL, False


def describe_exception(exc: BaseException) -> str:
    """Human-readable, sanitized description of an exception."""
    text = str(exc).strip()
    if not text:
        text = type(exc).__name__
    return sanitize_error_message(text)
