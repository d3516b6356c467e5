"""Common RPC error-boundary helpers for dispatch."""

from __future__ import annotations

from loguru import logger

from lightgate.rpc.errors import RpcError, to_rpc_error
from lightgate.utils.exceptions import (
    ErrorCategory,
    LightGateError,
    NotInitializedError,
    classify_exception,
    sanitize_error_message,
)


def rejected_request_error(*, method: str | None, exc: RpcError) -> RpcError:
    """Protocol, lookup and parameter failures raised by the dispatcher itself."""
    logger.debug("RPC rejected method={} code={}: {}", method, exc.code, exc.message)
    return exc


def not_initialized_error(*, method: str | None, exc: NotInitializedError) -> RpcError:
    logger.info("RPC method {} called before light client initialization", method)
    return to_rpc_error(exc)


def client_failure_error(*, method: str | None, exc: Exception) -> RpcError:
    """Map light client failures to INTERNAL_ERROR with a sanitized description."""
    code, category, _ = classify_exception(exc)
    sanitized = sanitize_error_message(str(exc))
    if isinstance(exc, LightGateError) or category in (ErrorCategory.RETRYABLE, ErrorCategory.TIMEOUT):
        logger.warning("RPC method {} failed with [{}]: {}", method, code, sanitized)
    else:
        logger.opt(exception=exc).error("RPC method {} failed with [{}]: {}", method, code, sanitized)
    return to_rpc_error(exc)


def error_for_exception(*, method: str | None, exc: Exception) -> RpcError:
    if isinstance(exc, RpcError):
        return rejected_request_error(method=method, exc=exc)
    if isinstance(exc, NotInitializedError):
        return not_initialized_error(method=method, exc=exc)
    return client_failure_error(method=method, exc=exc)
