"""JSON-RPC 2.0 error codes and the gateway's error taxonomy.

- -32700: Parse error
- -32600: Invalid Request
- -32601: Method not found
- -32602: Invalid params
- -32603: Internal error
- -32000: Light client not initialized (server-defined range)
"""

from __future__ import annotations

from typing import Any

from lightgate.utils.exceptions import NotInitializedError, describe_exception

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
NOT_INITIALIZED = -32000

JSONRPC_VERSION = "2.0"


class RpcError(RuntimeError):
    """JSON-RPC 2.0 error with code and message."""

    code = INTERNAL_ERROR

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"code": int(self.code), "message": str(self.message)}


class ParseError(RpcError):
    code = PARSE_ERROR

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(f"Parse error: {detail}" if detail else "Parse error")


class InvalidRequestError(RpcError):
    code = INVALID_REQUEST


class MethodNotFoundError(RpcError):
    code = METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        super().__init__(f"Method not found: {method}")
        self.method = method


class InvalidParamsError(RpcError):
    code = INVALID_PARAMS


class NotInitializedRpcError(RpcError):
    code = NOT_INITIALIZED

    def __init__(self, message: str = "Light client not initialized") -> None:
        super().__init__(message)


class InternalRpcError(RpcError):
    code = INTERNAL_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(f"Internal error: {detail}")


def to_rpc_error(exc: BaseException) -> RpcError:
    """Single translation step from any failure to a JSON-RPC error."""
    if isinstance(exc, RpcError):
        return exc
    if isinstance(exc, NotInitializedError):
        return NotInitializedRpcError(exc.message)
    return InternalRpcError(describe_exception(exc))
