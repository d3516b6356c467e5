"""JSON-RPC 2.0 façade over the light client."""

from lightgate.rpc.dispatcher import RpcDispatcher, validate_envelope
from lightgate.rpc.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    NOT_INITIALIZED,
    PARSE_ERROR,
    RpcError,
    to_rpc_error,
)
from lightgate.rpc.methods import METHODS, MethodSpec, supported_methods

__all__ = [
    "RpcDispatcher",
    "validate_envelope",
    "RpcError",
    "to_rpc_error",
    "MethodSpec",
    "METHODS",
    "supported_methods",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "NOT_INITIALIZED",
]
