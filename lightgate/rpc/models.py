"""JSON-RPC 2.0 response envelopes."""

from __future__ import annotations

from typing import Any

from lightgate.rpc.errors import JSONRPC_VERSION, RpcError

JsonDict = dict[str, Any]

# Marks a request without an "id" key; a JSON null id is still echoed.
NO_ID: Any = object()


def request_id(request: Any) -> Any:
    if isinstance(request, dict) and "id" in request:
        return request["id"]
    return NO_ID


def _envelope(req_id: Any) -> JsonDict:
    envelope: JsonDict = {"jsonrpc": JSONRPC_VERSION}
    if req_id is not NO_ID:
        envelope["id"] = req_id
    return envelope


def success_response(req_id: Any, result: Any) -> JsonDict:
    envelope = _envelope(req_id)
    envelope["result"] = result
    return envelope


def error_response(req_id: Any, error: RpcError) -> JsonDict:
    envelope = _envelope(req_id)
    envelope["error"] = error.to_dict()
    return envelope
