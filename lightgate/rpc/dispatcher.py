"""JSON-RPC 2.0 dispatcher in front of the light client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lightgate.client.codec import encode_value
from lightgate.rpc.error_boundary import error_for_exception
from lightgate.rpc.errors import (
    JSONRPC_VERSION,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
)
from lightgate.rpc.methods import MethodSpec, resolve_method
from lightgate.rpc.models import JsonDict, error_response, request_id, success_response
from lightgate.rpc.params import decode_params

if TYPE_CHECKING:
    from lightgate.gateway.state import LightClientManager


def validate_envelope(request: Any) -> tuple[str, list[Any]]:
    """Check jsonrpc, method and params, in that order."""
    if not isinstance(request, dict) or request.get("jsonrpc") != JSONRPC_VERSION:
        raise InvalidRequestError("Invalid Request: jsonrpc must be '2.0'")
    method = request.get("method")
    if not isinstance(method, str):
        raise InvalidRequestError("Invalid Request: method must be a string")
    params = request.get("params")
    if not isinstance(params, list):
        raise InvalidParamsError("Invalid params: params must be an array")
    return method, params


class RpcDispatcher:
    """Stateless per-request translation between JSON-RPC and the light client."""

    def __init__(self, manager: LightClientManager):
        self._manager = manager

    async def dispatch(self, request: Any) -> JsonDict:
        """Handle one request. Failures are returned as error envelopes, never raised."""
        req_id = request_id(request)
        method: str | None = None
        try:
            method, params = validate_envelope(request)
            spec = resolve_method(method)
            if spec is None:
                raise MethodNotFoundError(method)
            result = await self._call(spec, params)
        except Exception as exc:
            return error_response(req_id, error_for_exception(method=method, exc=exc))
        return success_response(req_id, result)

    async def _call(self, spec: MethodSpec, params: list[Any]) -> Any:
        args = decode_params(params, spec.params)

        async def run(client: Any) -> Any:
            return encode_value(await spec.invoke(client, args))

        return await self._manager.with_client(run)
