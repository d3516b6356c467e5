"""Positional parameter decoders.

Each decoder turns one untyped JSON value into the typed value the light
client expects, raising InvalidParamsError with a message naming the
expected shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from pydantic import BaseModel, ValidationError

from lightgate.client.codec import parse_hex_bytes, parse_quantity
from lightgate.client.types import ADDRESS_LENGTH, HASH_LENGTH, BlockTag, CallRequest, LogFilter
from lightgate.rpc.errors import InvalidParamsError


@dataclass(frozen=True, slots=True)
class Param:
    """One positional parameter: a label for messages and its decoder."""

    kind: str
    decode: Callable[[Any], Any]


def _block_tag(value: Any) -> BlockTag:
    if not isinstance(value, str) or value != BlockTag.LATEST.value:
        raise InvalidParamsError("Invalid block tag: only 'latest' is supported")
    return BlockTag.LATEST


def _address(value: Any) -> bytes:
    try:
        return parse_hex_bytes(value, ADDRESS_LENGTH)
    except ValueError as exc:
        raise InvalidParamsError(f"Invalid address format: expected 20-byte hex string ({exc})") from exc


def _hash(value: Any) -> bytes:
    try:
        return parse_hex_bytes(value, HASH_LENGTH)
    except ValueError as exc:
        raise InvalidParamsError(f"Invalid hash format: expected 32-byte hex string ({exc})") from exc


def _flag(value: Any) -> bool:
    if not isinstance(value, bool):
        raise InvalidParamsError("Invalid boolean flag: expected true or false")
    return value


def _quantity(value: Any) -> int:
    if not isinstance(value, str):
        raise InvalidParamsError("Invalid quantity: expected 0x-prefixed hex string")
    try:
        return parse_quantity(value)
    except ValueError as exc:
        raise InvalidParamsError(f"Invalid quantity: {exc}") from exc


def _raw_bytes(value: Any) -> bytes:
    try:
        raw = parse_hex_bytes(value)
    except ValueError as exc:
        raise InvalidParamsError(f"Invalid transaction bytes: expected hex string ({exc})") from exc
    if not raw:
        raise InvalidParamsError("Invalid transaction bytes: empty payload")
    return raw


def _model(model: type[BaseModel], label: str) -> Callable[[Any], BaseModel]:
    def decode(value: Any) -> BaseModel:
        if not isinstance(value, dict):
            raise InvalidParamsError(f"Invalid {label}: expected object")
        try:
            return model.model_validate(value)
        except ValidationError as exc:
            raise InvalidParamsError(f"Invalid {label}: {_format_validation_error(exc)}") from exc

    return decode


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "value"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


BLOCK = Param("block tag", _block_tag)
ADDRESS = Param("address", _address)
HASH = Param("32-byte hash", _hash)
SLOT = Param("32-byte storage slot", _hash)
FLAG = Param("boolean", _flag)
QUANTITY = Param("hex quantity", _quantity)
RAW_TX = Param("raw transaction", _raw_bytes)
CALL_REQUEST = Param("call request", _model(CallRequest, "call request"))
LOG_FILTER = Param("log filter", _model(LogFilter, "log filter"))


def decode_params(params: Sequence[Any], spec: Sequence[Param]) -> list[Any]:
    """Decode positional params in order; every position is required."""
    decoded: list[Any] = []
    for index, param in enumerate(spec):
        if index >= len(params):
            raise InvalidParamsError(f"Missing parameter {index}: expected {param.kind}")
        decoded.append(param.decode(params[index]))
    if len(params) > len(spec):
        raise InvalidParamsError(f"Too many parameters: expected {len(spec)}, got {len(params)}")
    return decoded
