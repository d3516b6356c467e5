"""Hex codec shared by the RPC layer and the HTTP light client.

Quantities are rendered the conventional chain-RPC way: lowercase, 0x-prefixed,
no leading zeros (zero is "0x0"). Byte strings keep their full width.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def strip_hex_prefix(value: str) -> str:
    if value.startswith(("0x", "0X")):
        return value[2:]
    return value


def parse_hex_bytes(value: Any, length: int | None = None, *, require_prefix: bool = False) -> bytes:
    """Parse a hex string into bytes, optionally enforcing an exact byte length."""
    if not isinstance(value, str):
        raise ValueError(f"expected hex string, got {type(value).__name__}")
    if require_prefix and not value.startswith(("0x", "0X")):
        raise ValueError("hex string must be 0x-prefixed")
    digits = strip_hex_prefix(value)
    if any(ch not in _HEX_DIGITS for ch in digits):
        raise ValueError("invalid hex characters")
    if len(digits) % 2:
        raise ValueError("odd-length hex string")
    raw = bytes.fromhex(digits)
    if length is not None and len(raw) != length:
        raise ValueError(f"expected {length} bytes, got {len(raw)}")
    return raw


def parse_quantity(value: Any) -> int:
    """Parse a 0x-prefixed hex quantity into a non-negative int."""
    if isinstance(value, bool):
        raise ValueError("expected hex quantity, got boolean")
    if isinstance(value, int):
        if value < 0:
            raise ValueError("quantity must be non-negative")
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected hex quantity, got {type(value).__name__}")
    if not value.startswith(("0x", "0X")):
        raise ValueError("hex quantity must be 0x-prefixed")
    digits = value[2:]
    if not digits or any(ch not in _HEX_DIGITS for ch in digits):
        raise ValueError("invalid hex quantity")
    return int(digits, 16)


def to_quantity(value: int) -> str:
    if value < 0:
        raise ValueError("quantity must be non-negative")
    return hex(value)


def to_hex(value: bytes) -> str:
    return "0x" + bytes(value).hex()


def encode_value(value: Any) -> Any:
    """Render a typed client value as a JSON-compatible chain-RPC value."""
    if isinstance(value, Enum):
        return encode_value(value.value)
    if value is None or isinstance(value, (bool, str, float)):
        return value
    if isinstance(value, int):
        return to_quantity(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return to_hex(bytes(value))
    if isinstance(value, BaseModel):
        return encode_value(value.model_dump(by_alias=True, exclude_none=True))
    if isinstance(value, Mapping):
        return {str(k): encode_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode_value(item) for item in value]
    raise TypeError(f"cannot encode {type(value).__name__} as an RPC value")
