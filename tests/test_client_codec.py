"""Tests for hex encoding of light client values."""

from __future__ import annotations

import pytest

from lightgate.client.codec import encode_value, parse_hex_bytes, parse_quantity, to_quantity
from lightgate.client.types import Block, BlockTag, CallRequest


def test_quantities_have_no_leading_zeros() -> None:
    assert to_quantity(0) == "0x0"
    assert to_quantity(1) == "0x1"
    assert to_quantity(4096) == "0x1000"
    with pytest.raises(ValueError):
        to_quantity(-1)


def test_encode_value_scalars() -> None:
    assert encode_value(0) == "0x0"
    assert encode_value(255) == "0xff"
    assert encode_value(True) is True
    assert encode_value(None) is None
    assert encode_value(b"") == "0x"
    assert encode_value(b"\x00\x01") == "0x0001"
    assert encode_value(BlockTag.LATEST) == "latest"


def test_encode_value_containers() -> None:
    assert encode_value([1, b"\xff", {"k": 2}]) == ["0x1", "0xff", {"k": "0x2"}]


def test_encode_model_uses_wire_names() -> None:
    request = CallRequest(from_="0x" + "01" * 20, gas="0x10")
    assert encode_value(request) == {"from": "0x" + "01" * 20, "gas": "0x10"}

    block = Block.model_validate(
        {"number": "0x1b4", "gasLimit": "0x1c9c380", "stateRoot": "0x" + "aa" * 32, "transactions": []}
    )
    encoded = encode_value(block)
    assert encoded["number"] == "0x1b4"
    assert encoded["gasLimit"] == "0x1c9c380"
    assert encoded["stateRoot"] == "0x" + "aa" * 32


def test_encode_value_rejects_unknown_types() -> None:
    with pytest.raises(TypeError):
        encode_value(object())


def test_parse_hex_bytes() -> None:
    assert parse_hex_bytes("0xABcd") == b"\xab\xcd"
    assert parse_hex_bytes("abcd") == b"\xab\xcd"
    with pytest.raises(ValueError):
        parse_hex_bytes("abcd", require_prefix=True)
    with pytest.raises(ValueError, match="expected 2 bytes"):
        parse_hex_bytes("0xab", 2)


def test_parse_quantity() -> None:
    assert parse_quantity("0x0") == 0
    assert parse_quantity("0X1F") == 31
    assert parse_quantity(12) == 12
    for bad in ("0x", "12", True, -1, 1.5):
        with pytest.raises(ValueError):
            parse_quantity(bad)
