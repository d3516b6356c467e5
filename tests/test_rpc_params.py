"""Tests for positional parameter decoding."""

from __future__ import annotations

import pytest

from lightgate.client.types import BlockTag, CallRequest, LogFilter
from lightgate.rpc.errors import INVALID_PARAMS, InvalidParamsError
from lightgate.rpc.params import (
    ADDRESS,
    BLOCK,
    CALL_REQUEST,
    FLAG,
    HASH,
    LOG_FILTER,
    QUANTITY,
    RAW_TX,
    decode_params,
)

ADDR = "0x" + "ab" * 20


def test_block_tag_accepts_only_latest() -> None:
    assert decode_params(["latest"], [BLOCK]) == [BlockTag.LATEST]
    for bad in ("earliest", "pending", "0x10", 16, None):
        with pytest.raises(InvalidParamsError) as exc_info:
            decode_params([bad], [BLOCK])
        assert exc_info.value.code == INVALID_PARAMS
        assert "only 'latest' is supported" in exc_info.value.message


def test_address_accepts_mixed_case_and_checks_length() -> None:
    mixed = "0x" + "aB" * 20
    assert decode_params([mixed], [ADDRESS]) == [bytes.fromhex("ab" * 20)]
    for bad in ("0x" + "ab" * 19, "0x" + "zz" * 20, 123, "0xabc"):
        with pytest.raises(InvalidParamsError, match="Invalid address format"):
            decode_params([bad], [ADDRESS])


def test_hash_requires_32_bytes() -> None:
    assert decode_params(["0x" + "00" * 32], [HASH]) == [b"\x00" * 32]
    with pytest.raises(InvalidParamsError, match="Invalid hash format"):
        decode_params(["0x" + "00" * 20], [HASH])


def test_flag_and_quantity() -> None:
    assert decode_params([True], [FLAG]) == [True]
    with pytest.raises(InvalidParamsError):
        decode_params([1], [FLAG])

    assert decode_params(["0x0"], [QUANTITY]) == [0]
    assert decode_params(["0xff"], [QUANTITY]) == [255]
    for bad in (5, "10", "0x", "0xzz"):
        with pytest.raises(InvalidParamsError, match="Invalid quantity"):
            decode_params([bad], [QUANTITY])


def test_raw_transaction_bytes() -> None:
    assert decode_params(["0x02f8"], [RAW_TX]) == [b"\x02\xf8"]
    with pytest.raises(InvalidParamsError, match="empty payload"):
        decode_params(["0x"], [RAW_TX])


def test_call_request_decodes_camel_case_fields() -> None:
    [request] = decode_params(
        [{"from": ADDR, "to": ADDR, "gas": "0x5208", "maxFeePerGas": "0x1", "input": "0xdeadbeef"}],
        [CALL_REQUEST],
    )
    assert isinstance(request, CallRequest)
    assert request.from_ == bytes.fromhex("ab" * 20)
    assert request.gas == 21000
    assert request.max_fee_per_gas == 1
    assert request.input == bytes.fromhex("deadbeef")


@pytest.mark.parametrize(
    "value",
    [
        "not-an-object",
        {"to": "0x1234"},
        {"gasPrice": "0x1", "maxFeePerGas": "0x2"},
        {"input": "0x01", "data": "0x02"},
        {"to": ADDR, "bogus": True},
    ],
)
def test_call_request_rejections(value) -> None:
    with pytest.raises(InvalidParamsError, match="Invalid call request"):
        decode_params([value], [CALL_REQUEST])


def test_log_filter() -> None:
    topic = "0x" + "cd" * 32
    [log_filter] = decode_params(
        [{"fromBlock": "0x10", "toBlock": "latest", "address": [ADDR], "topics": [topic, None, [topic, topic]]}],
        [LOG_FILTER],
    )
    assert isinstance(log_filter, LogFilter)
    assert log_filter.from_block == 16
    assert log_filter.to_block == "latest"
    assert log_filter.topics[1] is None
    assert len(log_filter.topics[2]) == 2


def test_log_filter_block_hash_is_exclusive() -> None:
    with pytest.raises(InvalidParamsError, match="blockHash"):
        decode_params([{"blockHash": "0x" + "00" * 32, "fromBlock": "0x1"}], [LOG_FILTER])


def test_arity() -> None:
    with pytest.raises(InvalidParamsError, match="Missing parameter 0: expected address"):
        decode_params([], [ADDRESS, BLOCK])
    with pytest.raises(InvalidParamsError, match="Too many parameters: expected 1, got 2"):
        decode_params(["latest", "latest"], [BLOCK])
    assert decode_params([], []) == []
