"""Typed values exchanged with the light client."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from lightgate.client.codec import parse_hex_bytes, parse_quantity

ADDRESS_LENGTH = 20
HASH_LENGTH = 32

# Block references accepted inside log filters (eth_getLogs / eth_newFilter).
FILTER_BLOCK_TAGS = frozenset({"latest", "earliest", "pending", "safe", "finalized"})


class BlockTag(str, Enum):
    """Symbolic block reference. Only the chain head is supported."""
    LATEST = "latest"


def _address(value: Any) -> bytes | None:
    if value is None:
        return None
    return parse_hex_bytes(value, ADDRESS_LENGTH)


def _hash(value: Any) -> bytes | None:
    if value is None:
        return None
    return parse_hex_bytes(value, HASH_LENGTH)


def _quantity(value: Any) -> int | None:
    if value is None:
        return None
    return parse_quantity(value)


class CallRequest(BaseModel):
    """Transaction-shaped request for eth_call / eth_estimateGas."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    from_: bytes | None = Field(default=None, alias="from")
    to: bytes | None = None
    gas: int | None = None
    gas_price: int | None = None
    max_fee_per_gas: int | None = None
    max_priority_fee_per_gas: int | None = None
    value: int | None = None
    nonce: int | None = None
    chain_id: int | None = None
    type: int | None = None
    input: bytes | None = None
    data: bytes | None = None
    access_list: list[dict[str, Any]] | None = None

    @field_validator("from_", "to", mode="before")
    @classmethod
    def _check_address(cls, value: Any) -> bytes | None:
        return _address(value)

    @field_validator(
        "gas",
        "gas_price",
        "max_fee_per_gas",
        "max_priority_fee_per_gas",
        "value",
        "nonce",
        "chain_id",
        "type",
        mode="before",
    )
    @classmethod
    def _check_quantity(cls, value: Any) -> int | None:
        return _quantity(value)

    @field_validator("input", "data", mode="before")
    @classmethod
    def _check_bytes(cls, value: Any) -> bytes | None:
        if value is None:
            return None
        return parse_hex_bytes(value)

    @model_validator(mode="after")
    def _check_fee_fields(self) -> "CallRequest":
        if self.gas_price is not None and (
            self.max_fee_per_gas is not None or self.max_priority_fee_per_gas is not None
        ):
            raise ValueError("gasPrice cannot be combined with EIP-1559 fee fields")
        if self.input is not None and self.data is not None and self.input != self.data:
            raise ValueError("input and data must match when both are given")
        return self


class LogFilter(BaseModel):
    """Log query / filter criteria."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    from_block: str | int | None = None
    to_block: str | int | None = None
    block_hash: bytes | None = None
    address: bytes | list[bytes] | None = None
    topics: list[bytes | list[bytes] | None] | None = None

    @field_validator("from_block", "to_block", mode="before")
    @classmethod
    def _check_block(cls, value: Any) -> str | int | None:
        if value is None:
            return None
        if isinstance(value, str) and value in FILTER_BLOCK_TAGS:
            return value
        return parse_quantity(value)

    @field_validator("block_hash", mode="before")
    @classmethod
    def _check_block_hash(cls, value: Any) -> bytes | None:
        return _hash(value)

    @field_validator("address", mode="before")
    @classmethod
    def _check_address(cls, value: Any) -> bytes | list[bytes] | None:
        if isinstance(value, list):
            return [_address(item) for item in value]
        return _address(value)

    @field_validator("topics", mode="before")
    @classmethod
    def _check_topics(cls, value: Any) -> list[Any] | None:
        if value is None:
            return None
        if not isinstance(value, list):
            raise ValueError("topics must be an array")
        if len(value) > 4:
            raise ValueError("at most 4 topic positions are allowed")
        out: list[Any] = []
        for entry in value:
            if isinstance(entry, list):
                out.append([_hash(item) for item in entry])
            else:
                out.append(_hash(entry))
        return out

    @model_validator(mode="after")
    def _check_range(self) -> "LogFilter":
        if self.block_hash is not None and (self.from_block is not None or self.to_block is not None):
            raise ValueError("blockHash cannot be combined with fromBlock/toBlock")
        return self


class Block(BaseModel):
    """Block header fields the gateway types; everything else is carried verbatim."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    number: int | None = None
    hash: bytes | None = None
    parent_hash: bytes | None = None
    timestamp: int = 0
    gas_limit: int = 0
    gas_used: int = 0
    base_fee_per_gas: int | None = None
    miner: bytes | None = None
    transactions: list[Any] = Field(default_factory=list)

    @field_validator("number", "timestamp", "gas_limit", "gas_used", "base_fee_per_gas", mode="before")
    @classmethod
    def _check_quantity(cls, value: Any) -> int | None:
        return _quantity(value)

    @field_validator("hash", "parent_hash", mode="before")
    @classmethod
    def _check_hash(cls, value: Any) -> bytes | None:
        return _hash(value)

    @field_validator("miner", mode="before")
    @classmethod
    def _check_miner(cls, value: Any) -> bytes | None:
        return _address(value)
