"""Shard keys and their hashing."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

_M64 = 0xFFFFFFFFFFFFFFFF
_INTEGER = re.compile(r"[+-]?[0-9]+")
_I32 = (-(1 << 31), (1 << 31) - 1)
_I64 = (-(1 << 63), (1 << 63) - 1)

ParsedValue = Union[str, int, float, bool]


class KeyType(Enum):
    """Data types of shard key values."""

    STRING = "STRING"
    INTEGER = "INTEGER"
    LONG = "LONG"
    DOUBLE = "DOUBLE"
    BOOLEAN = "BOOLEAN"
    DATE = "DATE"

    def __str__(self) -> str:
        return self.value


def _rotl(x: int, b: int) -> int:
    return ((x << b) | (x >> (64 - b))) & _M64


def _sipround(v0: int, v1: int, v2: int, v3: int) -> tuple[int, int, int, int]:
    v0 = (v0 + v1) & _M64
    v1 = _rotl(v1, 13) ^ v0
    v0 = _rotl(v0, 32)
    v2 = (v2 + v3) & _M64
    v3 = _rotl(v3, 16) ^ v2
    v0 = (v0 + v3) & _M64
    v3 = _rotl(v3, 21) ^ v0
    v2 = (v2 + v1) & _M64
    v1 = _rotl(v1, 17) ^ v2
    v2 = _rotl(v2, 32)
    return v0, v1, v2, v3


def _siphash13(data: bytes, k0: int = 0, k1: int = 0) -> int:
    """SipHash-1-3 of ``data`` with the given 64-bit keys."""
    v0 = k0 ^ 0x736F6D6570736575
    v1 = k1 ^ 0x646F72616E646F6D
    v2 = k0 ^ 0x6C7967656E657261
    v3 = k1 ^ 0x7465646279746573
    whole = len(data) - len(data) % 8
    for start in range(0, whole, 8):
        m = int.from_bytes(data[start:start + 8], "little")
        v3 ^= m
        v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
        v0 ^= m
    b = ((len(data) & 0xFF) << 56) | int.from_bytes(data[whole:], "little")
    v3 ^= b
    v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
    v0 ^= b
    v2 ^= 0xFF
    for _ in range(3):
        v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
    return v0 ^ v1 ^ v2 ^ v3


def _parse_int(text: str, bounds: tuple[int, int], kind: str) -> int:
    if _INTEGER.fullmatch(text):
        number = int(text)
        if bounds[0] <= number <= bounds[1]:
            return number
    raise ValueError(f"Cannot parse '{text}' as {kind}")


def _parse_float(text: str) -> float:
    if text == text.strip() and "_" not in text:
        try:
            return float(text)
        except ValueError:
            pass
    raise ValueError(f"Cannot parse '{text}' as double")


def _parse_bool(text: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"Cannot parse '{text}' as boolean")


@dataclass
class ShardKey:
    """A column value used to place a row on a shard."""

    column_name: str
    value: str
    data_type: KeyType
    is_primary_key: bool = False

    def calculate_hash(self) -> int:
        """32-bit hash of the value; 0 for an empty value."""
        if not self.value:
            return 0
        return _siphash13(self.value.encode("utf-8") + b"\xff") & 0xFFFFFFFF

    def calculate_consistent_hash(self, num_shards: int) -> int:
        """Shard index in ``range(num_shards)``; 0 for an empty value."""
        if not self.value:
            return 0
        return self.calculate_hash() % num_shards

    def parse_value(self) -> ParsedValue:
        """Convert the value to its data type; raise ValueError when it does not fit."""
        if self.data_type is KeyType.INTEGER:
            return _parse_int(self.value, _I32, "integer")
        if self.data_type is KeyType.LONG:
            return _parse_int(self.value, _I64, "long")
        if self.data_type is KeyType.DOUBLE:
            return _parse_float(self.value)
        if self.data_type is KeyType.BOOLEAN:
            return _parse_bool(self.value)
        return self.value

    def is_valid(self) -> bool:
        return bool(self.column_name) and bool(self.value)

    def __str__(self) -> str:
        return (
            f"ShardKey{{column={self.column_name}, value={self.value}, "
            f"type={self.data_type}, primary={str(self.is_primary_key).lower()}}}"
        )