"""Strategies for distributing table rows over shards."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

_U32 = 0xFFFFFFFF
_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")


class ShardType(Enum):
    """Types of sharding strategies."""

    HASH_BASED = "HASH_BASED"
    RANGE_BASED = "RANGE_BASED"
    ROUND_ROBIN = "ROUND_ROBIN"
    CUSTOM = "CUSTOM"

    def __str__(self) -> str:
        return self.value


def _parse_i64(text: str) -> Optional[int]:
    if not _INTEGER.fullmatch(text):
        return None
    number = int(text)
    if not _I64_MIN <= number <= _I64_MAX:
        return None
    return number


@dataclass
class ShardDistribution:
    """How the rows of one table are spread over a number of shards."""

    table_name: str
    shard_type: ShardType
    shard_columns: list[str]
    num_shards: int
    distribution_params: dict[str, str] = field(default_factory=dict)
    is_replicated: bool = False
    replication_factor: int = 1

    @classmethod
    def hash_based(cls, table_name: str, shard_columns: list[str], num_shards: int) -> "ShardDistribution":
        return cls(table_name, ShardType.HASH_BASED, shard_columns, num_shards)

    @classmethod
    def range_based(cls, table_name: str, shard_columns: list[str], num_shards: int) -> "ShardDistribution":
        return cls(table_name, ShardType.RANGE_BASED, shard_columns, num_shards)

    @classmethod
    def round_robin(cls, table_name: str, shard_columns: list[str], num_shards: int) -> "ShardDistribution":
        return cls(table_name, ShardType.ROUND_ROBIN, shard_columns, num_shards)

    def with_replication(self, replication_factor: int) -> None:
        self.is_replicated = replication_factor > 1
        self.replication_factor = replication_factor

    def add_parameter(self, key: str, value: str) -> None:
        self.distribution_params[key] = value

    def get_parameter(self, key: str) -> Optional[str]:
        return self.distribution_params.get(key)

    def determine_shard_id(self, row_data: Mapping[str, str]) -> str:
        """Name the shard that a row with these shard-key values belongs to.

        Raises ValueError for the custom strategy, which has no built-in rule.
        """
        if self.shard_type is ShardType.HASH_BASED:
            return self._hash_based_shard(row_data)
        if self.shard_type is ShardType.RANGE_BASED:
            return self._range_based_shard(row_data)
        if self.shard_type is ShardType.ROUND_ROBIN:
            return self._round_robin_shard(row_data)
        raise ValueError("Custom sharding has no built-in shard assignment")

    def _shard_name(self, index: int) -> str:
        return f"{self.table_name}_shard_{index}"

    def _hash_based_shard(self, row_data: Mapping[str, str]) -> str:
        total = 0
        for column in self.shard_columns:
            value = row_data.get(column)
            if value is not None:
                encoded = value.encode("utf-8")
                total = (total + len(encoded) + sum(encoded)) & _U32
        return self._shard_name(total % self.num_shards)

    def _range_based_shard(self, row_data: Mapping[str, str]) -> str:
        if self.get_parameter("ranges") is not None and self.shard_columns:
            value = row_data.get(self.shard_columns[0])
            if value is not None:
                number = _parse_i64(value)
                if number is not None:
                    return self._shard_name((abs(number) & _U32) % self.num_shards)
        return self._hash_based_shard(row_data)

    def _round_robin_shard(self, row_data: Mapping[str, str]) -> str:
        total = 0
        for column in self.shard_columns:
            value = row_data.get(column)
            if value is not None:
                total = len(value.encode("utf-8")) & _U32
                break
        return self._shard_name(total % self.num_shards)

    def is_valid(self) -> bool:
        return (
            bool(self.table_name)
            and bool(self.shard_columns)
            and self.num_shards > 0
            and self.replication_factor > 0
        )

    def total_shards(self) -> int:
        """Number of shards including replicas."""
        return self.num_shards * self.replication_factor

    def __str__(self) -> str:
        return (
            f"ShardDistribution{{table={self.table_name}, type={self.shard_type}, "
            f"columns={json.dumps(self.shard_columns)}, shards={self.num_shards}, "
            f"replicated={str(self.is_replicated).lower()}}}"
        )