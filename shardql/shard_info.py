"""Metadata about a single data shard."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from shardql.shard_distribution import ShardType


class ShardStatus(Enum):
    ACTIVE = "ACTIVE"
    MIGRATING = "MIGRATING"
    INACTIVE = "INACTIVE"
    FAILED = "FAILED"

    def __str__(self) -> str:
        return self.value


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass
class ShardInfo:
    """Where a shard lives, how large it is and what state it is in."""

    shard_id: str
    worker_id: str
    table_name: str
    shard_type: ShardType
    shard_key: dict[str, str] = field(default_factory=dict)
    row_count: int = 0
    size_bytes: int = 0
    created_at: int = field(default_factory=_now_ms)
    last_updated: Optional[int] = None
    status: ShardStatus = ShardStatus.ACTIVE

    def __post_init__(self) -> None:
        if self.last_updated is None:
            self.last_updated = self.created_at

    def _touch(self) -> None:
        self.last_updated = _now_ms()

    def update_row_count(self, count: int) -> None:
        self.row_count = count
        self._touch()

    def update_size_bytes(self, size: int) -> None:
        self.size_bytes = size
        self._touch()

    def set_status(self, status: ShardStatus) -> None:
        self.status = status
        self._touch()

    def add_shard_key(self, key: str, value: str) -> None:
        self.shard_key[key] = value
        self._touch()

    def is_active(self) -> bool:
        return self.status is ShardStatus.ACTIVE

    def is_migrating(self) -> bool:
        return self.status is ShardStatus.MIGRATING

    def has_failed(self) -> bool:
        return self.status is ShardStatus.FAILED

    def age_ms(self) -> int:
        """Milliseconds since the shard was created."""
        return _now_ms() - self.created_at

    def time_since_update_ms(self) -> int:
        """Milliseconds since the shard was last changed."""
        return _now_ms() - self.last_updated

    def __str__(self) -> str:
        return (
            f"ShardInfo{{id={self.shard_id}, worker={self.worker_id}, "
            f"table={self.table_name}, type={self.shard_type}, "
            f"rows={self.row_count}, status={self.status}}}"
        )