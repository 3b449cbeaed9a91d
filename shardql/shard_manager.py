"""Coordinator-side registry of table shards."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from shardql.shard_distribution import ShardType

_log = logging.getLogger(__name__)


@dataclass
class TableShard:
    """A slice of a table held by one worker."""

    shard_id: str
    worker_id: str
    table_name: str
    key_range: Optional[tuple[str, str]]
    row_count: int


def _demo_shards() -> dict[str, list[TableShard]]:
    return {
        "users": [
            TableShard("users_shard_1", "worker1", "users", ("A", "M"), 1000),
            TableShard("users_shard_2", "worker2", "users", ("N", "Z"), 1200),
        ],
        "orders": [
            TableShard("orders_shard_1", "worker1", "orders", ("1", "5000"), 5000),
            TableShard("orders_shard_2", "worker2", "orders", ("5001", "10000"), 5000),
            TableShard("orders_shard_3", "worker3", "orders", ("10001", "15000"), 5000),
        ],
    }


class ShardManager:
    """Tracks which worker holds which shard of each table."""

    def __init__(self, shards: Optional[Mapping[str, list[TableShard]]] = None) -> None:
        if shards is None:
            self._shards = _demo_shards()
        else:
            self._shards = {table: list(items) for table, items in shards.items()}
        self.shard_type = ShardType.HASH_BASED

    def get_shards_for_table(self, table_name: str) -> list[TableShard]:
        """Copies of the shards of ``table_name``; empty when it has none."""
        shards = self._shards.get(table_name)
        if shards is None:
            _log.debug("No shards found for table: %s", table_name)
            return []
        return copy.deepcopy(shards)

    def get_worker_shards(self, worker_id: str) -> list[TableShard]:
        """Copies of every shard held by ``worker_id``."""
        return [
            copy.deepcopy(shard)
            for shards in self._shards.values()
            for shard in shards
            if shard.worker_id == worker_id
        ]

    def add_shard(self, table_name: str, shard: TableShard) -> None:
        self._shards.setdefault(table_name, []).append(shard)

    def get_shard_distribution(self) -> dict[str, list[str]]:
        """Each table's workers, without repeats, in shard order."""
        return {
            table: list(dict.fromkeys(shard.worker_id for shard in shards))
            for table, shards in self._shards.items()
        }

    def get_total_rows(self) -> int:
        return sum(shard.row_count for shards in self._shards.values() for shard in shards)