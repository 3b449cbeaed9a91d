"""A single row of table data."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Iterable, Optional


@dataclass
class Row:
    """Ordered column values plus the table, worker and shard they belong to."""

    values: list[str]
    table_name: str = "unknown"
    metadata: dict[str, str] = field(default_factory=dict)
    worker_id: Optional[str] = None
    shard_id: Optional[str] = None

    def get_value(self, index: int) -> Optional[str]:
        """Return the value at ``index``, or None when there is no such column."""
        if 0 <= index < len(self.values):
            return self.values[index]
        return None

    def set_value(self, index: int, value: str) -> None:
        """Replace the value at ``index``; raise IndexError when out of bounds."""
        if not 0 <= index < len(self.values):
            raise IndexError(
                f"Index {index} out of bounds for row with {len(self.values)} columns"
            )
        self.values[index] = value

    def add_value(self, value: str) -> None:
        """Append a value to the end of the row."""
        self.values.append(value)

    def column_count(self) -> int:
        return len(self.values)

    def is_empty(self) -> bool:
        return not self.values

    def set_metadata(self, key: str, value: str) -> None:
        self.metadata[key] = value

    def get_metadata(self, key: str) -> Optional[str]:
        return self.metadata.get(key)

    def project_columns(self, column_indices: Iterable[int]) -> "Row":
        """Return a new row holding only the given columns, in the given order."""
        projected = []
        for index in column_indices:
            value = self.get_value(index)
            if value is None:
                raise IndexError(f"Column index {index} not found")
            projected.append(value)
        return Row(
            values=projected,
            table_name=self.table_name,
            metadata=dict(self.metadata),
            worker_id=self.worker_id,
            shard_id=self.shard_id,
        )

    def to_json(self) -> str:
        """Serialise the row as compact JSON."""
        return json.dumps(
            {
                "values": self.values,
                "metadata": self.metadata,
                "table_name": self.table_name,
                "worker_id": self.worker_id,
                "shard_id": self.shard_id,
            },
            separators=(",", ":"),
        )

    def __str__(self) -> str:
        return ",".join(self.values)