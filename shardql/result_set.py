"""Result sets produced by query execution."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Iterable, Optional

from shardql.row import Row


def _row_to_dict(row: Row) -> dict:
    return {
        "values": row.values,
        "metadata": row.metadata,
        "table_name": row.table_name,
        "worker_id": row.worker_id,
        "shard_id": row.shard_id,
    }


@dataclass
class ResultSet:
    """Rows returned for a query, with column names and timing."""

    query_id: str
    rows: list[Row] = field(default_factory=list)
    column_names: list[str] = field(default_factory=list)
    execution_time_ms: int = 0
    metadata: dict[str, str] = field(default_factory=dict)

    def add_row(self, row: Row) -> None:
        self.rows.append(row)

    def add_rows(self, rows: Iterable[Row]) -> None:
        self.rows.extend(rows)

    def row_count(self) -> int:
        return len(self.rows)

    def column_count(self) -> int:
        return len(self.column_names)

    def is_empty(self) -> bool:
        return not self.rows

    def add_metadata(self, key: str, value: str) -> None:
        self.metadata[key] = value

    def get_metadata(self, key: str) -> Optional[str]:
        return self.metadata.get(key)

    def get_row(self, index: int) -> Optional[Row]:
        """Return the row at ``index``, or None when there is no such row."""
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def to_csv(self) -> str:
        """Header line of column names followed by one line per row."""
        lines = [",".join(self.column_names)]
        lines.extend(str(row) for row in self.rows)
        return "".join(line + "\n" for line in lines)

    def to_json(self) -> str:
        """Serialise the whole result set as indented JSON."""
        return json.dumps(
            {
                "query_id": self.query_id,
                "rows": [_row_to_dict(row) for row in self.rows],
                "column_names": self.column_names,
                "execution_time_ms": self.execution_time_ms,
                "metadata": self.metadata,
            },
            indent=2,
        )

    def clear(self) -> None:
        """Remove all rows."""
        self.rows.clear()

    def merge(self, other: "ResultSet") -> None:
        """Append the rows of ``other``, add its time and take over its metadata."""
        self.rows.extend(other.rows)
        self.execution_time_ms += other.execution_time_ms
        self.metadata.update(other.metadata)

    def __str__(self) -> str:
        text = (
            f"ResultSet for query: {self.query_id}\n"
            f"Rows: {self.row_count()}, Columns: {self.column_count()}\n"
            f"Execution time: {self.execution_time_ms}ms\n"
        )
        if self.rows:
            text += f"Data:\n{self.to_csv()}\n"
        return text