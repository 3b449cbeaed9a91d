"""Worker-local in-memory table storage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Table:
    """A named table of string-valued rows."""

    name: str
    columns: list[str]
    rows: list[list[str]] = field(default_factory=list)


def _demo_tables() -> list[Table]:
    return [
        Table(
            "users",
            ["id", "name", "age", "email"],
            [
                ["1", "John Doe", "30", "john@example.com"],
                ["2", "Jane Smith", "25", "jane@example.com"],
                ["3", "Bob Johnson", "35", "bob@example.com"],
            ],
        ),
        Table(
            "orders",
            ["id", "user_id", "product", "amount", "date"],
            [
                ["1", "1", "Laptop", "999.99", "2024-01-15"],
                ["2", "2", "Mouse", "29.99", "2024-01-16"],
                ["3", "1", "Keyboard", "79.99", "2024-01-17"],
            ],
        ),
        Table(
            "products",
            ["id", "name", "price", "category"],
            [
                ["1", "Laptop", "999.99", "Electronics"],
                ["2", "Mouse", "29.99", "Accessories"],
                ["3", "Keyboard", "79.99", "Accessories"],
            ],
        ),
    ]


class DataStore:
    """Tables held by a worker, keyed by name."""

    def __init__(self) -> None:
        self._tables: dict[str, Table] = {table.name: table for table in _demo_tables()}

    def get_table(self, table_name: str) -> Optional[Table]:
        return self._tables.get(table_name)

    def get_all_tables(self) -> list[Table]:
        return list(self._tables.values())

    def get_table_count(self) -> int:
        return len(self._tables)

    def get_total_rows(self) -> int:
        return sum(len(table.rows) for table in self._tables.values())

    def add_table(self, table: Table) -> None:
        """Store ``table``, replacing any table of the same name."""
        self._tables[table.name] = table

    def get_table_names(self) -> list[str]:
        return list(self._tables)