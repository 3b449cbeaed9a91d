"""Parsed SQL queries."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from shardql.condition import Condition
from shardql.join import Join


class QueryType(Enum):
    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value


def _generated_id() -> str:
    return f"query_{time.time_ns() // 1_000_000}"


@dataclass
class Query:
    """A SQL query with its selected columns, tables, conditions and joins."""

    sql: str
    query_type: QueryType
    query_id: str = field(default_factory=_generated_id)
    select_columns: list[str] = field(default_factory=list)
    from_tables: list[str] = field(default_factory=list)
    where_conditions: Optional[list[Condition]] = None
    joins: Optional[list[Join]] = None
    metadata: dict[str, str] = field(default_factory=dict)

    def add_condition(self, condition: Condition) -> None:
        if self.where_conditions is None:
            self.where_conditions = []
        self.where_conditions.append(condition)

    def add_join(self, join: Join) -> None:
        if self.joins is None:
            self.joins = []
        self.joins.append(join)

    def is_select(self) -> bool:
        return self.query_type is QueryType.SELECT

    def has_conditions(self) -> bool:
        return bool(self.where_conditions)

    def has_joins(self) -> bool:
        return bool(self.joins)