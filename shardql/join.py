"""JOIN clauses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class JoinType(Enum):
    INNER = "INNER"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    FULL = "FULL"

    def __str__(self) -> str:
        return self.value


@dataclass
class Join:
    """An equi-join between two tables."""

    left_table: str
    right_table: str
    left_column: str
    right_column: str
    join_type: JoinType

    @classmethod
    def inner(cls, left_table: str, right_table: str, left_column: str, right_column: str) -> "Join":
        return cls(left_table, right_table, left_column, right_column, JoinType.INNER)

    @classmethod
    def left(cls, left_table: str, right_table: str, left_column: str, right_column: str) -> "Join":
        return cls(left_table, right_table, left_column, right_column, JoinType.LEFT)

    @classmethod
    def right(cls, left_table: str, right_table: str, left_column: str, right_column: str) -> "Join":
        return cls(left_table, right_table, left_column, right_column, JoinType.RIGHT)

    @classmethod
    def full(cls, left_table: str, right_table: str, left_column: str, right_column: str) -> "Join":
        return cls(left_table, right_table, left_column, right_column, JoinType.FULL)

    def is_inner(self) -> bool:
        return self.join_type is JoinType.INNER

    def is_left(self) -> bool:
        return self.join_type is JoinType.LEFT

    def is_right(self) -> bool:
        return self.join_type is JoinType.RIGHT

    def is_full(self) -> bool:
        return self.join_type is JoinType.FULL

    def __str__(self) -> str:
        return (
            f"{self.left_table} {self.join_type} JOIN {self.right_table} "
            f"ON {self.left_table}.{self.left_column} = "
            f"{self.right_table}.{self.right_column}"
        )