"""WHERE conditions and their evaluation against rows."""

from __future__ import annotations

import operator as _op
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from shardql.row import Row


class Operator(Enum):
    """Comparison operators."""

    EQUALS = "="
    NOT_EQUALS = "!="
    GREATER_THAN = ">"
    LESS_THAN = "<"
    GREATER_THAN_EQUALS = ">="
    LESS_THAN_EQUALS = "<="
    LIKE = "LIKE"
    IN = "IN"

    def __str__(self) -> str:
        return self.value


class DataType(Enum):
    """Data types of condition values."""

    STRING = "STRING"
    INTEGER = "INTEGER"
    DOUBLE = "DOUBLE"
    BOOLEAN = "BOOLEAN"
    DATE = "DATE"

    def __str__(self) -> str:
        return self.value


_NUMERIC: dict[Operator, Callable[[float, float], bool]] = {
    Operator.GREATER_THAN: _op.gt,
    Operator.LESS_THAN: _op.lt,
    Operator.GREATER_THAN_EQUALS: _op.ge,
    Operator.LESS_THAN_EQUALS: _op.le,
}


def _parse_number(text: str) -> float:
    if text != text.strip() or "_" in text:
        raise ValueError(f"Cannot parse '{text}' as number")
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"Cannot parse '{text}' as number") from None


@dataclass
class Condition:
    """A single ``column operator value`` predicate."""

    column: str
    operator: Operator
    value: str
    data_type: DataType

    def evaluate(self, row: Row, column_index: int) -> bool:
        """Test the value at ``column_index`` of ``row`` against this condition.

        Raises IndexError when the row has no such column and ValueError when
        a numeric comparison meets a value that is not a number.
        """
        row_value = row.get_value(column_index)
        if row_value is None:
            raise IndexError(f"Column index {column_index} not found in row")

        if self.operator is Operator.EQUALS:
            return row_value == self.value
        if self.operator is Operator.NOT_EQUALS:
            return row_value != self.value
        if self.operator is Operator.LIKE:
            return self._matches_like(row_value)
        if self.operator is Operator.IN:
            return row_value in (part.strip() for part in self.value.split(","))
        compare = _NUMERIC[self.operator]
        return compare(_parse_number(row_value), _parse_number(self.value))

    def _matches_like(self, row_value: str) -> bool:
        pattern = self.value
        starts = pattern.startswith("%")
        ends = pattern.endswith("%")
        if starts and ends:
            return pattern[1:-1] in row_value
        if starts:
            return row_value.endswith(pattern[1:])
        if ends:
            return row_value.startswith(pattern[:-1])
        return row_value == pattern

    def __str__(self) -> str:
        return f"{self.column} {self.operator} {self.value}"