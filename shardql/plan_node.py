"""Nodes of a query execution plan tree."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from shardql.condition import Condition


class NodeType(Enum):
    SCAN = "SCAN"
    FILTER = "FILTER"
    PROJECT = "PROJECT"
    JOIN = "JOIN"
    AGGREGATE = "AGGREGATE"

    def __str__(self) -> str:
        return self.value


def _short_id() -> str:
    return str(uuid.uuid4())[:8]


@dataclass
class PlanNode:
    """One operation in an execution plan, with its child operations."""

    node_id: str
    node_type: NodeType
    table_name: Optional[str] = None
    columns: Optional[list[str]] = None
    conditions: Optional[list[Condition]] = None
    children: list["PlanNode"] = field(default_factory=list)
    estimated_rows: int = 0
    worker_id: Optional[str] = None
    metadata: dict[str, str] = field(default_factory=dict)

    @classmethod
    def scan(cls, table_name: str, columns: Optional[list[str]] = None) -> "PlanNode":
        return cls(f"scan_{table_name}", NodeType.SCAN, table_name=table_name, columns=columns)

    @classmethod
    def filter(cls, conditions: list[Condition]) -> "PlanNode":
        return cls(f"filter_{_short_id()}", NodeType.FILTER, conditions=conditions)

    @classmethod
    def project(cls, columns: list[str]) -> "PlanNode":
        return cls(f"project_{_short_id()}", NodeType.PROJECT, columns=columns)

    @classmethod
    def join(cls, left_table: str, right_table: str) -> "PlanNode":
        return cls(
            f"join_{_short_id()}",
            NodeType.JOIN,
            table_name=f"{left_table}_{right_table}",
        )

    def add_child(self, child: "PlanNode") -> None:
        self.children.append(child)

    def is_leaf(self) -> bool:
        return not self.children

    def estimated_cost(self) -> int:
        """Estimated rows of this node plus those of its whole subtree."""
        return self.estimated_rows + sum(child.estimated_cost() for child in self.children)

    def clone_with_new_id(self) -> "PlanNode":
        """Deep copy of the subtree in which every node gets a fresh id suffix."""
        return PlanNode(
            node_id=f"{self.node_id}_{_short_id()}",
            node_type=self.node_type,
            table_name=self.table_name,
            columns=None if self.columns is None else list(self.columns),
            conditions=None if self.conditions is None else list(self.conditions),
            children=[child.clone_with_new_id() for child in self.children],
            estimated_rows=self.estimated_rows,
            worker_id=self.worker_id,
            metadata=dict(self.metadata),
        )