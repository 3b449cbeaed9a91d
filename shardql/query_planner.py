"""Simple step-based planning of distributed queries."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field

_log = logging.getLogger(__name__)


@dataclass
class QueryStep:
    """One stage of a query plan and the stages it waits for."""

    step_id: str
    step_type: str
    description: str
    estimated_time_ms: int
    dependencies: list[str] = field(default_factory=list)


@dataclass
class QueryPlan:
    """Ordered stages of a query with their total estimated cost."""

    query_id: str
    sql_query: str
    steps: list[QueryStep]
    estimated_cost: float


_PARSE = ("parse", "parser", "Parse SQL query")
_OPTIMIZE = ("optimize", "optimizer", "Optimize query plan")
_SHARD = ("shard", "shard_manager", "Determine shard distribution")
_EXECUTE = ("execute", "executor", "Execute query on workers")
_AGGREGATE = ("aggregate", "aggregator", "Aggregate results")

_JOIN_STAGES = [(_PARSE, 5), (_OPTIMIZE, 10), (_SHARD, 15), (_EXECUTE, 50), (_AGGREGATE, 20)]
_SIMPLE_STAGES = [(_PARSE, 5), (_OPTIMIZE, 8), (_EXECUTE, 30)]


def _chain(stages) -> list[QueryStep]:
    steps = []
    previous = None
    for (step_id, step_type, description), time_ms in stages:
        steps.append(
            QueryStep(
                step_id=step_id,
                step_type=step_type,
                description=description,
                estimated_time_ms=time_ms,
                dependencies=[previous] if previous else [],
            )
        )
        previous = step_id
    return steps


class QueryPlanner:
    """Chooses a plan shape from the query text."""

    def plan_query(self, sql_query: str) -> QueryPlan:
        _log.info("Planning query: %s", sql_query)
        stages = _JOIN_STAGES if "join" in sql_query.lower() else _SIMPLE_STAGES
        steps = _chain(stages)
        return QueryPlan(
            query_id=str(uuid.uuid4()),
            sql_query=sql_query,
            steps=steps,
            estimated_cost=float(sum(step.estimated_time_ms for step in steps)),
        )