"""Data shown by the web dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

RECENT_QUERY_LIMIT = 10


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _format_time(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _format_duration(span: timedelta) -> dict:
    total_us = span // timedelta(microseconds=1)
    secs, micros = divmod(total_us, 1_000_000)
    return {"secs": secs, "nanos": micros * 1000}


@dataclass
class ComponentView:
    """Displayed status of one component: healthy, unhealthy or unknown."""

    id: str
    status: str
    cpu_usage: float
    memory_usage: float
    active_connections: int
    last_heartbeat: datetime = field(default_factory=_now)


def _component_dict(component: ComponentView) -> dict:
    return {
        "id": component.id,
        "status": component.status,
        "cpu_usage": component.cpu_usage,
        "memory_usage": component.memory_usage,
        "active_connections": component.active_connections,
        "last_heartbeat": _format_time(component.last_heartbeat),
    }


def _default_components() -> dict[str, ComponentView]:
    return {
        name: ComponentView(name, "unknown", 0.0, 0.0, 0)
        for name in ("coordinator", "worker1", "worker2", "worker3")
    }


@dataclass
class SystemView:
    """System status as displayed; defaults to every component unknown."""

    components: dict[str, ComponentView] = field(default_factory=_default_components)
    total_queries: int = 0
    active_queries: int = 0
    system_uptime: timedelta = field(default_factory=timedelta)
    last_updated: datetime = field(default_factory=_now)

    def to_dict(self) -> dict:
        return {
            "components": {
                key: _component_dict(value) for key, value in self.components.items()
            },
            "total_queries": self.total_queries,
            "active_queries": self.active_queries,
            "system_uptime": _format_duration(self.system_uptime),
            "last_updated": _format_time(self.last_updated),
        }


@dataclass
class QueryOutcome:
    """A query result as displayed."""

    query_id: str
    sql_query: str
    execution_time_ms: int
    rows_returned: int
    results: list[list[str]]
    status: str
    timestamp: datetime = field(default_factory=_now)

    def to_dict(self) -> dict:
        return {
            "query_id": self.query_id,
            "sql_query": self.sql_query,
            "execution_time_ms": self.execution_time_ms,
            "rows_returned": self.rows_returned,
            "results": [list(row) for row in self.results],
            "status": self.status,
            "timestamp": _format_time(self.timestamp),
        }


@dataclass
class PerformanceMetrics:
    """Aggregate throughput and latency figures."""

    total_queries: int = 0
    average_latency_ms: float = 0.0
    queries_per_second: float = 0.0
    error_rate: float = 0.0
    worker_utilization: dict[str, float] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=_now)

    def to_dict(self) -> dict:
        return {
            "total_queries": self.total_queries,
            "average_latency_ms": self.average_latency_ms,
            "queries_per_second": self.queries_per_second,
            "error_rate": self.error_rate,
            "worker_utilization": dict(self.worker_utilization),
            "timestamp": _format_time(self.timestamp),
        }


@dataclass
class VisualizationData:
    """Everything the dashboard shows at a moment."""

    system_status: SystemView = field(default_factory=SystemView)
    performance_metrics: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    recent_queries: list[QueryOutcome] = field(default_factory=list)

    def update_system_status(self, status: SystemView) -> None:
        self.system_status = status

    def add_query_result(self, result: QueryOutcome) -> None:
        """Record a result, keeping only the ten most recent."""
        self.recent_queries.append(result)
        del self.recent_queries[:-RECENT_QUERY_LIMIT]


@dataclass
class ShardView:
    """A shard as displayed; shard_type is hash, range or round_robin."""

    shard_id: str
    table_name: str
    worker_id: str
    row_count: int
    size_mb: float
    shard_type: str


@dataclass
class QueryExecutionStep:
    """One step of a query flow: pending, running, completed or failed."""

    step_name: str
    status: str
    duration_ms: int
    details: str


@dataclass
class QueryFlow:
    """The steps a query went through."""

    query_id: str
    sql_query: str
    steps: list[QueryExecutionStep]
    total_duration_ms: int
    status: str