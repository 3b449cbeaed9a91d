"""Coordinator state: worker registry, health tracking and query dispatch."""

from __future__ import annotations

import copy
import logging
import re
import threading
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from shardql.query_planner import QueryPlanner
from shardql.shard_manager import ShardManager

_log = logging.getLogger(__name__)

DEFAULT_PORT = 50051
HEARTBEAT_TIMEOUT_SECONDS = 30
_PORT = re.compile(r"\+?[0-9]+")

_USERS = [
    ["John Doe", "30"],
    ["Jane Smith", "25"],
    ["Bob Johnson", "35"],
]
_ORDERS = [
    ["ORD001", "150.00"],
    ["ORD002", "275.50"],
    ["ORD003", "89.99"],
]
_SAMPLE = [
    ["Sample Result 1"],
    ["Sample Result 2"],
]


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class WorkerInfo:
    """What the coordinator knows about one registered worker."""

    id: str
    address: str
    port: int
    status: str = "healthy"
    cpu_usage: float = 0.0
    memory_usage: float = 0.0
    active_queries: int = 0
    last_heartbeat: datetime = field(default_factory=_now)


@dataclass
class ComponentStatus:
    """Health and load of one component of the system."""

    id: str
    status: str
    cpu_usage: float
    memory_usage: float
    active_connections: int
    last_heartbeat: datetime


@dataclass
class SystemStatus:
    """A snapshot of every component and the query counters."""

    components: dict[str, ComponentStatus]
    total_queries: int
    active_queries: int
    system_uptime: timedelta
    last_updated: datetime


@dataclass
class QueryResult:
    """The outcome of one query run through the coordinator."""

    query_id: str
    sql_query: str
    execution_time_ms: int
    rows_returned: int
    results: list[list[str]]
    status: str
    timestamp: datetime


def _results_for(sql_query: str) -> list[list[str]]:
    text = sql_query.lower()
    if "users" in text:
        rows = _USERS
    elif "orders" in text:
        rows = _ORDERS
    else:
        rows = _SAMPLE
    return [list(row) for row in rows]


class CoordinatorState:
    """Shared, thread-safe state of a coordinator."""

    def __init__(self) -> None:
        self.workers: dict[str, WorkerInfo] = {}
        self.query_planner = QueryPlanner()
        self.shard_manager = ShardManager()
        self.total_queries = 0
        self.active_queries = 0
        self.start_time = _now()
        self._lock = threading.Lock()

    def register_worker(self, worker_id: str, address: str, port: int) -> None:
        """Add or replace a worker, marking it healthy."""
        with self._lock:
            self.workers[worker_id] = WorkerInfo(id=worker_id, address=address, port=port)
        _log.info("Registered worker: %s", worker_id)

    def update_worker_status(
        self, worker_id: str, cpu_usage: float, memory_usage: float, active_queries: int
    ) -> None:
        """Record a heartbeat; heartbeats from unknown workers are ignored."""
        with self._lock:
            worker = self.workers.get(worker_id)
            if worker is None:
                return
            worker.cpu_usage = cpu_usage
            worker.memory_usage = memory_usage
            worker.active_queries = active_queries
            worker.last_heartbeat = _now()
            worker.status = "healthy"

    def get_system_status(self) -> SystemStatus:
        """Status of the coordinator itself and of every worker."""
        now = _now()
        with self._lock:
            components = {
                "coordinator": ComponentStatus(
                    id="coordinator",
                    status="healthy",
                    cpu_usage=45.0,
                    memory_usage=128.0,
                    active_connections=len(self.workers),
                    last_heartbeat=now,
                )
            }
            for worker_id, worker in self.workers.items():
                components[worker_id] = ComponentStatus(
                    id=worker_id,
                    status=worker.status,
                    cpu_usage=worker.cpu_usage,
                    memory_usage=worker.memory_usage,
                    active_connections=worker.active_queries,
                    last_heartbeat=worker.last_heartbeat,
                )
            return SystemStatus(
                components=copy.deepcopy(components),
                total_queries=self.total_queries,
                active_queries=self.active_queries,
                system_uptime=now - self.start_time,
                last_updated=now,
            )

    def check_worker_health(self, now: Optional[datetime] = None) -> list[str]:
        """Mark workers silent for over 30 seconds unhealthy; return their ids."""
        now = now or _now()
        stale = []
        with self._lock:
            for worker_id, worker in self.workers.items():
                silent = int((now - worker.last_heartbeat).total_seconds())
                if silent > HEARTBEAT_TIMEOUT_SECONDS:
                    worker.status = "unhealthy"
                    stale.append(worker_id)
        for worker_id in stale:
            _log.warning(
                "Worker %s is unhealthy - no heartbeat for 30+ seconds", worker_id
            )
        return stale

    def execute_query(self, sql_query: str) -> QueryResult:
        """Run ``sql_query`` and update the query counters."""
        query_id = str(uuid.uuid4())
        _log.info("Executing query %s: %s", query_id, sql_query)
        with self._lock:
            self.active_queries += 1
        start = time.perf_counter()
        try:
            results = _results_for(sql_query)
        finally:
            elapsed_ms = int((time.perf_counter() - start) * 1000)
            with self._lock:
                self.active_queries -= 1
                self.total_queries += 1
        _log.info("Query %s completed in %dms", query_id, elapsed_ms)
        return QueryResult(
            query_id=query_id,
            sql_query=sql_query,
            execution_time_ms=elapsed_ms,
            rows_returned=len(results),
            results=results,
            status="completed",
            timestamp=_now().replace(microsecond=0),
        )


def parse_port(argv: Optional[Sequence[str]] = None) -> int:
    """Port from the first argument, or the default when absent or invalid."""
    if argv:
        text = argv[0]
        if _PORT.fullmatch(text):
            port = int(text)
            if port <= 0xFFFF:
                return port
    return DEFAULT_PORT