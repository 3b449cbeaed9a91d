"""Worker state: query execution, metrics and health reporting."""

from __future__ import annotations

import logging
import re
import sys
import threading
import time
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from shardql.data_store import DataStore
from shardql.query_executor import QueryExecutor

_log = logging.getLogger(__name__)

DEFAULT_WORKER_ID = "worker1"
DEFAULT_PORT = 50052
DEFAULT_DATA_DIR = "data"
COORDINATOR_ADDRESS = "127.0.0.1"
COORDINATOR_PORT = 50051

_PORT = re.compile(r"\+?[0-9]+")


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class WorkerMetrics:
    """Query counters and resource usage of a worker."""

    total_queries: int = 0
    active_queries: int = 0
    cpu_usage: float = 0.0
    memory_usage: float = 0.0
    last_heartbeat: datetime = field(default_factory=_now)


@dataclass
class WorkerQueryResult:
    """The outcome of one query run on a worker."""

    query_id: str
    sql_query: str
    execution_time_ms: int
    rows_returned: int
    results: list[list[str]]
    status: str
    timestamp: datetime


@dataclass
class WorkerStatus:
    """A worker's self-reported status."""

    worker_id: str
    status: str
    cpu_usage: float
    memory_usage: float
    active_queries: int
    total_queries: int
    uptime: timedelta
    last_heartbeat: datetime


@dataclass
class HealthReport:
    """Answer to a health check."""

    worker_id: str
    healthy: bool
    timestamp: int
    status_message: str


@dataclass
class WorkerConfig:
    """Settings a worker is started with."""

    worker_id: str = DEFAULT_WORKER_ID
    port: int = DEFAULT_PORT
    data_dir: str = DEFAULT_DATA_DIR


class WorkerState:
    """Shared state of one worker."""

    def __init__(
        self,
        worker_id: str,
        coordinator_address: str = COORDINATOR_ADDRESS,
        coordinator_port: int = COORDINATOR_PORT,
        executor: Optional[QueryExecutor] = None,
    ) -> None:
        self.worker_id = worker_id
        self.coordinator_address = coordinator_address
        self.coordinator_port = coordinator_port
        self.query_executor = executor if executor is not None else QueryExecutor()
        self.data_store = DataStore()
        self.start_time = _now()
        self._metrics = WorkerMetrics()
        self._lock = threading.Lock()

    async def execute_query(self, sql_query: str) -> WorkerQueryResult:
        """Run ``sql_query`` on this worker and update its counters."""
        query_id = str(uuid.uuid4())
        start = time.perf_counter()
        _log.info("Worker %s executing query %s: %s", self.worker_id, query_id, sql_query)
        with self._lock:
            self._metrics.active_queries += 1
        try:
            results = await self.query_executor.execute(sql_query)
        except Exception:
            with self._lock:
                self._metrics.active_queries -= 1
            _log.error("Worker %s failed to execute query %s", self.worker_id, query_id)
            raise
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        with self._lock:
            self._metrics.active_queries -= 1
            self._metrics.total_queries += 1
        _log.info(
            "Worker %s completed query %s in %dms", self.worker_id, query_id, elapsed_ms
        )
        return WorkerQueryResult(
            query_id=query_id,
            sql_query=sql_query,
            execution_time_ms=elapsed_ms,
            rows_returned=len(results),
            results=results,
            status="completed",
            timestamp=_now().replace(microsecond=0),
        )

    def get_metrics(self) -> WorkerMetrics:
        """A copy of the current metrics."""
        with self._lock:
            return replace(self._metrics)

    def update_system_metrics(self, cpu_usage: float, memory_usage: float) -> None:
        """Record resource usage and the time of this heartbeat."""
        with self._lock:
            self._metrics.cpu_usage = cpu_usage
            self._metrics.memory_usage = memory_usage
            self._metrics.last_heartbeat = _now()

    def get_worker_status(self) -> WorkerStatus:
        metrics = self.get_metrics()
        uptime_seconds = int((_now() - self.start_time).total_seconds())
        return WorkerStatus(
            worker_id=self.worker_id,
            status="healthy",
            cpu_usage=metrics.cpu_usage,
            memory_usage=metrics.memory_usage,
            active_queries=metrics.active_queries,
            total_queries=metrics.total_queries,
            uptime=timedelta(seconds=uptime_seconds),
            last_heartbeat=metrics.last_heartbeat.replace(microsecond=0),
        )

    def health_check(self, worker_id: str) -> HealthReport:
        """Report healthy, echoing the id the caller asked about."""
        return HealthReport(
            worker_id=worker_id,
            healthy=True,
            timestamp=int(time.time()),
            status_message=f"Worker {worker_id} is healthy",
        )


def _parse_port(text: str) -> int:
    if _PORT.fullmatch(text):
        port = int(text)
        if port <= 0xFFFF:
            return port
    return DEFAULT_PORT


def parse_worker_args(argv: Optional[Sequence[str]] = None) -> WorkerConfig:
    """Read --worker-id, --port and --data-dir; other arguments are skipped."""
    args = sys.argv[1:] if argv is None else argv
    config = WorkerConfig()
    items = iter(args)
    for arg in items:
        if arg not in ("--worker-id", "--port", "--data-dir"):
            continue
        value = next(items, None)
        if value is None:
            break
        if arg == "--worker-id":
            config.worker_id = value
        elif arg == "--port":
            config.port = _parse_port(value)
        else:
            config.data_dir = value
    return config