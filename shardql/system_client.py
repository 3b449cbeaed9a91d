"""Client the dashboard uses to read system state and run queries."""

from __future__ import annotations

import asyncio
import time
import uuid
from datetime import timedelta

from shardql.dashboard import ComponentView, PerformanceMetrics, QueryOutcome, SystemView

_DEMO_WORKERS = (
    ("worker1", 25.0, 64.0),
    ("worker2", 30.0, 72.0),
    ("worker3", 35.0, 80.0),
)
_USERS = [
    ["John Doe", "30"],
    ["Jane Smith", "25"],
    ["Bob Johnson", "35"],
]
_SAMPLE = [
    ["Sample Result 1"],
    ["Sample Result 2"],
]


class SystemClient:
    """Serves demonstration data in place of a live cluster."""

    def __init__(self, query_delay: float = 0.1) -> None:
        self.demo_mode = True
        self.query_delay = query_delay

    async def get_system_status(self) -> SystemView:
        components = {
            "coordinator": ComponentView("coordinator", "healthy", 45.0, 128.0, 3)
        }
        for worker_id, cpu, memory in _DEMO_WORKERS:
            components[worker_id] = ComponentView(worker_id, "healthy", cpu, memory, 1)
        return SystemView(
            components=components,
            total_queries=42,
            active_queries=2,
            system_uptime=timedelta(seconds=3600),
        )

    async def execute_query(self, query: str) -> QueryOutcome:
        """Simulate running ``query`` and return canned rows."""
        start = time.perf_counter()
        await asyncio.sleep(self.query_delay)
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        rows = _USERS if "users" in query else _SAMPLE
        results = [list(row) for row in rows]
        return QueryOutcome(
            query_id=str(uuid.uuid4()),
            sql_query=query,
            execution_time_ms=elapsed_ms,
            rows_returned=len(results),
            results=results,
            status="completed",
        )

    async def get_performance_metrics(self) -> PerformanceMetrics:
        return PerformanceMetrics(
            total_queries=42,
            average_latency_ms=150.0,
            queries_per_second=2.5,
            error_rate=0.02,
            worker_utilization={"worker1": 75.0, "worker2": 60.0, "worker3": 80.0},
        )