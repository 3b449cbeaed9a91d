"""Command-style client for running queries against a coordinator."""

from __future__ import annotations

import json
import logging
import sys
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, Optional, Protocol, Sequence, TextIO, Union

from shardql.coordinator import CoordinatorState, QueryResult, SystemStatus

_log = logging.getLogger(__name__)

HISTORY_LIMIT = 100
DEFAULT_COORDINATOR = "127.0.0.1:50051"


class QueryError(Exception):
    """Raised when the coordinator cannot answer a request."""


class Coordinator(Protocol):
    def execute_query(self, sql_query: str) -> QueryResult: ...

    def get_system_status(self) -> SystemStatus: ...


@dataclass
class QueryStats:
    """Timing and size of one executed query."""

    execution_time_ms: int
    rows_returned: int
    query_id: str
    timestamp: datetime


@dataclass
class ComponentInfo:
    """Load and health of one component as seen by the client."""

    id: str
    status: str
    cpu_usage: float
    memory_usage: float
    active_connections: int


@dataclass
class SystemStats:
    """System status as seen by the client."""

    total_queries: int
    active_queries: int
    components: dict[str, ComponentInfo] = field(default_factory=dict)
    system_uptime: timedelta = field(default_factory=timedelta)


@dataclass
class BenchmarkSummary:
    """Minimum, maximum, mean and median of a series of query times."""

    min_ms: int
    max_ms: int
    avg_ms: float
    median_ms: float


def format_results(results: Sequence[Sequence[str]], fmt: str) -> str:
    """Render result rows as json, csv or an aligned table."""
    if fmt == "json":
        return json.dumps([list(row) for row in results], indent=2)
    if fmt == "csv":
        return "".join(",".join(row) + "\n" for row in results)
    if fmt == "table":
        if not results:
            return "No results"
        header = results[0]
        widths = [0] * len(header)
        for row in results:
            for index, cell in enumerate(row):
                widths[index] = max(widths[index], len(cell.encode("utf-8")))
        lines = [
            "".join(f"{header[index]:<{width}} " for index, width in enumerate(widths)),
            "".join("-" * width + " " for width in widths),
        ]
        for row in results[1:]:
            lines.append(
                "".join(f"{cell:<{widths[index]}} " for index, cell in enumerate(row))
            )
        return "".join(line + "\n" for line in lines)
    return f"Unsupported format: {fmt}"


def format_stats(stats: QueryStats) -> str:
    return (
        f"Query ID: {stats.query_id}\n"
        f"Execution Time: {stats.execution_time_ms}ms\n"
        f"Rows Returned: {stats.rows_returned}\n"
        f"Timestamp: {stats.timestamp.strftime('%Y-%m-%d %H:%M:%S UTC')}"
    )


def format_system_stats(stats: SystemStats) -> str:
    lines = [
        "System Status:",
        f"Total Queries: {stats.total_queries}",
        f"Active Queries: {stats.active_queries}",
        f"System Uptime: {int(stats.system_uptime.total_seconds())}s",
        "",
        "Components:",
        "ID         Status    CPU%   Memory(MB) Connections",
        "---------- -------- ------ ---------- -----------",
    ]
    for component_id, comp in stats.components.items():
        lines.append(
            f"{component_id:<10} {comp.status:<8} {comp.cpu_usage:<6.1f} "
            f"{comp.memory_usage:<10.1f} {comp.active_connections:<11}"
        )
    return "".join(line + "\n" for line in lines)


def split_queries(content: str) -> list[str]:
    """Split script text on semicolons, dropping blank statements."""
    return [part.strip() for part in content.split(";") if part.strip()]


def summarize_times(times: Iterable[int]) -> BenchmarkSummary:
    """Summarise query times; raise ValueError when there are none."""
    ordered = sorted(times)
    if not ordered:
        raise ValueError("no query times to summarise")
    count = len(ordered)
    middle = count // 2
    if count % 2 == 0:
        median = (ordered[middle - 1] + ordered[middle]) / 2.0
    else:
        median = float(ordered[middle])
    return BenchmarkSummary(
        min_ms=ordered[0],
        max_ms=ordered[-1],
        avg_ms=sum(ordered) / count,
        median_ms=median,
    )


class SqlClient:
    """Runs queries through a coordinator and keeps their statistics."""

    def __init__(self, coordinator: Optional[Coordinator] = None) -> None:
        self.coordinator = coordinator if coordinator is not None else CoordinatorState()
        self._history: list[QueryStats] = []
        self._lock = threading.Lock()

    def execute_query(self, sql: str) -> tuple[list[list[str]], QueryStats]:
        """Run ``sql``; return its rows and statistics, or raise QueryError."""
        _log.info("Executing query: %s", sql)
        try:
            result = self.coordinator.execute_query(sql)
        except Exception as exc:
            raise QueryError(f"Query execution failed: {exc}") from exc
        results = [list(row) for row in result.results]
        timestamp = result.timestamp or datetime.now(timezone.utc)
        stats = QueryStats(
            execution_time_ms=result.execution_time_ms,
            rows_returned=len(results),
            query_id=result.query_id,
            timestamp=timestamp.replace(microsecond=0),
        )
        with self._lock:
            self._history.append(stats)
            del self._history[:-HISTORY_LIMIT]
        _log.info(
            "Query completed in %dms, returned %d rows",
            stats.execution_time_ms,
            stats.rows_returned,
        )
        return results, stats

    def get_system_status(self) -> SystemStats:
        """Fetch component status from the coordinator, or raise QueryError."""
        try:
            status = self.coordinator.get_system_status()
        except Exception as exc:
            raise QueryError(f"Failed to get system status: {exc}") from exc
        components = {
            component_id: ComponentInfo(
                id=comp.id,
                status=comp.status,
                cpu_usage=comp.cpu_usage,
                memory_usage=comp.memory_usage,
                active_connections=comp.active_connections,
            )
            for component_id, comp in status.components.items()
        }
        return SystemStats(
            total_queries=status.total_queries,
            active_queries=status.active_queries,
            components=components,
            system_uptime=timedelta(seconds=int(status.system_uptime.total_seconds())),
        )

    def get_stats_history(self) -> list[QueryStats]:
        """Statistics of the most recent queries, oldest first."""
        with self._lock:
            return list(self._history)

    def run_file(
        self,
        path: Union[str, Path],
        fmt: str = "table",
        stats: bool = False,
        out: Optional[TextIO] = None,
    ) -> list[QueryStats]:
        """Run every statement in a script; return statistics of those that succeeded."""
        out = out or sys.stdout
        content = Path(path).read_text(encoding="utf-8")
        completed = []
        for number, query in enumerate(split_queries(content), start=1):
            print(f"Executing query {number}: {query}", file=out)
            try:
                results, query_stats = self.execute_query(query)
            except QueryError as exc:
                print(f"Query {number} failed: {exc}", file=sys.stderr)
            else:
                completed.append(query_stats)
                print(format_results(results, fmt), file=out)
                if stats:
                    print(f"\n{format_stats(query_stats)}", file=out)
            print(file=out)
        return completed

    def benchmark_query(
        self, sql: str, iterations: int = 10, out: Optional[TextIO] = None
    ) -> BenchmarkSummary:
        """Run ``sql`` repeatedly, report timings and return their summary."""
        out = out or sys.stdout
        print(f"Benchmarking query: {sql}", file=out)
        print(f"Iterations: {iterations}", file=out)
        times = []
        total_rows = 0
        for number in range(1, iterations + 1):
            out.write(f"Iteration {number}/{iterations}... ")
            out.flush()
            try:
                _, query_stats = self.execute_query(sql)
            except QueryError as exc:
                print(f"Error: {exc}", file=out)
                raise
            times.append(query_stats.execution_time_ms)
            total_rows += query_stats.rows_returned
            print(f"{query_stats.execution_time_ms}ms", file=out)

        summary = summarize_times(times)
        print("\nBenchmark Results:", file=out)
        print("==================", file=out)
        print(f"Query: {sql}", file=out)
        print(f"Iterations: {iterations}", file=out)
        print(f"Total Rows: {total_rows}", file=out)
        print(f"Min Time: {summary.min_ms}ms", file=out)
        print(f"Max Time: {summary.max_ms}ms", file=out)
        print(f"Avg Time: {summary.avg_ms:.2f}ms", file=out)
        print(f"Median Time: {summary.median_ms:.2f}ms", file=out)
        return summary

    def interactive_shell(
        self,
        coordinator_address: str = DEFAULT_COORDINATOR,
        stdin: Optional[TextIO] = None,
        out: Optional[TextIO] = None,
    ) -> None:
        """Read commands and SQL line by line until exit, quit or end of input."""
        stdin = stdin or sys.stdin
        out = out or sys.stdout
        print("Distributed SQL Query Engine - Interactive Shell", file=out)
        print("Type 'help' for commands, 'exit' to quit", file=out)
        print(f"Connected to coordinator at: {coordinator_address}", file=out)

        while True:
            out.write("sql> ")
            out.flush()
            line = stdin.readline()
            if not line:
                break
            command = line.strip()
            if not command:
                continue
            if command in ("exit", "quit"):
                break
            if command == "help":
                self._print_help(out)
            elif command == "status":
                try:
                    print(format_system_stats(self.get_system_status()), file=out)
                except QueryError as exc:
                    print(f"Error getting status: {exc}", file=sys.stderr)
            elif command == "stats":
                self._print_history(out)
            else:
                try:
                    results, query_stats = self.execute_query(command)
                except QueryError as exc:
                    print(f"Query error: {exc}", file=sys.stderr)
                else:
                    print(format_results(results, "table"), file=out)
                    print(f"\n{format_stats(query_stats)}", file=out)

    @staticmethod
    def _print_help(out: TextIO) -> None:
        print("Available commands:", file=out)
        print("  help     - Show this help", file=out)
        print("  status   - Show system status", file=out)
        print("  stats    - Show query statistics", file=out)
        print("  exit     - Exit the shell", file=out)
        print("  <sql>    - Execute SQL query", file=out)

    def _print_history(self, out: TextIO) -> None:
        history = self.get_stats_history()
        if not history:
            print("No queries executed yet", file=out)
            return
        average = sum(s.execution_time_ms for s in history) / len(history)
        print("Query Statistics:", file=out)
        print(f"Total Queries: {len(history)}", file=out)
        print(f"Average Execution Time: {average:.2f}ms", file=out)
        print(f"Total Rows Returned: {sum(s.rows_returned for s in history)}", file=out)