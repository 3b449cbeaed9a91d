"""In-memory tracing of query execution events."""

from __future__ import annotations

import copy
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Mapping, Optional

_log = logging.getLogger(__name__)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass
class TraceEvent:
    """One timestamped event within a query trace."""

    timestamp: int
    event_type: str
    description: str
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class QueryTrace:
    """The events recorded for one query."""

    query_id: str
    sql: str
    start_time: int
    events: list[TraceEvent] = field(default_factory=list)


class Tracer:
    """Thread-safe store of traces for queries in flight."""

    def __init__(self) -> None:
        self._traces: dict[str, QueryTrace] = {}
        self._lock = threading.Lock()

    def start_query_trace(self, query_id: str, sql: str) -> None:
        """Begin a fresh trace for ``query_id``, replacing any earlier one."""
        trace = QueryTrace(query_id=query_id, sql=sql, start_time=_now_ms())
        with self._lock:
            self._traces[query_id] = trace
        _log.info("Started tracing query: %s", query_id)

    def add_event(
        self,
        query_id: str,
        event_type: str,
        description: str,
        metadata: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Record an event; ignored when the query is not being traced."""
        event = TraceEvent(
            timestamp=_now_ms(),
            event_type=event_type,
            description=description,
            metadata=dict(metadata or {}),
        )
        with self._lock:
            trace = self._traces.get(query_id)
            if trace is None:
                return
            trace.events.append(event)
        _log.debug("Added event to query %s: %s - %s", query_id, event_type, description)

    def get_trace(self, query_id: str) -> Optional[QueryTrace]:
        """A copy of the trace for ``query_id``, or None."""
        with self._lock:
            trace = self._traces.get(query_id)
            return copy.deepcopy(trace) if trace is not None else None

    def complete_query_trace(self, query_id: str) -> Optional[QueryTrace]:
        """Stop tracing ``query_id`` and return its trace, or None."""
        with self._lock:
            trace = self._traces.pop(query_id, None)
        if trace is not None:
            _log.info(
                "Completed tracing query %s: %sms", query_id, _now_ms() - trace.start_time
            )
        return trace

    def get_all_traces(self) -> dict[str, QueryTrace]:
        """A copy of every active trace, keyed by query id."""
        with self._lock:
            return copy.deepcopy(self._traces)

    def clear_traces(self) -> None:
        with self._lock:
            self._traces.clear()
        _log.info("Cleared all query traces")


TRACER = Tracer()


def start_query_trace(query_id: str, sql: str) -> None:
    TRACER.start_query_trace(query_id, sql)


def add_event(
    query_id: str,
    event_type: str,
    description: str,
    metadata: Optional[Mapping[str, str]] = None,
) -> None:
    TRACER.add_event(query_id, event_type, description, metadata)


def get_trace(query_id: str) -> Optional[QueryTrace]:
    return TRACER.get_trace(query_id)


def complete_query_trace(query_id: str) -> Optional[QueryTrace]:
    return TRACER.complete_query_trace(query_id)