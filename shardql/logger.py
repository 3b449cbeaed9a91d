"""Logging helpers for the query engine's recurring events."""

from __future__ import annotations

import logging

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_log = logging.getLogger(__name__)


def query_start(query_id: str, sql: str) -> None:
    _log.info("Query started: %s - %s", query_id, sql)


def query_complete(query_id: str, execution_time_ms: int) -> None:
    _log.info("Query completed: %s - %sms", query_id, execution_time_ms)


def query_dispatch(query_id: str, worker_id: str) -> None:
    _log.debug("Query dispatched: %s -> %s", query_id, worker_id)


def worker_task_start(worker_id: str, task_id: str) -> None:
    _log.debug("Worker task started: %s - %s", worker_id, task_id)


def worker_task_complete(worker_id: str, task_id: str, execution_time_ms: int) -> None:
    _log.debug(
        "Worker task completed: %s - %s - %sms", worker_id, task_id, execution_time_ms
    )


def shard_operation(operation: str, shard_id: str, details: str) -> None:
    _log.info("Shard operation: %s - %s - %s", operation, shard_id, details)


def system_startup(component: str, port: int) -> None:
    _log.info("System startup: %s on port %s", component, port)


def system_shutdown(component: str) -> None:
    _log.info("System shutdown: %s", component)


def error_with_context(context: str, error: str) -> None:
    _log.error("%s: %s", context, error)


def warning_with_context(context: str, warning: str) -> None:
    _log.warning("%s: %s", context, warning)


def debug_info(message: str) -> None:
    _log.debug("%s", message)


def trace_info(message: str) -> None:
    _log.log(TRACE, "%s", message)