"""Worker-side query execution with canned demo results."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass

_log = logging.getLogger(__name__)

_USERS_ALL = [
    ["John Doe", "30"],
    ["Jane Smith", "25"],
    ["Bob Johnson", "35"],
]
_USERS_FILTERED = [
    ["John Doe", "30"],
    ["Bob Johnson", "35"],
]
_ORDERS = [
    ["ORD001", "150.00", "2024-01-15"],
    ["ORD002", "275.50", "2024-01-16"],
    ["ORD003", "89.99", "2024-01-17"],
]
_PRODUCTS = [
    ["Laptop", "999.99"],
    ["Mouse", "29.99"],
    ["Keyboard", "79.99"],
]
_SAMPLE = [
    ["Sample Result 1"],
    ["Sample Result 2"],
    ["Sample Result 3"],
]


@dataclass
class ExecutionPlan:
    """The fixed stages a worker goes through for a query."""

    query_id: str
    sql_query: str
    steps: list[str]
    estimated_cost: float


def _results_for(sql_query: str) -> list[list[str]]:
    text = sql_query.lower()
    if "users" in text:
        if "count" in text:
            return [["3"]]
        if "where" in text:
            return _USERS_FILTERED
        return _USERS_ALL
    if "orders" in text:
        return _ORDERS
    if "products" in text:
        return _PRODUCTS
    return _SAMPLE


class QueryExecutor:
    """Answers queries from the query text after a simulated delay."""

    def __init__(self, delay: float = 0.05) -> None:
        self.delay = delay

    async def execute(self, sql_query: str) -> list[list[str]]:
        """Return result rows for ``sql_query``."""
        _log.info("Executing query: %s", sql_query)
        await asyncio.sleep(self.delay)
        results = [list(row) for row in _results_for(sql_query)]
        _log.debug("Query executed successfully, returning %d rows", len(results))
        return results

    def get_query_plan(self, sql_query: str) -> ExecutionPlan:
        return ExecutionPlan(
            query_id=str(uuid.uuid4()),
            sql_query=sql_query,
            steps=["Parse SQL", "Validate syntax", "Execute query", "Return results"],
            estimated_cost=50.0,
        )