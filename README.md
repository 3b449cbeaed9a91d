# shardql

shardql holds the building blocks of a small distributed SQL query engine:

- **Query models** (`shardql.row`, `shardql.condition`, `shardql.join`,
  `shardql.query`, `shardql.plan_node`, `shardql.result_set`): `Row`,
  `Condition` with the operators `=`, `!=`, `>`, `<`, `>=`, `<=`, `LIKE` and
  `IN`, `Join`, `Query`, `PlanNode` trees and `ResultSet` with CSV and JSON
  output.
- **Sharding** (`shardql.shard_distribution`, `shardql.shard_info`,
  `shardql.shard_key`, `shardql.shard_manager`): hash-based, range-based and
  round-robin placement of rows, shard metadata, shard keys and a registry of
  which worker holds which shard.
- **Coordinator and worker state** (`shardql.coordinator`, `shardql.worker`):
  worker registration, heartbeats, health checks, query counters and system
  status. `shardql.query_planner`, `shardql.data_store` and
  `shardql.query_executor` supply step plans, in-memory tables and query
  execution.
- **Logging and tracing helpers** (`shardql.logger`, `shardql.tracer`) for
  following a query through its lifecycle.
- **A web dashboard** (`shardql.web`, `shardql.dashboard`,
  `shardql.system_client`) built on aiohttp.
- **A client library** (`shardql.client`) that runs queries, keeps their
  statistics, formats results as a table, CSV or JSON, runs script files and
  benchmarks a query.

## Installation

```
pip install shardql
```

With the test dependencies:

```
pip install "shardql[test]"
```

## Running the dashboard

```
shardql-visualizer
```

Options: `--host` (default `127.0.0.1`), `--port` (default `8080`) and
`--static-dir` (default `visualizer/static`, relative to the working
directory). Routes:

| Route | Purpose |
| --- | --- |
| `/` | `index.html` from the static directory (404 if it is missing) |
| `/static/...` | Files from the static directory |
| `/api/status` | Current system status as JSON |
| `/api/query` | POST `{"query": "..."}` to run a query |
| `/ws` | WebSocket: an initial status message, then status and performance metrics every two seconds |

All responses carry permissive CORS headers. No static files ship with the
package; point `--static-dir` at your own.

To embed the dashboard, build the application yourself:

```python
from aiohttp import web
from shardql.system_client import SystemClient
from shardql.web import create_app

web.run_app(create_app(SystemClient(), "path/to/static"), port=8080)
```

## Evaluating conditions

```python
from shardql.condition import Condition, DataType, Operator
from shardql.row import Row

row = Row(["1", "John Doe", "30"], "users")
older = Condition("age", Operator.GREATER_THAN, "25", DataType.INTEGER)
print(older.evaluate(row, 2))   # True

named = Condition("name", Operator.LIKE, "John%", DataType.STRING)
print(named.evaluate(row, 1))   # True
```

`evaluate` raises `IndexError` when the row has no such column and
`ValueError` when a numeric comparison meets a value that is not a number.

## Sharding rows

```python
from shardql.shard_distribution import ShardDistribution

dist = ShardDistribution.hash_based("users", ["user_id"], 3)
print(dist.determine_shard_id({"user_id": "1"}))   # users_shard_2

dist.with_replication(3)
print(dist.total_shards())                         # 9
```

A range-based distribution uses the numeric value of its first shard column
when a `"ranges"` parameter is set, and falls back to hash-based placement
otherwise:

```python
orders = ShardDistribution.range_based("orders", ["order_id"], 3)
orders.add_parameter("ranges", "0-10,11-20,21-30")
print(orders.determine_shard_id({"order_id": "25"}))  # orders_shard_1
```

A distribution of type `ShardType.CUSTOM` raises `ValueError` from
`determine_shard_id`.

## Planning a query

```python
from shardql.query_planner import QueryPlanner

plan = QueryPlanner().plan_query("SELECT * FROM users JOIN orders ON users.id = orders.user_id")
print([step.step_id for step in plan.steps])
# ['parse', 'optimize', 'shard', 'execute', 'aggregate']
print(plan.estimated_cost)  # 100.0
```

Queries without `join` get a three-step plan: parse, optimize, execute.

## Using the client library

```python
from shardql.client import SqlClient, format_results, format_stats

client = SqlClient()
rows, stats = client.execute_query("SELECT name, age FROM users")
print(format_results(rows, "csv"))
print(format_stats(stats))
```

`SqlClient` takes any object with `execute_query(sql)` and
`get_system_status()`; by default it uses an in-process
`shardql.coordinator.CoordinatorState`. Failures are raised as
`shardql.client.QueryError`. It keeps statistics of the last 100 queries
(`get_stats_history`), and offers `run_file`, `benchmark_query` and
`interactive_shell`, which reads `help`, `status`, `stats`, `exit`/`quit` or SQL
line by line from any text stream.

`format_results` accepts `"table"`, `"csv"` and `"json"`; in the table format
the first row is used as the header.

## What the package does not do

- It does not parse or execute SQL. Query results are fixed sample rows
  chosen by words in the query text (`users`, `orders`, `products`, `count`,
  `where`).
- The coordinator and workers are in-process state objects only: there is no
  network server for them and no command that starts one. `parse_port` and
  `parse_worker_args` read their start-up arguments but start nothing.
- The dashboard's `SystemClient` serves demonstration figures, not the state
  of a live cluster.
- The client library has no command-line entry point; call it from Python.

## Running the tests

```
pip install "shardql[test]"
pytest
```