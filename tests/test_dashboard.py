import json
from datetime import datetime, timedelta, timezone

from shardql.dashboard import (
    ComponentView,
    PerformanceMetrics,
    QueryOutcome,
    SystemView,
    VisualizationData,
)


def _outcome(n):
    return QueryOutcome(f"q{n}", "SELECT 1", n, 1, [["x"]], "completed")


def test_default_system_view_components_unknown():
    view = SystemView()
    assert set(view.components) == {"coordinator", "worker1", "worker2", "worker3"}
    assert all(c.status == "unknown" for c in view.components.values())
    assert view.total_queries == 0
    assert view.system_uptime == timedelta(0)


def test_new_visualization_data_is_empty():
    data = VisualizationData()
    assert data.recent_queries == []
    assert data.performance_metrics.worker_utilization == {}


def test_update_system_status_replaces():
    data = VisualizationData()
    view = SystemView(components={}, total_queries=42, active_queries=2)
    data.update_system_status(view)
    assert data.system_status.total_queries == 42
    assert data.system_status.components == {}


def test_add_query_result_keeps_last_ten():
    data = VisualizationData()
    for n in range(12):
        data.add_query_result(_outcome(n))
    assert len(data.recent_queries) == 10
    assert data.recent_queries[0].query_id == "q2"
    assert data.recent_queries[-1].query_id == "q11"


def test_system_view_to_dict():
    moment = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
    view = SystemView(
        components={"w": ComponentView("w", "healthy", 1.0, 2.0, 3, moment)},
        total_queries=5,
        active_queries=1,
        system_uptime=timedelta(seconds=3600),
        last_updated=moment,
    )
    data = view.to_dict()
    assert data["last_updated"] == "2024-01-15T12:00:00Z"
    assert data["system_uptime"] == {"secs": 3600, "nanos": 0}
    assert data["components"]["w"]["status"] == "healthy"
    assert data["components"]["w"]["last_heartbeat"] == data["last_updated"]
    assert json.loads(json.dumps(data)) == data


def test_query_outcome_to_dict_round_trips():
    outcome = _outcome(7)
    data = outcome.to_dict()
    assert data["query_id"] == "q7"
    assert data["results"] == [["x"]]
    assert data["timestamp"].endswith("Z")
    assert json.loads(json.dumps(data)) == data


def test_performance_metrics_to_dict():
    metrics = PerformanceMetrics(
        total_queries=42,
        average_latency_ms=150.0,
        queries_per_second=2.5,
        error_rate=0.02,
        worker_utilization={"worker1": 75.0},
    )
    data = metrics.to_dict()
    assert data["total_queries"] == 42
    assert data["worker_utilization"] == {"worker1": 75.0}
    assert data["error_rate"] == 0.02
    assert json.loads(json.dumps(data)) == data