import json

import pytest

from shardql.row import Row


def make_row():
    return Row(["1", "John Doe", "30", "john@example.com"], "users")


def test_get_value_in_and_out_of_range():
    row = make_row()
    assert row.get_value(1) == "John Doe"
    assert row.get_value(4) is None
    assert row.get_value(-1) is None


def test_set_value_replaces():
    row = make_row()
    row.set_value(2, "31")
    assert row.values[2] == "31"


def test_set_value_out_of_bounds_raises():
    row = make_row()
    with pytest.raises(IndexError):
        row.set_value(4, "x")
    assert row.column_count() == 4


def test_add_value_and_counts():
    row = Row([], "users")
    assert row.is_empty()
    row.add_value("a")
    row.add_value("b")
    assert row.column_count() == 2
    assert not row.is_empty()
    assert row.values == ["a", "b"]


def test_metadata():
    row = make_row()
    assert row.get_metadata("origin") is None
    row.set_metadata("origin", "worker1")
    assert row.get_metadata("origin") == "worker1"


def test_project_columns_reorders_and_keeps_context():
    row = make_row()
    row.worker_id = "worker1"
    row.shard_id = "users_shard_0"
    row.set_metadata("k", "v")
    projected = row.project_columns([2, 0])
    assert projected.values == [row.values[2], row.values[0]]
    assert projected.table_name == row.table_name
    assert projected.worker_id == "worker1"
    assert projected.shard_id == "users_shard_0"
    assert projected.metadata == row.metadata
    projected.set_metadata("k", "changed")
    assert row.get_metadata("k") == "v"


def test_project_columns_missing_index_raises():
    with pytest.raises(IndexError):
        make_row().project_columns([0, 9])


def test_str_joins_with_commas():
    assert str(Row(["a", "b", "c"], "t")) == "a,b,c"


def test_default_table_name():
    assert Row(["x"]).table_name == "unknown"


def test_to_json_round_trip():
    row = make_row()
    row.set_metadata("k", "v")
    decoded = json.loads(row.to_json())
    assert decoded == {
        "values": row.values,
        "metadata": {"k": "v"},
        "table_name": "users",
        "worker_id": None,
        "shard_id": None,
    }
    assert list(decoded) == ["values", "metadata", "table_name", "worker_id", "shard_id"]