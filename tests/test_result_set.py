import json

from shardql.result_set import ResultSet
from shardql.row import Row


def _sample() -> ResultSet:
    return ResultSet(
        query_id="q1",
        rows=[Row(["1", "Alice"], "users"), Row(["2", "Bob"], "users")],
        column_names=["id", "name"],
        execution_time_ms=12,
    )


def test_new_result_set_is_empty():
    rs = ResultSet("q0")
    assert rs.is_empty()
    assert rs.row_count() == 0
    assert rs.column_count() == 0
    assert rs.execution_time_ms == 0


def test_add_row_and_rows():
    rs = ResultSet("q0")
    rs.add_row(Row(["a"]))
    rs.add_rows([Row(["b"]), Row(["c"])])
    assert rs.row_count() == 3
    assert [r.values[0] for r in rs.rows] == ["a", "b", "c"]
    assert not rs.is_empty()


def test_get_row_in_and_out_of_range():
    rs = _sample()
    assert rs.get_row(1).values == ["2", "Bob"]
    assert rs.get_row(2) is None
    assert rs.get_row(-1) is None


def test_metadata_roundtrip():
    rs = ResultSet("q0")
    rs.add_metadata("source", "worker1")
    assert rs.get_metadata("source") == "worker1"
    assert rs.get_metadata("missing") is None


def test_to_csv_format():
    assert _sample().to_csv() == "id,name\n1,Alice\n2,Bob\n"


def test_to_csv_without_rows_has_header_only():
    rs = ResultSet("q0", column_names=["id", "name"])
    assert rs.to_csv() == "id,name\n"


def test_to_json_roundtrip():
    rs = _sample()
    rs.add_metadata("k", "v")
    data = json.loads(rs.to_json())
    assert data["query_id"] == "q1"
    assert data["column_names"] == ["id", "name"]
    assert data["execution_time_ms"] == 12
    assert data["metadata"] == {"k": "v"}
    assert [r["values"] for r in data["rows"]] == [["1", "Alice"], ["2", "Bob"]]
    assert data["rows"][0]["table_name"] == "users"
    assert data["rows"][0]["worker_id"] is None


def test_clear_removes_rows_only():
    rs = _sample()
    rs.clear()
    assert rs.is_empty()
    assert rs.column_names == ["id", "name"]


def test_merge_combines_rows_time_and_metadata():
    first = _sample()
    first.add_metadata("a", "1")
    first.add_metadata("shared", "old")
    second = ResultSet("q2", rows=[Row(["3", "Carol"])], execution_time_ms=8)
    second.add_metadata("shared", "new")
    first.merge(second)
    assert first.row_count() == 3
    assert first.rows[-1].values == ["3", "Carol"]
    assert first.execution_time_ms == 12 + 8
    assert first.metadata == {"a": "1", "shared": "new"}
    assert first.query_id == "q1"


def test_str_with_rows():
    text = str(_sample())
    assert text == (
        "ResultSet for query: q1\n"
        "Rows: 2, Columns: 2\n"
        "Execution time: 12ms\n"
        "Data:\n"
        "id,name\n1,Alice\n2,Bob\n\n"
    )


def test_str_without_rows_has_no_data_section():
    text = str(ResultSet("q9"))
    assert "Data:" not in text
    assert text.startswith("ResultSet for query: q9\n")