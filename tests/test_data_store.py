import pytest

from shardql.data_store import DataStore, Table


@pytest.fixture
def store():
    return DataStore()


def test_demo_tables_present(store):
    assert sorted(store.get_table_names()) == ["orders", "products", "users"]
    assert store.get_table_count() == len(store.get_table_names())


def test_get_users_table(store):
    users = store.get_table("users")
    assert users.columns == ["id", "name", "age", "email"]
    assert users.rows[0] == ["1", "John Doe", "30", "john@example.com"]


def test_missing_table(store):
    assert store.get_table("missing") is None


def test_rows_match_columns(store):
    for table in store.get_all_tables():
        assert all(len(row) == len(table.columns) for row in table.rows)


def test_total_rows_is_sum(store):
    assert store.get_total_rows() == sum(len(t.rows) for t in store.get_all_tables())


def test_add_table(store):
    before_rows = store.get_total_rows()
    store.add_table(Table("extra", ["a"], [["x"], ["y"]]))
    assert store.get_table("extra").rows == [["x"], ["y"]]
    assert "extra" in store.get_table_names()
    assert store.get_total_rows() == before_rows + 2


def test_add_table_replaces_same_name(store):
    count = store.get_table_count()
    store.add_table(Table("users", ["id"], []))
    assert store.get_table_count() == count
    assert store.get_table("users").columns == ["id"]