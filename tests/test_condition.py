import pytest

from shardql.condition import Condition, DataType, Operator
from shardql.row import Row


def create_test_rows(count):
    return [
        Row(
            [
                str(i),
                f"User_{i}",
                str(20 + i % 50),
                f"City_{i % 10}",
                f"user{i}@example.com",
            ],
            "users",
        )
        for i in range(count)
    ]


def age_condition(op, value):
    return Condition("age", op, value, DataType.INTEGER)


def test_filter_age_greater_than_25_over_test_rows():
    condition = age_condition(Operator.GREATER_THAN, "25")
    rows = create_test_rows(1000)
    matched = sum(condition.evaluate(row, 2) for row in rows)
    assert matched == 880


def test_filter_age_greater_than_30_over_test_rows():
    condition = age_condition(Operator.GREATER_THAN, "30")
    rows = create_test_rows(1000)
    matched = sum(condition.evaluate(row, 2) for row in rows)
    assert matched == 780


@pytest.mark.parametrize(
    "op, value, expected",
    [
        (Operator.GREATER_THAN, "25", True),
        (Operator.GREATER_THAN, "30", False),
        (Operator.LESS_THAN, "31", True),
        (Operator.GREATER_THAN_EQUALS, "30", True),
        (Operator.LESS_THAN_EQUALS, "29.5", False),
        (Operator.EQUALS, "30", True),
        (Operator.EQUALS, "30.0", False),
        (Operator.NOT_EQUALS, "25", True),
    ],
)
def test_operators(op, value, expected):
    row = Row(["1", "John Doe", "30"], "users")
    assert age_condition(op, value).evaluate(row, 2) is expected


@pytest.mark.parametrize(
    "pattern, expected",
    [
        ("John%", True),
        ("%Doe", True),
        ("%hn D%", True),
        ("John Doe", True),
        ("Jane%", False),
        ("%Smith", False),
        ("John", False),
    ],
)
def test_like(pattern, expected):
    row = Row(["John Doe"], "users")
    condition = Condition("name", Operator.LIKE, pattern, DataType.STRING)
    assert condition.evaluate(row, 0) is expected


def test_in_operator_trims_values():
    condition = Condition("city", Operator.IN, "New York, Los Angeles", DataType.STRING)
    assert condition.evaluate(Row(["Los Angeles"]), 0) is True
    assert condition.evaluate(Row(["New York"]), 0) is True
    assert condition.evaluate(Row(["Boston"]), 0) is False


def test_missing_column_raises():
    with pytest.raises(IndexError):
        age_condition(Operator.EQUALS, "30").evaluate(Row(["1"]), 2)


def test_non_numeric_comparison_raises():
    row = Row(["1", "John Doe", "thirty"])
    with pytest.raises(ValueError):
        age_condition(Operator.GREATER_THAN, "25").evaluate(row, 2)
    with pytest.raises(ValueError):
        age_condition(Operator.GREATER_THAN, "abc").evaluate(Row(["1", "x", "30"]), 2)


def test_display():
    assert str(age_condition(Operator.GREATER_THAN, "25")) == "age > 25"
    assert str(Operator.LIKE) == "LIKE"
    assert str(Operator.NOT_EQUALS) == "!="