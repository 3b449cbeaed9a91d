import math

import pytest

from shardql.shard_key import KeyType, ShardKey


def test_defaults_to_not_primary():
    key = ShardKey("user_id", "123", KeyType.INTEGER)
    assert key.is_primary_key is False
    assert ShardKey("user_id", "1", KeyType.INTEGER, True).is_primary_key is True


def test_hash_of_empty_value_is_zero():
    key = ShardKey("user_id", "", KeyType.STRING)
    assert key.calculate_hash() == 0
    assert key.calculate_consistent_hash(3) == 0


def test_hash_is_deterministic_and_32_bit():
    for value in ["123", "abc", "héllo", "x" * 40]:
        h = ShardKey("c", value, KeyType.STRING).calculate_hash()
        assert 0 <= h < 2 ** 32
        assert ShardKey("c", value, KeyType.STRING).calculate_hash() == h


def test_hash_depends_on_value_only():
    a = ShardKey("user_id", "123", KeyType.INTEGER)
    b = ShardKey("order_id", "123", KeyType.STRING, True)
    assert a.calculate_hash() == b.calculate_hash()


def test_hash_distinguishes_values():
    hashes = {ShardKey("c", str(i), KeyType.STRING).calculate_hash() for i in range(200)}
    assert len(hashes) > 190


def test_consistent_hash_matches_hash_modulo():
    for value in ["1", "123", "user-7", "long value with spaces"]:
        key = ShardKey("c", value, KeyType.STRING)
        for shards in (1, 3, 16):
            result = key.calculate_consistent_hash(shards)
            assert result == key.calculate_hash() % shards
            assert 0 <= result < shards


def test_consistent_hash_spreads_over_shards():
    seen = {ShardKey("c", str(i), KeyType.STRING).calculate_consistent_hash(4) for i in range(100)}
    assert seen == {0, 1, 2, 3}


@pytest.mark.parametrize(
    "value, data_type, expected",
    [
        ("123", KeyType.INTEGER, 123),
        ("-7", KeyType.INTEGER, -7),
        ("9000000000", KeyType.LONG, 9000000000),
        ("2.5", KeyType.DOUBLE, 2.5),
        ("true", KeyType.BOOLEAN, True),
        ("false", KeyType.BOOLEAN, False),
        ("abc", KeyType.STRING, "abc"),
        ("2024-01-15", KeyType.DATE, "2024-01-15"),
    ],
)
def test_parse_value(value, data_type, expected):
    parsed = ShardKey("c", value, data_type).parse_value()
    assert parsed == expected
    assert type(parsed) is type(expected)


def test_parse_double_infinity():
    parsed = ShardKey("c", "inf", KeyType.DOUBLE).parse_value()
    assert parsed == math.inf


@pytest.mark.parametrize(
    "value, data_type",
    [
        ("abc", KeyType.INTEGER),
        ("9000000000", KeyType.INTEGER),
        (" 12", KeyType.INTEGER),
        ("1_000", KeyType.LONG),
        ("1.5", KeyType.LONG),
        ("x", KeyType.DOUBLE),
        (" 2.5", KeyType.DOUBLE),
        ("True", KeyType.BOOLEAN),
        ("1", KeyType.BOOLEAN),
    ],
)
def test_parse_value_errors(value, data_type):
    with pytest.raises(ValueError, match="Cannot parse"):
        ShardKey("c", value, data_type).parse_value()


@pytest.mark.parametrize(
    "column, value, valid",
    [("user_id", "1", True), ("", "1", False), ("user_id", "", False)],
)
def test_is_valid(column, value, valid):
    assert ShardKey(column, value, KeyType.STRING).is_valid() is valid


def test_str_format():
    key = ShardKey("user_id", "123", KeyType.INTEGER)
    assert str(key) == "ShardKey{column=user_id, value=123, type=INTEGER, primary=false}"