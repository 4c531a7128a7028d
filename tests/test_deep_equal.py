"""Tests for services/deep_equal.py."""

import copy
import math

import pytest

from services.deep_equal import deep_equal, is_present

JSON_VALUES = [
    None,
    True,
    0,
    1.5,
    "text",
    [],
    {},
    [1, [2, 3], {"a": None}],
    {"a": 1, "b": {"c": [True, "x"]}},
]


@pytest.mark.parametrize("value", JSON_VALUES)
def test_reflexive(value):
    assert deep_equal(value, value)
    assert deep_equal(value, copy.deepcopy(value))


def test_symmetric():
    pairs = [({"a": 1}, {"a": 2}), ([1, 2], [1, 2]), (1, True), (None, {})]
    for a, b in pairs:
        assert deep_equal(a, b) == deep_equal(b, a)


def test_key_order_irrelevant():
    assert deep_equal({"a": 1, "b": 2}, {"b": 2, "a": 1})


def test_nested_lists():
    assert deep_equal([1, [2, 3]], [1, [2, 3]])
    assert not deep_equal([1, 2], [2, 1])
    assert not deep_equal([1, 2], [1, 2, 3])


def test_dict_key_sets_must_match():
    assert not deep_equal({"a": 1}, {"a": 1, "b": 2})
    assert not deep_equal({"a": 1, "b": None}, {"a": 1, "c": None})


def test_bool_is_not_number():
    assert not deep_equal(True, 1)
    assert not deep_equal(0, False)


def test_int_and_float_are_numbers():
    assert deep_equal(1, 1.0)
    assert deep_equal(0.0, -0.0)


def test_none_only_equals_none():
    assert deep_equal(None, None)
    assert not deep_equal(None, 0)
    assert not deep_equal(None, {})
    assert not deep_equal({}, None)


def test_nan_never_equal():
    nan = math.nan
    assert not deep_equal(nan, nan)
    assert not deep_equal([nan], [nan])


def test_list_and_dict_differ():
    assert not deep_equal([], {})


@pytest.mark.parametrize(
    "value,expected",
    [
        ({}, True),
        ([], True),
        ("x", True),
        (0, False),
        ("", False),
        (None, False),
        (math.nan, False),
    ],
)
def test_is_present(value, expected):
    assert is_present(value) is expected
