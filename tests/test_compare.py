"""Tests for primitive kinds and structural equality."""

import math

import pytest

from casework.compare import Tolerance, is_structured, primitive_kind, structural_equal
from tests.helpers import Point


class Label:
    def __init__(self, x, y, label):
        self.x = x
        self.y = y
        self.label = label


# --- primitive_kind ---


@pytest.mark.parametrize(
    "value, kind",
    [
        (None, "nil"),
        (True, "boolean"),
        (False, "boolean"),
        (1, "number"),
        (1.5, "number"),
        (2j, "number"),
        ("abc", "string"),
        (b"abc", "bytes"),
        (len, "function"),
        (lambda: None, "function"),
        (int, "function"),
        ([1, 2], "table"),
        ({"a": 1}, "table"),
        (Point(1, 2), "table"),
    ],
)
def test_primitive_kind(value, kind):
    assert primitive_kind(value) == kind


def test_is_structured():
    assert is_structured({}) is True
    assert is_structured("abc") is False


# --- exact comparison ---


def test_mappings_ignore_key_order():
    assert structural_equal({"a": 1, "b": 2}, {"b": 2, "a": 1}) is True


def test_mappings_with_different_keys_are_not_equal():
    assert structural_equal({"a": 11, "b": 22}, {"c": 11, "d": 22}) is False
    assert structural_equal({"a": 11, "b": 22}, {"a": 33, "b": 22}) is False


def test_sequences_of_different_length_are_not_equal():
    assert structural_equal([1, 2, 3], [1, 2]) is False


def test_lists_and_tuples_compare_element_wise():
    assert structural_equal([1, 2, 3], (1, 2, 3)) is True


def test_nested_structures():
    assert structural_equal({"a": [1, {"b": "c"}]}, {"a": [1, {"b": "c"}]}) is True
    assert structural_equal({"a": [1, {"b": "c"}]}, {"a": [1, {"b": "d"}]}) is False


def test_kinds_must_match():
    assert structural_equal(123, "123") is False
    assert structural_equal(True, 1) is False
    assert structural_equal(None, False) is False


def test_int_and_float_compare_by_value():
    assert structural_equal(1, 1.0) is True


def test_sets_compare_by_membership():
    assert structural_equal({1, 2}, {2, 1}) is True
    assert structural_equal({1, 2}, {1, 3}) is False


def test_objects_of_same_type_compare_fields():
    assert structural_equal(Point(1, 2, "a"), Point(1, 2, "a")) is True
    assert structural_equal(Point(1, 2, "a"), Point(1, 2, "b")) is False


def test_object_and_mapping_compare_fields():
    assert structural_equal(Point(1, 2), {"x": 1, "y": 2, "label": ""}) is True
    assert structural_equal({"x": 1, "y": 2, "label": ""}, Point(1, 2)) is True
    assert structural_equal(Point(1, 2), {"x": 1, "y": 2}) is False


def test_objects_of_different_types_compare_fields():
    assert structural_equal(Point(1, 2, "a"), Label(1, 2, "a")) is True
    assert structural_equal(Point(1, 2, "a"), Label(1, 3, "a")) is False


def test_object_and_list_are_not_equal():
    assert structural_equal(Point(1, 2), [1, 2, ""]) is False


def test_nan_is_never_equal():
    nan = float("nan")
    assert structural_equal(nan, nan) is False
    assert structural_equal(nan, nan, tolerant=True) is False


def test_infinities():
    assert structural_equal(math.inf, math.inf) is True
    assert structural_equal(math.inf, -math.inf, tolerant=True) is False


def test_cyclic_structures_terminate():
    a = [1]
    a.append(a)
    b = [1]
    b.append(b)
    assert structural_equal(a, b) is True


# --- tolerant comparison ---


def test_tolerance_only_applies_in_tolerant_mode():
    assert structural_equal(0.1 + 0.2, 0.3, tolerant=True) is True
    assert structural_equal(0.1 + 0.2, 0.3, tolerant=False) is False


@pytest.mark.parametrize(
    "a, b",
    [
        (100000000000000.01, 100000000000000.011),
        (3.14159265358979323846, 3.14159265358979324),
        (math.sqrt(2) * math.sqrt(2), 2),
        (-math.sqrt(2) * math.sqrt(2), -2),
    ],
)
def test_almost_equal_numbers(a, b):
    assert structural_equal(a, b, tolerant=True) is True


@pytest.mark.parametrize("a, b", [(100.01, 100.011), (0.001, 0.0010000001)])
def test_not_almost_equal_numbers(a, b):
    assert structural_equal(a, b, tolerant=True) is False


def test_tolerance_applies_to_nested_numbers():
    assert structural_equal({"x": [0.1 + 0.2]}, {"x": [0.3]}, tolerant=True) is True
    assert structural_equal({"x": [0.1 + 0.2]}, {"x": [0.3]}) is False


def test_custom_tolerance():
    loose = Tolerance(abs_tol=1e-3)
    assert loose.close(1.0, 1.0005) is True
    assert structural_equal(1.0, 1.0005, tolerant=True, tolerance=loose) is True
    assert structural_equal(1.0, 1.0005, tolerant=True) is False


def test_complex_numbers_use_tolerance():
    assert structural_equal(1 + 1j, 1 + 1.0000000000001j, tolerant=True) is True


def test_huge_integers_in_tolerant_mode():
    assert structural_equal(10**400, 10**400, tolerant=True) is True
    assert structural_equal(10**400, 10**400 + 1, tolerant=True) is True
    assert structural_equal(10**400, 2 * 10**400, tolerant=True) is False
    assert structural_equal(10**400, math.inf, tolerant=True) is False
