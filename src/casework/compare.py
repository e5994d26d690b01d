"""Primitive kinds and generic structural equality."""

from __future__ import annotations

import cmath
import inspect
import math
from collections.abc import Mapping, Set
from dataclasses import dataclass
from fractions import Fraction
from typing import Any

STRUCTURED = "table"


@dataclass(frozen=True)
class Tolerance:
    """Numeric tolerance used by "almost" comparisons.

    Two numbers are almost equal when ``math.isclose`` accepts them with the
    given relative and absolute tolerances. The default relative tolerance of
    1e-9 absorbs accumulated binary rounding (``0.1 + 0.2`` vs ``0.3``) while
    still separating values that differ in their seventh significant digit.
    """

    rel_tol: float = 1e-9
    abs_tol: float = 0.0

    def close(self, a: complex, b: complex) -> bool:
        if a == b:
            return True
        if isinstance(a, complex) or isinstance(b, complex):
            return cmath.isclose(a, b, rel_tol=self.rel_tol, abs_tol=self.abs_tol)
        try:
            return math.isclose(a, b, rel_tol=self.rel_tol, abs_tol=self.abs_tol)
        except OverflowError:
            # ints beyond float range
            if not all(math.isfinite(x) for x in (a, b) if isinstance(x, float)):
                return False
            diff = abs(Fraction(a) - Fraction(b))
            largest = max(abs(Fraction(a)), abs(Fraction(b)))
            return diff <= max(Fraction(self.rel_tol) * largest, Fraction(self.abs_tol))


DEFAULT_TOLERANCE = Tolerance()


def primitive_kind(value: Any) -> str:
    """Return the primitive kind name of *value*.

    Everything that is not a scalar, a string or a callable is a structured
    value and reports the generic ``"table"`` kind.
    """
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float, complex)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (bytes, bytearray)):
        return "bytes"
    if inspect.isroutine(value) or inspect.isclass(value):
        return "function"
    return STRUCTURED


def is_structured(value: Any) -> bool:
    return primitive_kind(value) == STRUCTURED


def structural_equal(
    a: Any,
    b: Any,
    tolerant: bool = False,
    tolerance: Tolerance = DEFAULT_TOLERANCE,
) -> bool:
    """Compare two values recursively.

    Mappings are compared key by key regardless of insertion order, lists and
    tuples element by element. With *tolerant* set, numbers found anywhere in
    the walk are compared with *tolerance* instead of ``==``.
    """
    return _equal(a, b, tolerant, tolerance, set())


def _equal(
    a: Any,
    b: Any,
    tolerant: bool,
    tolerance: Tolerance,
    seen: set[tuple[int, int]],
) -> bool:
    if a is b and not _is_nan(a):
        return True

    kind = primitive_kind(a)
    if kind != primitive_kind(b):
        return False

    if kind == "number":
        return tolerance.close(a, b) if tolerant else a == b
    if kind != STRUCTURED:
        return a == b

    # A pair already being compared further up is assumed equal so cycles end.
    pair = (id(a), id(b))
    if pair in seen:
        return True
    seen.add(pair)
    try:
        return _equal_structured(a, b, tolerant, tolerance, seen)
    finally:
        seen.discard(pair)


def _equal_structured(
    a: Any,
    b: Any,
    tolerant: bool,
    tolerance: Tolerance,
    seen: set[tuple[int, int]],
) -> bool:
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if a.keys() != b.keys():
            return False
        return all(_equal(a[key], b[key], tolerant, tolerance, seen) for key in a)

    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(_equal(x, y, tolerant, tolerance, seen) for x, y in zip(a, b))

    if isinstance(a, Set) and isinstance(b, Set):
        return a == b

    if type(a) is type(b) and hasattr(a, "__dict__") and hasattr(b, "__dict__"):
        return _equal(vars(a), vars(b), tolerant, tolerance, seen)

    # Plain objects match mappings and other plain objects field by field.
    fields_a, fields_b = _fields(a), _fields(b)
    if fields_a is not None and fields_b is not None:
        return _equal(fields_a, fields_b, tolerant, tolerance, seen)

    return bool(a == b)


def _fields(value: Any) -> Mapping | None:
    if isinstance(value, Mapping):
        return value
    if isinstance(value, (list, tuple, Set)) or not hasattr(value, "__dict__"):
        return None
    return vars(value)


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)
