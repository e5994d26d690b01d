"""Exception classes for casework.

Two separate hierarchies exist:

* ``AssertionFailure`` is raised by the assertion methods of a test set. It is
  expected and recoverable: ``TestSet.run`` catches it and records a failed
  result.
* ``CaseworkError`` and its subclasses signal a broken test suite (bad
  arguments, unbalanced groups, invalid configuration). They are never turned
  into test results and always propagate to the caller.
"""

from __future__ import annotations

from typing import Any


class AssertionFailure(AssertionError):
    """A failed assertion inside a test body."""


class CaseworkError(Exception):
    """Base class for all usage and configuration errors."""


class UsageError(CaseworkError):
    """The public API was called incorrectly."""


class ArgumentTypeError(UsageError, TypeError):
    """A public call received an argument of the wrong type or value."""

    def __init__(self, position: int, expected: str, value: Any):
        self.position = position
        self.expected = expected
        self.value = value
        super().__init__(
            f"argument {position}: expected {expected}, got {type(value).__name__}"
        )


class GroupStackError(UsageError, RuntimeError):
    """The group stack was popped or closed more often than it was opened."""


class ConfigError(CaseworkError):
    """A configuration or suite file could not be loaded."""


_KIND_CHECKS = {
    "str": lambda v: isinstance(v, str),
    "callable": callable,
    "sequence": lambda v: isinstance(v, (list, tuple)),
}


def check_argument(position: int, value: Any, expected: str) -> None:
    """Raise ArgumentTypeError unless *value* is of the *expected* kind."""
    if not _KIND_CHECKS[expected](value):
        raise ArgumentTypeError(position, expected, value)
