"""Type and equality registries used by a test set to compare custom values."""

from __future__ import annotations

from typing import Any, Protocol


class TypeClassifier(Protocol):
    """Return a type name for *value*, or a falsy value if it is not recognised."""

    def __call__(self, value: Any) -> str | None: ...


class EqualityStrategy(Protocol):
    """Decide whether *a* and *b* are equal; *almost* requests tolerant comparison."""

    def __call__(self, a: Any, b: Any, almost: bool) -> bool: ...


class TypeRegistry:
    """Ordered list of type classifiers. The first truthy answer wins."""

    def __init__(self) -> None:
        self._checks: list[TypeClassifier] = []

    def add(self, func: TypeClassifier) -> None:
        self._checks.append(func)

    def classify(self, value: Any) -> str | None:
        for check in self._checks:
            result = check(value)
            if result:
                return result
        return None

    def __len__(self) -> int:
        return len(self._checks)


class EqualityRegistry:
    """Equality strategies keyed by type name."""

    def __init__(self) -> None:
        self._checks: dict[str, EqualityStrategy] = {}

    def add(self, type_name: str, func: EqualityStrategy) -> None:
        self._checks[type_name] = func

    def get(self, type_name: str) -> EqualityStrategy | None:
        return self._checks.get(type_name)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._checks

    def __len__(self) -> int:
        return len(self._checks)
