"""Human readable rendering of arbitrary values for failure messages."""

from __future__ import annotations

from collections.abc import Mapping, Set
from typing import Any

from casework.compare import primitive_kind


def serialize(value: Any, max_depth: int = 4) -> str:
    """Render *value* as a short string. Never raises."""
    return _render(value, max_depth, set())


def _render(value: Any, depth: int, active: set[int]) -> str:
    kind = primitive_kind(value)
    if kind != "table":
        if kind == "function":
            return f"<function {getattr(value, '__qualname__', '?')}>"
        return _safe_repr(value)

    if id(value) in active:
        return "<cycle>"
    if depth <= 0:
        return "..."

    active.add(id(value))
    try:
        if isinstance(value, Mapping):
            items = sorted(
                f"{_render_key(k, depth - 1, active)} = {_render(v, depth - 1, active)}"
                for k, v in value.items()
            )
            return "{" + ", ".join(items) + "}"
        if isinstance(value, list):
            return "[" + ", ".join(_render(v, depth - 1, active) for v in value) + "]"
        if isinstance(value, tuple):
            inner = ", ".join(_render(v, depth - 1, active) for v in value)
            return "(" + inner + ("," if len(value) == 1 else "") + ")"
        if isinstance(value, Set):
            items = sorted(_render(v, depth - 1, active) for v in value)
            return "{" + ", ".join(items) + "}" if items else "set()"
        fields = _fields(value)
        if fields is not None:
            items = [f"{k} = {_render(v, depth - 1, active)}" for k, v in fields.items()]
            return f"{type(value).__name__}{{{', '.join(items)}}}"
        return _safe_repr(value)
    except Exception:
        return _safe_repr(value)
    finally:
        active.discard(id(value))


def _render_key(key: Any, depth: int, active: set[int]) -> str:
    if isinstance(key, str) and key.isidentifier():
        return key
    return "[" + _render(key, depth, active) + "]"


def _fields(value: Any) -> dict[str, Any] | None:
    # Only plain instances: objects that define their own __repr__ keep it.
    if not hasattr(value, "__dict__") or type(value).__repr__ is not object.__repr__:
        return None
    return vars(value)


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception:
        return f"<unrepresentable {type(value).__name__}>"
