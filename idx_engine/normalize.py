"""Input normalizer — collapse protocol ``value``/``form`` wrapping."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

FORM_KEYS = frozenset({"value", "form"})


def _is_form_wrapper(key: str, value: Mapping) -> bool:
    """``{value|form: {value|form: ...}}`` — a wrapper with nothing else in it."""
    return key in FORM_KEYS and len(value) == 1 and next(iter(value)) in FORM_KEYS


def _unwrap_item(item: Any) -> Any:
    if isinstance(item, Mapping):
        return unwrap_form_value(item)
    if isinstance(item, (list, tuple)):
        return [_unwrap_item(i) for i in item]
    return item


def unwrap_form_value(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Flatten a self-describing form payload into a plain mapping.

    - keys holding ``None`` are dropped
    - sequences are unwrapped element-wise, order preserved
    - a wrapper such as ``{"value": {"form": {"value": [...]}}}`` is
      collapsed by hoisting the inner entries into the current level
    - primitives pass through unchanged

    Never mutates *payload*.  Idempotent on tree-shaped input.
    """
    result: dict[str, Any] = {}
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            if _is_form_wrapper(key, value):
                result.update(unwrap_form_value(value))
            else:
                result[key] = unwrap_form_value(value)
        elif isinstance(value, (list, tuple)):
            result[key] = [_unwrap_item(item) for item in value]
        else:
            result[key] = value
    return result
