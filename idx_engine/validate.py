"""Input validator — does a set of values satisfy an input schema node?"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from .errors import InputSchemaError
from .normalize import unwrap_form_value


def has_value(value: Any) -> bool:
    """Present and non-empty: ``None``, ``""`` and empty collections are not."""
    if value is None:
        return False
    if isinstance(value, (str, bytes, Mapping, list, tuple, set, frozenset)):
        return len(value) > 0
    return True


def _lookup(values: Any, name: Any) -> Any:
    if isinstance(values, Mapping):
        return values.get(name)
    return None


def _is_schema_list(value: Any) -> bool:
    return (
        isinstance(value, Sequence)
        and not isinstance(value, (str, bytes))
        and all(isinstance(item, Mapping) for item in value)
    )


def _option_fields(option: Any) -> list:
    """Sub-schema of an object option, normalising any leftover form wrapping."""
    if not isinstance(option, Mapping):
        return []
    fields = unwrap_form_value(option).get("value")
    return list(fields) if _is_schema_list(fields) else []


def _object_option_satisfied(options: Sequence, selected: Any) -> bool:
    if not isinstance(selected, Mapping) or not selected.get("id"):
        return False
    for option in options:
        fields = _option_fields(option)
        id_schema = next((f for f in fields if f.get("name") == "id"), None)
        if id_schema is None or id_schema.get("value") != selected["id"]:
            continue
        return all(bool(selected.get(f.get("name"))) for f in fields if f.get("required"))
    return False


def _check(node: Mapping[str, Any], values: Any, required_by_parent: bool) -> bool:
    name = node.get("name")
    value = node.get("value")
    options = node.get("options")
    required = node.get("required")
    is_required = bool(required) or required_by_parent

    # Composite field: every child must hold against values[name]
    if _is_schema_list(value) and value:
        nested = _lookup(values, name)
        return all(_check(child, nested, is_required) for child in value)

    if options is not None:
        if node.get("type") == "object":
            return _object_option_satisfied(options, _lookup(values, name))
        if required is False:
            return True
        if required is True:
            return bool(_lookup(values, name))
        raise InputSchemaError(
            f"Unknown options type, {json.dumps(dict(node), default=str)}", input=node
        )

    if not is_required:
        return True
    return has_value(_lookup(values, name))


def is_satisfied(input: Mapping[str, Any], values: Any) -> bool:
    """Return True when *values* supply every required part of *input*.

    Required-ness is inherited: a child of a required composite field is
    required even when its own ``required`` flag is unset.  Raises
    :class:`InputSchemaError` for primitive ``options`` whose ``required``
    flag is neither True nor False.
    """
    return _check(input, values, False)
