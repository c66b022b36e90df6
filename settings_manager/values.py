"""Value normalisation rules shared by the settings store."""

import json
from collections.abc import Mapping
from typing import Any


def is_empty_value(value: Any) -> bool:
    """Classify values that clear a setting instead of being stored.

    Booleans and numbers are never empty, so ``0`` and ``False`` remain
    valid stored values.  ``None``, ``""`` and empty mappings or sequences
    are empty.
    """
    if isinstance(value, (bool, int, float)):
        return False
    if value is None:
        return True
    if isinstance(value, (str, bytes, Mapping, list, tuple, set, frozenset)):
        return len(value) == 0
    return False


def decode_json_string(value: Any) -> Any:
    """Decode strings that look like a JSON object or array.

    Anything that fails to decode is returned untouched.
    """
    if not isinstance(value, str) or not value.startswith(("{", "[")):
        return value
    try:
        return json.loads(value)
    except (json.JSONDecodeError, TypeError):
        return value


def collapse_value_label(value: Any) -> Any:
    """Reduce a ``{"value": ..., "label": ...}`` select option to its value.

    Any two-entry mapping with a non-None ``value`` entry qualifies, whatever
    the name of the other entry.
    """
    if (
        isinstance(value, Mapping)
        and len(value) == 2
        and value.get("value") is not None
    ):
        return value["value"]
    return value


def values_differ(a: Any, b: Any) -> bool:
    """Type-strict inequality used when diffing against defaults.

    ``1``, ``1.0`` and ``True`` all compare different here.  Dicts and
    lists are compared member by member under the same rule; a list and a
    tuple with equal members are the same value, since JSON storage hands
    tuples back as lists.
    """
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if len(a) != len(b):
            return True
        return any(values_differ(x, y) for x, y in zip(a, b))
    if type(a) is not type(b):
        return True
    if isinstance(a, dict):
        if a.keys() != b.keys():
            return True
        return any(values_differ(a[k], b[k]) for k in a)
    return a != b
