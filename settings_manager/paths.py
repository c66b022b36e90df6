"""Dot-notation access into nested settings mappings.

Keys such as ``notify_email.smtp.host`` address a value nested inside
dictionaries.  All helpers operate on the mapping passed in and mutate it
in place; callers own that mapping exclusively.
"""

from typing import Any

SEPARATOR = "."

# Returned by get_nested() when the path does not resolve.  Distinct from
# None so a stored None leaf can still be told apart from a missing one.
MISSING = object()


def is_path(key: str) -> bool:
    """Return True if *key* addresses a nested value."""
    return SEPARATOR in key


def split_path(key: str) -> list[str]:
    return key.split(SEPARATOR)


def get_nested(data: dict, key: str) -> Any:
    """Resolve a dot-notated key, or return ``MISSING``."""
    value: Any = data
    for segment in split_path(key):
        if not isinstance(value, dict) or segment not in value:
            return MISSING
        value = value[segment]
    return value


def set_nested(data: dict, key: str, value: Any) -> None:
    """Assign *value* at a dot-notated key.

    Missing intermediate segments are created.  An intermediate segment
    holding anything other than a dict is replaced by an empty dict and its
    previous value is lost.
    """
    *parents, last = split_path(key)
    node = data
    for segment in parents:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child
    node[last] = value


def delete_nested(data: dict, key: str) -> None:
    """Remove the value at a dot-notated key; a broken path is a no-op."""
    *parents, last = split_path(key)
    node = data
    for segment in parents:
        child = node.get(segment)
        if not isinstance(child, dict):
            return
        node = child
    node.pop(last, None)
