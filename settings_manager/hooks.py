"""Filter hooks: let host code observe or rewrite settings values."""

import logging
from collections import defaultdict
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10

Filter = Callable[..., Any]


class HookDispatcher:
    """Registry of named filter chains.

    A filter receives the current value followed by the hook's context
    arguments and returns the (possibly replaced) value::

        hooks = HookDispatcher()
        hooks.add_filter("shop_get_setting", lambda value, key, fallback: value)
        hooks.apply("shop_get_setting", "EUR", "currency", None)

    Filters run in ascending priority, then in registration order.  A hook
    without filters returns its value unchanged.
    """

    def __init__(self):
        self._filters: dict[str, dict[int, list[Filter]]] = defaultdict(dict)

    # ── Registration ─────────────────────────────────────────────

    def add_filter(self, name: str, callback: Filter, priority: int = DEFAULT_PRIORITY) -> None:
        self._filters[name].setdefault(priority, []).append(callback)

    def remove_filter(self, name: str, callback: Filter, priority: Optional[int] = None) -> bool:
        """Unregister *callback*; returns False if it was not registered."""
        chains = self._filters.get(name)
        if not chains:
            return False
        priorities = [priority] if priority is not None else sorted(chains)
        for prio in priorities:
            callbacks = chains.get(prio, [])
            if callback in callbacks:
                callbacks.remove(callback)
                if not callbacks:
                    del chains[prio]
                if not chains:
                    del self._filters[name]
                return True
        return False

    def has_filter(self, name: str) -> bool:
        return bool(self._filters.get(name))

    # ── Dispatch ─────────────────────────────────────────────────

    def apply(self, name: str, value: Any, *context: Any) -> Any:
        """Run *value* through every filter registered under *name*."""
        chains = self._filters.get(name)
        if not chains:
            return value

        for priority in sorted(chains):
            for callback in list(chains[priority]):
                try:
                    value = callback(value, *context)
                except Exception:
                    logger.exception("Filter %r on hook %s failed", callback, name)
        return value
