"""Cached, defaults-aware settings store over a persistent option backend."""

import copy
import logging
from typing import Any, Optional

from settings_manager.backends import MemoryBackend, OptionBackend
from settings_manager.hooks import HookDispatcher
from settings_manager.paths import (
    MISSING,
    delete_nested,
    get_nested,
    is_path,
    set_nested,
)
from settings_manager.values import (
    collapse_value_label,
    decode_json_string,
    is_empty_value,
    values_differ,
)

logger = logging.getLogger(__name__)


class SettingsStore:
    """Read and write the settings saved under a single option name.

    The whole settings dict is fetched from the backend once, on first use,
    and merged over the defaults.  Writes only persist the keys whose value
    differs from its default, so a store sitting at its defaults saves ``{}``.

    Keys support dot notation (``smtp.host``) for values nested in dicts.
    Three filter hooks, prefixed with the store's namespace, let host code
    rewrite values:

    - ``{namespace}_get_setting``: ``(value, key, fallback)`` on ``get``
    - ``{namespace}_pre_update_setting``: ``(value, key)`` before ``update``
    - ``{namespace}_get_all_settings``: ``(settings,)`` on ``all``
    """

    def __init__(
        self,
        option_name: str,
        defaults: Optional[dict] = None,
        namespace: str = "",
        backend: Optional[OptionBackend] = None,
        hooks: Optional[HookDispatcher] = None,
    ):
        if not option_name:
            raise ValueError("option_name is required")
        self._option_name = option_name
        self._defaults: dict = copy.deepcopy(defaults) if defaults else {}
        self._namespace = namespace or option_name.replace("-", "_")
        self._backend = backend if backend is not None else MemoryBackend()
        self._hooks = hooks if hooks is not None else HookDispatcher()
        self._cache: Optional[dict] = None

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def defaults(self) -> dict:
        return copy.deepcopy(self._defaults)

    @property
    def is_loaded(self) -> bool:
        return self._cache is not None

    # ── Public API ───────────────────────────────────────────────

    def get(self, key: str, fallback: Any = None) -> Any:
        """Return a setting, falling back to *fallback* then the default."""
        cache = self._load_cache()

        if is_path(key):
            value = get_nested(cache, key)
        else:
            value = cache.get(key, MISSING)

        if value is MISSING or value is None:
            value = fallback if fallback is not None else self._defaults.get(key)

        value = decode_json_string(value)
        value = collapse_value_label(value)
        value = copy.deepcopy(value)

        return self._hooks.apply(f"{self._namespace}_get_setting", value, key, fallback)

    def update(self, key: str, value: Any) -> bool:
        """Store a setting; an empty value deletes it instead."""
        if not key:
            return False

        cache = self._load_cache()

        value = self._hooks.apply(f"{self._namespace}_pre_update_setting", value, key)

        if is_empty_value(value):
            return self.delete(key)

        value = copy.deepcopy(value)
        if is_path(key):
            set_nested(cache, key, value)
        else:
            cache[key] = value

        return self._save()

    def delete(self, key: str) -> bool:
        if not key:
            return False

        cache = self._load_cache()

        if is_path(key):
            delete_nested(cache, key)
        else:
            cache.pop(key, None)

        return self._save()

    def all(self) -> dict:
        """Return the merged view of defaults and stored overrides."""
        cache = self._load_cache()
        return self._hooks.apply(f"{self._namespace}_get_all_settings", copy.deepcopy(cache))

    def has(self, key: str) -> bool:
        cache = self._load_cache()
        if is_path(key):
            return get_nested(cache, key) is not MISSING
        return key in cache

    def reset(self) -> bool:
        """Drop every stored override and persist the defaults."""
        self._cache = copy.deepcopy(self._defaults)
        logger.info("Resetting settings %s to defaults", self._option_name)
        return self._save()

    def clear_cache(self) -> None:
        """Forget the cached settings; the next access reloads them."""
        self._cache = None

    def register_defaults(self, defaults: dict) -> None:
        """Merge more defaults in, e.g. from another component.

        Newly registered defaults win over earlier ones.  An already loaded
        cache only gains the keys it lacks; stored overrides are kept.
        """
        self._defaults.update(copy.deepcopy(defaults))

        if self._cache is not None:
            for key, value in defaults.items():
                if key not in self._cache:
                    self._cache[key] = copy.deepcopy(value)

    def get_option_name(self) -> str:
        return self._option_name

    # ── Private helpers ──────────────────────────────────────────

    def _load_cache(self) -> dict:
        if self._cache is None:
            stored = self._backend.load(self._option_name)
            if not isinstance(stored, dict):
                stored = {}

            merged = copy.deepcopy(self._defaults)
            merged.update(stored)
            self._cache = merged
            logger.debug(
                "Loaded settings %s (%d stored override(s))",
                self._option_name, len(stored),
            )
        return self._cache

    def _save(self) -> bool:
        to_save = {
            key: value
            for key, value in self._cache.items()
            if key not in self._defaults or values_differ(value, self._defaults[key])
        }

        ok = bool(self._backend.write(self._option_name, to_save))
        if ok:
            logger.debug("Saved settings %s (%d key(s))", self._option_name, len(to_save))
        else:
            logger.error("Backend failed to save settings %s", self._option_name)
        return ok
