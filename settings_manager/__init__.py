"""
Settings Manager.

Cached access to an application's settings, stored as a single dict under
one option name in a pluggable backend.

Features:
- One backend read per store instance (per request in the web app)
- Dot-notation keys for nested values
- Defaults merged under stored overrides
- JSON strings and value/label pairs decoded on read
- Only values that differ from their default are persisted
- Filter hooks around get, update and all
"""

from settings_manager.backends import (
    JsonFileBackend,
    MemoryBackend,
    OptionBackend,
    SqliteBackend,
    create_backend,
)
from settings_manager.hooks import HookDispatcher
from settings_manager.manager import SettingsStore

__all__ = [
    "SettingsStore",
    "HookDispatcher",
    "OptionBackend",
    "MemoryBackend",
    "JsonFileBackend",
    "SqliteBackend",
    "create_backend",
]
