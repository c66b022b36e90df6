"""Backend service initialization for the settings web app."""

from flask import current_app, g

from settings_manager.manager import SettingsStore


def get_hook_dispatcher():
    """Return the app-wide HookDispatcher for registering filters."""
    return current_app.extensions["settings_hooks"]


def get_backend():
    """Return the app-wide option backend."""
    return current_app.extensions["settings_backend"]


def get_settings_store() -> SettingsStore:
    """Return the SettingsStore for the current request.

    One store is built per request and kept on ``flask.g``, so the backend
    is read at most once per request.
    """
    store = g.get("settings_store")
    if store is None:
        cfg = current_app.config
        store = SettingsStore(
            cfg["SETTINGS_OPTION_NAME"],
            defaults=cfg.get("SETTINGS_DEFAULTS") or {},
            backend=get_backend(),
            hooks=get_hook_dispatcher(),
        )
        g.settings_store = store
    return store
