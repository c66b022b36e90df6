"""Persistent option backends.

A backend stores one JSON-compatible dict per option name.  The settings
store only ever needs two calls:

- ``load(option_name)``: the last written dict, or ``{}``
- ``write(option_name, data)``: replace the stored dict, returning success
"""

import copy
import json
import logging
import os
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)


class OptionBackend:
    """Base class for option storage."""

    def load(self, option_name: str) -> dict:
        raise NotImplementedError

    def write(self, option_name: str, data: dict) -> bool:
        raise NotImplementedError


class MemoryBackend(OptionBackend):
    """Keep options in a process-local dict."""

    def __init__(self, initial: dict | None = None):
        self._options: dict[str, dict] = copy.deepcopy(initial) if initial else {}

    def load(self, option_name: str) -> dict:
        stored = self._options.get(option_name)
        if not isinstance(stored, dict):
            return {}
        return copy.deepcopy(stored)

    def write(self, option_name: str, data: dict) -> bool:
        self._options[option_name] = copy.deepcopy(data)
        return True


class JsonFileBackend(OptionBackend):
    """Persist every option as one entry of a single JSON document."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def _load_document(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.error("Could not read options file %s: %s", self._path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self, option_name: str) -> dict:
        stored = self._load_document().get(option_name)
        return stored if isinstance(stored, dict) else {}

    def write(self, option_name: str, data: dict) -> bool:
        document = self._load_document()
        document[option_name] = data
        try:
            txt = json.dumps(document, indent=2)
        except (TypeError, ValueError) as exc:
            logger.error("Could not encode option %s: %s", option_name, exc)
            return False

        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp.write_text(txt, encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            logger.error("Could not write option %s to %s: %s", option_name, self._path, exc)
            tmp.unlink(missing_ok=True)
            return False
        return True


class SqliteBackend(OptionBackend):
    """Store options as JSON text in an SQLite ``options`` table."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self._path))

    def _ensure_schema(self) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS options(
                        option_name  TEXT PRIMARY KEY,
                        option_value TEXT NOT NULL
                    )
                    """
                )
        finally:
            conn.close()

    def load(self, option_name: str) -> dict:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT option_value FROM options WHERE option_name = ?",
                (option_name,),
            ).fetchone()
        except sqlite3.Error as exc:
            logger.error("Could not read option %s from %s: %s", option_name, self._path, exc)
            return {}
        finally:
            conn.close()

        if row is None:
            return {}
        try:
            stored = json.loads(row[0])
        except json.JSONDecodeError:
            return {}
        return stored if isinstance(stored, dict) else {}

    def write(self, option_name: str, data: dict) -> bool:
        try:
            payload = json.dumps(data)
        except (TypeError, ValueError) as exc:
            logger.error("Could not encode option %s: %s", option_name, exc)
            return False

        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO options (option_name, option_value)
                    VALUES (?, ?)
                    ON CONFLICT(option_name) DO
                    UPDATE SET option_value = excluded.option_value
                    """,
                    (option_name, payload),
                )
        except sqlite3.Error as exc:
            logger.error("Could not write option %s to %s: %s", option_name, self._path, exc)
            return False
        finally:
            conn.close()
        return True


BACKENDS = {
    "memory": MemoryBackend,
    "json": JsonFileBackend,
    "sqlite": SqliteBackend,
}


def create_backend(kind: str, path: str | Path | None = None) -> OptionBackend:
    """Build a backend by name (``memory``, ``json`` or ``sqlite``)."""
    kind = (kind or "").strip().lower()
    if kind not in BACKENDS:
        raise ValueError(f"Unknown settings backend: {kind!r}")
    if kind == "memory":
        return MemoryBackend()
    if not path:
        raise ValueError(f"The {kind} backend needs a storage path")
    return BACKENDS[kind](path)
