#!/usr/bin/env python3
"""
Settings Manager - Main Entry Point.

Usage:
    python main.py get <key> [--fallback <value>]
    python main.py set <key> <value>
    python main.py delete <key>
    python main.py has <key>
    python main.py all
    python main.py reset
    python main.py serve [--host <host>] [--port <port>]

Global options (before the command):
    --backend json|sqlite   Storage backend (default: SETTINGS_BACKEND)
    --path <file>           Storage file (default: SETTINGS_PATH)
    --option-name <name>    Option the settings live under
    --defaults <file>       JSON file with default values
"""

import argparse
import json
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from config.settings import (
    LOG_FORMAT,
    LOG_LEVEL,
    SETTINGS_BACKEND,
    SETTINGS_DEFAULTS_PATH,
    SETTINGS_OPTION_NAME,
    SETTINGS_PATH,
    load_defaults_file,
)
from settings_manager.backends import create_backend
from settings_manager.manager import SettingsStore


def _store(args) -> SettingsStore:
    return SettingsStore(
        args.option_name,
        defaults=load_defaults_file(args.defaults),
        backend=create_backend(args.backend, args.path),
    )


def _print_json(value):
    print(json.dumps(value, indent=2, sort_keys=True, default=str))


def _report(ok: bool, message: str) -> int:
    if ok:
        print(message)
        return 0
    print("Failed to save settings.", file=sys.stderr)
    return 1


# ============================================================
# Commands
# ============================================================

def cmd_get(args):
    """Print a single setting."""
    _print_json(_store(args).get(args.key, args.fallback))
    return 0


def cmd_set(args):
    """Store a setting (JSON text is decoded when read back)."""
    ok = _store(args).update(args.key, args.value)
    return _report(ok, f"Saved {args.key}")


def cmd_delete(args):
    """Remove a stored setting."""
    ok = _store(args).delete(args.key)
    return _report(ok, f"Deleted {args.key}")


def cmd_has(args):
    """Exit 0 if the setting exists, 1 otherwise."""
    exists = _store(args).has(args.key)
    print("yes" if exists else "no")
    return 0 if exists else 1


def cmd_all(args):
    """Print all settings, defaults included."""
    _print_json(_store(args).all())
    return 0


def cmd_reset(args):
    """Drop every stored override."""
    ok = _store(args).reset()
    return _report(ok, "Settings reset to defaults")


def cmd_serve(args):
    """Run the web service."""
    from web import create_app

    app = create_app({
        "SETTINGS_BACKEND": args.backend,
        "SETTINGS_PATH": args.path,
        "SETTINGS_OPTION_NAME": args.option_name,
        "SETTINGS_DEFAULTS": load_defaults_file(args.defaults),
    })
    app.run(debug=args.debug, host=args.host, port=args.port)
    return 0


# ============================================================
# Parser
# ============================================================

def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(description="Settings Manager")
    parser.add_argument(
        "--backend",
        choices=["json", "sqlite"],
        default=SETTINGS_BACKEND if SETTINGS_BACKEND in ("json", "sqlite") else "json",
        help="Storage backend",
    )
    parser.add_argument("--path", default=SETTINGS_PATH, help="Storage file")
    parser.add_argument("--option-name", default=SETTINGS_OPTION_NAME, help="Option name")
    parser.add_argument("--defaults", default=SETTINGS_DEFAULTS_PATH, help="Defaults JSON file")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    get = subparsers.add_parser("get", help="Read a setting")
    get.add_argument("key", help="Setting key (dot notation allowed)")
    get.add_argument("--fallback", help="Value to print if the setting is unset")
    get.set_defaults(func=cmd_get)

    st = subparsers.add_parser("set", help="Store a setting")
    st.add_argument("key", help="Setting key (dot notation allowed)")
    st.add_argument("value", help="Value; an empty string deletes the setting")
    st.set_defaults(func=cmd_set)

    dl = subparsers.add_parser("delete", help="Delete a setting")
    dl.add_argument("key", help="Setting key (dot notation allowed)")
    dl.set_defaults(func=cmd_delete)

    hs = subparsers.add_parser("has", help="Check whether a setting exists")
    hs.add_argument("key", help="Setting key (dot notation allowed)")
    hs.set_defaults(func=cmd_has)

    al = subparsers.add_parser("all", help="Print all settings")
    al.set_defaults(func=cmd_all)

    rs = subparsers.add_parser("reset", help="Reset all settings to defaults")
    rs.set_defaults(func=cmd_reset)

    sv = subparsers.add_parser("serve", help="Run the web service")
    sv.add_argument("--host", default="127.0.0.1")
    sv.add_argument("--port", type=int, default=5000)
    sv.add_argument("--debug", action="store_true")
    sv.set_defaults(func=cmd_serve)

    return parser


def main(argv=None):
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
