"""REST API v1: JSON endpoints for reading and changing settings."""

import logging
import secrets

from flask import Blueprint, current_app, jsonify, request

from web.services import get_settings_store

logger = logging.getLogger(__name__)

bp = Blueprint("api", __name__)


@bp.before_request
def api_auth():
    """Require the configured API key, if one is set."""
    expected = current_app.config.get("SETTINGS_API_KEY")
    if not expected:
        return

    api_key = request.headers.get("X-API-Key") or request.args.get("api_key")
    if api_key and secrets.compare_digest(api_key, expected):
        return

    return jsonify({"error": "Authentication required. Provide X-API-Key header."}), 401


def _error(message, status=400):
    return jsonify({"error": message}), status


@bp.route("/")
def list_settings():
    return jsonify(get_settings_store().all())


@bp.route("/<path:key>")
def get_setting(key):
    store = get_settings_store()
    fallback = request.args.get("fallback")
    return jsonify({
        "key": key,
        "value": store.get(key, fallback),
        "exists": store.has(key),
    })


@bp.route("/<path:key>", methods=["PUT"])
def update_setting(key):
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or "value" not in data:
        return _error("Request body must be a JSON object with a 'value' field")

    store = get_settings_store()
    if not store.update(key, data["value"]):
        return _error(f"Could not save setting: {key}", 500)

    logger.info("Setting %s updated via API", key)
    return jsonify({"key": key, "saved": True})


@bp.route("/<path:key>", methods=["DELETE"])
def delete_setting(key):
    store = get_settings_store()
    if not store.delete(key):
        return _error(f"Could not delete setting: {key}", 500)

    logger.info("Setting %s deleted via API", key)
    return jsonify({"key": key, "deleted": True})


@bp.route("/reset", methods=["POST"])
def reset_settings():
    store = get_settings_store()
    if not store.reset():
        return _error("Could not reset settings", 500)

    logger.info("Settings reset to defaults via API")
    return jsonify({"reset": True})
