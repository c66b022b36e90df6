"""Settings form route: save a submitted settings form."""

import logging

from flask import Blueprint, jsonify, request

from web.services import get_settings_store

logger = logging.getLogger(__name__)

bp = Blueprint("settings", __name__)


@bp.route("/", methods=["POST"])
def save_form():
    """Save every submitted field.

    Field names may use dot notation.  A field submitted empty removes the
    stored override, so the setting falls back to its default.
    """
    store = get_settings_store()
    saved = {}
    for field, value in request.form.items():
        if field == "csrf_token":
            continue
        saved[field] = store.update(field, value.strip())

    logger.info("Settings form saved: %s", ", ".join(sorted(saved)) or "no fields")
    return jsonify({"saved": saved})
