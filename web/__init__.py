"""Flask application factory for the settings service."""

from dotenv import load_dotenv
load_dotenv()  # Load .env file if present

from flask import Flask, jsonify
from flask_wtf.csrf import CSRFProtect

from settings_manager.backends import create_backend
from settings_manager.hooks import HookDispatcher

__version__ = "0.1.0"

csrf = CSRFProtect()


def create_app(config: dict | None = None):
    """Create and configure the Flask application.

    *config* entries override the values taken from ``config.settings``.
    """
    from config import settings as project_settings

    app = Flask(__name__)
    app.config["SECRET_KEY"] = project_settings.FLASK_SECRET_KEY
    app.config["WTF_CSRF_TIME_LIMIT"] = 3600
    app.config["SETTINGS_BACKEND"] = project_settings.SETTINGS_BACKEND
    app.config["SETTINGS_PATH"] = project_settings.SETTINGS_PATH
    app.config["SETTINGS_OPTION_NAME"] = project_settings.SETTINGS_OPTION_NAME
    app.config["SETTINGS_DEFAULTS"] = project_settings.load_defaults_file(
        project_settings.SETTINGS_DEFAULTS_PATH
    )
    app.config["SETTINGS_API_KEY"] = project_settings.SETTINGS_API_KEY
    if config:
        app.config.update(config)

    csrf.init_app(app)

    # Shared by every per-request store so filters registered once, and
    # options held by the memory backend, outlive a single request.
    app.extensions["settings_hooks"] = HookDispatcher()
    app.extensions["settings_backend"] = create_backend(
        app.config["SETTINGS_BACKEND"], app.config.get("SETTINGS_PATH")
    )

    from web.routes.api import bp as api_bp
    from web.routes.settings import bp as settings_bp

    app.register_blueprint(settings_bp, url_prefix="/settings")
    app.register_blueprint(api_bp, url_prefix="/api/v1/settings")
    csrf.exempt(api_bp)

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({"error": "Internal server error"}), 500

    @app.route("/health")
    def health_check():
        return jsonify({"status": "healthy", "version": __version__}), 200

    return app
