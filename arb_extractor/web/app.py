"""Flask application configuration and blueprint registration."""

from __future__ import annotations

from typing import Any, Dict

from flask import Flask, jsonify

from arb_extractor.logger import get_logger

from .context import SETTINGS_KEY
from .routes.extraction import extraction_bp
from .routes.languages import languages_bp
from .routes.jobs import jobs_bp

logger = get_logger(__name__)


def build_app(settings: Dict[str, Any]) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)

    # Ensure JSON responses keep Unicode data.
    app.config["JSON_AS_ASCII"] = False
    app.json.ensure_ascii = False
    app.config[SETTINGS_KEY] = settings

    register_blueprints(app)
    register_default_routes(app)

    return app


def register_blueprints(app: Flask) -> None:
    """Register Flask blueprints."""
    app.register_blueprint(extraction_bp, url_prefix="/api")
    app.register_blueprint(languages_bp, url_prefix="/api")
    app.register_blueprint(jobs_bp, url_prefix="/api/jobs")


def register_default_routes(app: Flask) -> None:
    """Register the health route and JSON error handlers."""

    @app.get("/health")
    def health_check():
        logger.debug("Health check requested")
        return jsonify({"status": "ok"})

    @app.errorhandler(404)
    def page_not_found(e):
        return jsonify({"error": "Not found", "code": "not_found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "Method not allowed", "code": "method_not_allowed"}), 405

    @app.errorhandler(500)
    def internal_error(e):
        logger.exception(f"Internal server error: {e}")
        return jsonify({"error": "Unexpected server error", "code": "internal_error"}), 500
