"""Flask application factory."""

from __future__ import annotations

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .config import BaseConfig, DevConfig
from .errors import ValidationFailed
from .extensions import init_tracker
from .logging_config import get_logger, setup_logging
from .services.tracker import HabitTracker

logger = get_logger(__name__)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationFailed)
    def _validation_failed(exc: ValidationFailed):
        return jsonify(exc.to_dict()), 400

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return jsonify({"message": exc.description}), exc.code

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        return jsonify({"message": "Internal server error"}), 500


def create_app(
    config: BaseConfig | None = None,
    *,
    tracker: HabitTracker | None = None,
    configure_logging: bool = True,
) -> Flask:
    """Build the JSON API app.

    ``tracker`` lets tests inject a pre-built tracker instead of the one the
    configuration describes.
    """

    config = config or DevConfig()
    if configure_logging:
        setup_logging(config)

    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=config.SECRET_KEY,
        TESTING=config.TESTING,
        DEBUG=config.DEBUG,
        HABITFLOW_CONFIG=config,
    )

    init_tracker(app, tracker)
    _register_error_handlers(app)

    from .blueprints import api

    app.register_blueprint(api.bp)

    from . import cli

    cli.init_app(app)

    @app.get("/")
    def health():
        """Health check endpoint"""
        return jsonify({"message": f"{config.APP_NAME} is running"})

    return app
