"""Flask application package."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Flask

try:
    from dotenv import load_dotenv
except Exception:  # pragma: no cover
    load_dotenv = None  # type: ignore[assignment]


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: Optional config values applied after the environment config.

    Returns:
        Configured Flask application.
    """
    if load_dotenv is not None:
        load_dotenv()

    from quina.config import get_config
    from quina.db import init_db
    from quina.error_handlers import register_error_handlers
    from quina.logging_config import configure_logging
    from quina.routes.health import health_bp
    from quina.routes.results import results_bp
    from quina.routes.web import register_cors, web_bp

    config = get_config()()
    app = Flask(__name__, static_folder=None)
    app.config.from_object(config)
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)
    register_cors(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(results_bp, url_prefix="/api")
    app.register_blueprint(web_bp)

    return app
