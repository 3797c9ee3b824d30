"""Application factory and app-wide configuration."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from fincalc.app.api.routes import api_bp
from fincalc.config import Config, parse_origins


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app instance."""
    app = Flask(__name__)
    app.config.from_object(Config)
    app.config.from_prefixed_env("FINCALC")
    if config:
        app.config.from_mapping(config)

    app.json.sort_keys = app.config["JSON_SORT_KEYS"]
    logging.getLogger("fincalc").setLevel(app.config["LOG_LEVEL"])

    CORS(
        app,
        resources={r"/api/*": {"origins": parse_origins(app.config["CORS_ORIGINS"])}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
