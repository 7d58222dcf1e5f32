"""Application factory and app-wide configuration."""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from backend.app.api.routes import api_bp
from backend.config import Settings
from backend.core.advisor import FireAdvisor
from backend.core.ledger import Ledger


def create_app(
    settings: Optional[Settings] = None,
    ledger: Optional[Ledger] = None,
    advisor: Optional[FireAdvisor] = None,
) -> Flask:
    """Build the Flask app instance."""
    settings = settings or Settings.from_env()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.json.ensure_ascii = False

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    app.extensions["minifire.settings"] = settings
    app.extensions["minifire.ledger"] = ledger or Ledger()
    app.extensions["minifire.advisor"] = advisor or FireAdvisor(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
    )

    app.register_blueprint(api_bp, url_prefix="/api")

    if not settings.gemini_api_key and advisor is None:
        app.logger.info("GEMINI_API_KEY not set; AI endpoints will serve fallback content")
    return app
