from __future__ import annotations

import random

import pytest
from flask import Flask
from flask.testing import FlaskClient

from backend.app import create_app
from backend.config import Settings
from backend.core.advisor import FireAdvisor
from backend.core.ledger import Ledger


@pytest.fixture()
def settings() -> Settings:
    return Settings(gemini_api_key=None)


@pytest.fixture()
def app(settings: Settings) -> Flask:
    flask_app = create_app(
        settings=settings,
        ledger=Ledger(rng=random.Random(7)),
        advisor=FireAdvisor(api_key=None, rng=random.Random(7)),
    )
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
