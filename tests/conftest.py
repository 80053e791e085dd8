from __future__ import annotations

from pathlib import Path
import sys

import pytest
from sqlalchemy.pool import StaticPool

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from gameshelf import create_app
from gameshelf.catalog.models import Game
from gameshelf.config import Config
from gameshelf.extensions import db


class TestingConfig(Config):
    """Configuration tuned for isolated unit tests."""

    TESTING = True
    SECRET_KEY = "testing"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }
    CATALOG_REQUEST_DELAY = 0
    CATALOG_RETRY_BACKOFF = 0
    CATALOG_PAGE_SIZE = 2


@pytest.fixture()
def app():
    """Create a Flask app instance backed by an in-memory database."""

    application = create_app(TestingConfig)
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    """Provide a Flask test client for request assertions."""

    return app.test_client()


@pytest.fixture()
def add_games(app):
    """Insert catalog games directly, bypassing the seeding pipeline."""

    def _add(*games: dict) -> None:
        with app.app_context():
            for values in games:
                row = {
                    "currency": "USD",
                    "description": "A game.",
                    "genre": "Action",
                    "image_url": "https://example.com/header.jpg",
                    "price": "Free",
                    "release_date": "2023-06-12",
                }
                row.update(values)
                db.session.add(Game(**row))
            db.session.commit()

    return _add
