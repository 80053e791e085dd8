"""Configuration settings for GameShelf."""
from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


class Config:
    """Base configuration class."""

    SECRET_KEY = os.environ.get("GAMESHELF_SECRET_KEY", "gameshelf-dev-key")
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "GAMESHELF_DATABASE_URI", f"sqlite:///{BASE_DIR / 'gameshelf.db'}"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    DATABASE_POOL_SIZE = int(os.environ.get("GAMESHELF_DATABASE_POOL_SIZE", 10))
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_size": DATABASE_POOL_SIZE,
        "pool_pre_ping": True,
    }
    ENVIRONMENT = os.environ.get("GAMESHELF_ENV", "development")
    LOG_RETENTION = int(os.environ.get("GAMESHELF_LOG_RETENTION", 500))

    STEAM_API_KEY = os.environ.get("STEAM_API_KEY", "")
    CATALOG_TARGET_COUNT = int(os.environ.get("GAMESHELF_CATALOG_TARGET_COUNT", 150))
    CATALOG_SAMPLE_SIZE = int(os.environ.get("GAMESHELF_CATALOG_SAMPLE_SIZE", 200))
    CATALOG_SEED = os.environ.get("GAMESHELF_CATALOG_SEED", "160")
    CATALOG_REQUEST_DELAY = float(os.environ.get("GAMESHELF_CATALOG_REQUEST_DELAY", 0.5))
    CATALOG_RETRY_ATTEMPTS = int(os.environ.get("GAMESHELF_CATALOG_RETRY_ATTEMPTS", 3))
    CATALOG_RETRY_BACKOFF = float(os.environ.get("GAMESHELF_CATALOG_RETRY_BACKOFF", 0.5))
    CATALOG_REQUEST_TIMEOUT = float(os.environ.get("GAMESHELF_CATALOG_REQUEST_TIMEOUT", 10))
    CATALOG_PAGE_SIZE = int(os.environ.get("GAMESHELF_CATALOG_PAGE_SIZE", 5))
