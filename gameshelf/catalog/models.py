"""Database models for the game catalog."""
from __future__ import annotations

from datetime import datetime

from ..extensions import db

SENTINEL_RELEASE_DATE = "0000-00-00"


class Game(db.Model):
    """A catalog game seeded from the Steam store."""

    __tablename__ = "game"

    id: int = db.Column(db.Integer, primary_key=True, autoincrement=False)
    currency: str = db.Column(db.String(3), nullable=False, default="USD")
    description: str = db.Column(db.Text, nullable=False)
    genre: str = db.Column(db.String(64), nullable=False, index=True)
    image_url: str = db.Column(db.String(512), nullable=False)
    name: str = db.Column(db.String(255), nullable=False, index=True)
    price: str = db.Column(db.String(32), nullable=False)
    release_date: str = db.Column(
        db.String(10), nullable=False, default=SENTINEL_RELEASE_DATE
    )
    created_at: datetime = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    @property
    def has_release_date(self) -> bool:
        """Return True when the store supplied a usable release date."""

        return self.release_date != SENTINEL_RELEASE_DATE

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Game {self.id} {self.name!r}>"
