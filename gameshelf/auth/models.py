"""Database models for user accounts."""
from __future__ import annotations

from datetime import datetime

from ..extensions import db


class User(db.Model):
    """A registered visitor who can keep a wishlist."""

    id: int = db.Column(db.Integer, primary_key=True)
    username: str = db.Column(db.String(64), unique=True, nullable=False, index=True)
    email: str = db.Column(db.String(255), unique=True, nullable=False)
    password_hash: str = db.Column(db.String(255), nullable=False)
    created_at: datetime = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.username}>"
