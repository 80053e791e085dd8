"""Database models for user wishlists."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import UniqueConstraint

from ..extensions import db


class WishlistItem(db.Model):
    """A game a user wants to keep an eye on."""

    __tablename__ = "wishlist_item"
    __table_args__ = (
        UniqueConstraint("user_id", "game_id", name="uq_wishlist_item_user_game"),
    )

    id: int = db.Column(db.Integer, primary_key=True)
    user_id: int = db.Column(
        db.Integer, db.ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    game_id: int = db.Column(
        db.Integer, db.ForeignKey("game.id", ondelete="CASCADE"), nullable=False
    )
    added_at: datetime = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = db.relationship("User", backref=db.backref("wishlist_items", lazy="dynamic"))
    game = db.relationship("Game")
