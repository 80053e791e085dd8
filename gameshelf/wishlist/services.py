"""Helpers for reading and changing a user's wishlist."""
from __future__ import annotations

from sqlalchemy import select

from ..catalog.models import Game
from ..extensions import db
from .models import WishlistItem


def list_wishlist(user_id: int) -> list[Game]:
    """Return the user's wishlisted games, most recently added first."""

    statement = (
        select(Game)
        .join(WishlistItem, WishlistItem.game_id == Game.id)
        .where(WishlistItem.user_id == user_id)
        .order_by(WishlistItem.added_at.desc(), WishlistItem.id.desc())
    )
    return list(db.session.execute(statement).scalars())


def wishlist_game_ids(user_id: int) -> set[int]:
    """Return the ids of every game on the user's wishlist."""

    statement = select(WishlistItem.game_id).where(WishlistItem.user_id == user_id)
    return set(db.session.execute(statement).scalars())


def _find_item(user_id: int, game_id: int) -> WishlistItem | None:
    statement = select(WishlistItem).where(
        WishlistItem.user_id == user_id, WishlistItem.game_id == game_id
    )
    return db.session.execute(statement).scalars().first()


def add_to_wishlist(user_id: int, game_id: int) -> tuple[Game, bool]:
    """Add a game to the wishlist.

    Returns the game and whether a new entry was created. Raises
    ``ValueError`` when the game is not in the catalog.
    """

    game = db.session.get(Game, game_id)
    if game is None:
        raise ValueError("That game is not in the catalog.")
    if _find_item(user_id, game_id) is not None:
        return game, False

    db.session.add(WishlistItem(user_id=user_id, game_id=game_id))
    db.session.commit()
    return game, True


def remove_from_wishlist(user_id: int, game_id: int) -> bool:
    """Remove a game from the wishlist; returns False when it was not there."""

    item = _find_item(user_id, game_id)
    if item is None:
        return False
    db.session.delete(item)
    db.session.commit()
    return True
