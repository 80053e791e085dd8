"""Read-side helpers for browsing the game catalog."""
from __future__ import annotations

from typing import Optional

from flask_sqlalchemy.pagination import Pagination
from sqlalchemy import select

from ..extensions import db
from .models import Game


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def search_games(
    *,
    query: Optional[str] = None,
    genre: Optional[str] = None,
    page: int = 1,
    per_page: int = 5,
) -> Pagination:
    """Return one page of games whose name contains ``query``, optionally in ``genre``."""

    statement = select(Game).order_by(Game.name, Game.id)
    term = _clean(query)
    if term:
        escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        statement = statement.where(Game.name.ilike(f"%{escaped}%", escape="\\"))
    genre_name = _clean(genre)
    if genre_name:
        statement = statement.where(Game.genre == genre_name)
    return db.paginate(statement, page=max(page, 1), per_page=per_page, error_out=False)


def get_game(game_id: int) -> Optional[Game]:
    """Return a single game or None."""

    return db.session.get(Game, game_id)


def list_genres() -> list[str]:
    """Return the distinct genres present in the catalog, alphabetically."""

    rows = db.session.execute(select(Game.genre).distinct().order_by(Game.genre))
    return [genre for (genre,) in rows]

