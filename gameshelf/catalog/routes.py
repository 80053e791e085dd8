"""Routes for browsing and searching the game catalog."""
from __future__ import annotations

from flask import abort, current_app, g, render_template, request

from ..logging_service import log_manager
from ..wishlist.services import wishlist_game_ids
from . import bp
from .services import get_game, list_genres, search_games


def _wishlisted_ids() -> set[int]:
    user = g.get("user")
    return wishlist_game_ids(user.id) if user else set()


@bp.route("/")
def browse():
    """Render the paginated catalog, filtered by name and genre."""

    query = request.args.get("q", "").strip()
    genre = request.args.get("genre", "").strip()
    page = request.args.get("page", type=int) or 1
    per_page = current_app.config.get("CATALOG_PAGE_SIZE", 5)

    pagination = search_games(query=query, genre=genre, page=page, per_page=per_page)

    if query or genre:
        log_manager.record(
            component="Catalog",
            action="search",
            level="info",
            result="success" if pagination.total else "empty",
            title="Catalog searched",
            user_summary=f"Search returned {pagination.total} game(s).",
            technical_details=f"catalog.browse q={query!r} genre={genre!r} page={page}",
        )

    return render_template(
        "catalog/list.html",
        title="GameShelf — Games",
        games=pagination.items,
        pagination=pagination,
        query=query,
        genre=genre,
        genres=list_genres(),
        wishlisted=_wishlisted_ids(),
        active_nav="games",
    )


@bp.route("/<int:game_id>")
def detail(game_id: int):
    """Render a single game's page."""

    game = get_game(game_id)
    if game is None:
        log_manager.record(
            component="Catalog",
            action="view-game",
            level="warn",
            result="not-found",
            title="Unknown game requested",
            user_summary=f"No game with id {game_id} exists in the catalog.",
            technical_details=f"catalog.detail found no game row for id={game_id}",
        )
        abort(404)

    return render_template(
        "catalog/detail.html",
        title=f"GameShelf — {game.name}",
        game=game,
        wishlisted=_wishlisted_ids(),
        active_nav="games",
    )
