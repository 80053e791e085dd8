"""Routes for managing the logged-in user's wishlist."""
from __future__ import annotations

from flask import flash, g, redirect, render_template, request, url_for
from sqlalchemy.exc import SQLAlchemyError

from ..auth.routes import login_required
from ..extensions import db
from ..logging_service import log_manager
from . import bp
from .services import add_to_wishlist, list_wishlist, remove_from_wishlist


def _back_to(default_endpoint: str):
    target = request.form.get("next", "")
    if target.startswith("/") and not target.startswith("//"):
        return redirect(target)
    return redirect(url_for(default_endpoint))


def _log_failure(action: str, game_id: int, exc: Exception) -> None:
    log_manager.record(
        component="Wishlist",
        action=action,
        level="error",
        result="error",
        title="Wishlist update failed",
        user_summary="The wishlist could not be updated. Try again shortly.",
        technical_details=(
            f"wishlist.{action} user={g.user.id} game={game_id} raised"
            f" {exc.__class__.__name__}: {exc}"
        ),
    )


@bp.route("/")
@login_required
def overview():
    """Render the user's wishlist."""

    games = list_wishlist(g.user.id)
    return render_template(
        "wishlist/list.html",
        title="GameShelf — Wishlist",
        games=games,
        active_nav="wishlist",
    )


@bp.route("/add/<int:game_id>", methods=["POST"])
@login_required
def add(game_id: int):
    """Put a game on the wishlist."""

    try:
        game, created = add_to_wishlist(g.user.id, game_id)
    except ValueError as exc:
        flash(str(exc), "error")
    except SQLAlchemyError as exc:
        db.session.rollback()
        _log_failure("add", game_id, exc)
        flash("We could not update your wishlist. Try again shortly.", "error")
    else:
        if created:
            log_manager.record(
                component="Wishlist",
                action="add",
                level="info",
                result="success",
                title="Game wishlisted",
                user_summary=f"{game.name} was added to {g.user.username}'s wishlist.",
                technical_details=f"wishlist.add user={g.user.id} game={game.id}",
            )
            flash(f"{game.name} was added to your wishlist.", "success")
        else:
            flash(f"{game.name} is already on your wishlist.", "success")
    return _back_to("catalog.browse")


@bp.route("/remove/<int:game_id>", methods=["POST"])
@login_required
def remove(game_id: int):
    """Take a game off the wishlist."""

    try:
        removed = remove_from_wishlist(g.user.id, game_id)
    except SQLAlchemyError as exc:
        db.session.rollback()
        _log_failure("remove", game_id, exc)
        flash("We could not update your wishlist. Try again shortly.", "error")
    else:
        if removed:
            log_manager.record(
                component="Wishlist",
                action="remove",
                level="info",
                result="success",
                title="Game removed from wishlist",
                user_summary=f"A game was removed from {g.user.username}'s wishlist.",
                technical_details=f"wishlist.remove user={g.user.id} game={game_id}",
            )
            flash("Removed from your wishlist.", "success")
        else:
            flash("That game was not on your wishlist.", "error")
    return _back_to("wishlist.overview")
