"""Routes for the GameShelf landing page."""
from __future__ import annotations

from flask import redirect, url_for

from . import bp


@bp.route("/")
def home():
    """Send visitors straight to the catalog."""
    return redirect(url_for("catalog.browse"))
