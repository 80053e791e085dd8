"""Routes for reviewing structured log records."""
from __future__ import annotations

from flask import current_app, jsonify, render_template, request

from ..logging_service import log_manager
from . import bp


@bp.route("/")
def console():
    """Render the log console with the most recent entries."""
    return render_template(
        "logs/console.html",
        title="GameShelf — Logs",
        logs=log_manager.fetch_logs(limit=current_app.config.get("LOG_CONSOLE_LIMIT", 50)),
        active_nav="logs",
    )


@bp.route("/feed")
def feed():
    """Return filtered logs as JSON data."""
    level = request.args.get("level")
    component = request.args.get("component")
    search = request.args.get("search")
    limit = request.args.get("limit", type=int) or 50
    logs = log_manager.fetch_logs(
        level=level, component=component, search=search, limit=max(1, min(limit, 500))
    )
    return jsonify(
        {
            "logs": logs,
            "latest": log_manager.latest_timestamp(),
        }
    )
