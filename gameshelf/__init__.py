"""Application factory for GameShelf."""
from __future__ import annotations

from flask import Flask

from .config import Config
from .extensions import db
from .logging_service import log_manager


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__, template_folder="templates")
    app.config.from_object(config_class)

    db.init_app(app)
    log_manager.init_app(app)

    from .auth.models import User  # noqa: F401
    from .catalog.models import Game  # noqa: F401
    from .wishlist.models import WishlistItem  # noqa: F401

    with app.app_context():
        db.create_all()

    from .index import bp as index_bp
    from .auth import bp as auth_bp
    from .catalog import bp as catalog_bp
    from .wishlist import bp as wishlist_bp
    from .logging import bp as logging_bp
    from .catalog.commands import seed_catalog_command

    app.register_blueprint(index_bp)
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(catalog_bp, url_prefix="/games")
    app.register_blueprint(wishlist_bp, url_prefix="/wishlist")
    app.register_blueprint(logging_bp, url_prefix="/logs")
    app.cli.add_command(seed_catalog_command)

    for component in ("Auth", "Catalog", "Seeding", "Wishlist", "Logging"):
        log_manager.register_component(component)

    @app.context_processor
    def inject_globals() -> dict[str, object]:
        """Inject shared template variables."""
        return {
            "environment": app.config.get("ENVIRONMENT", "development"),
            "log_levels": log_manager.available_levels,
            "log_components": log_manager.available_components,
        }

    return app
