"""Application factory and blueprint registration."""
from __future__ import annotations

from flask import Flask, request
from flask_cors import CORS
from loguru import logger

from .config import BaseConfig
from .db.session import Database
from .api.health.routes import bp as health_bp
from .api.users.routes import bp as users_bp
from .docs.routes import bp as docs_bp
from .errors import register_error_handlers
from .integrations.supabase_client import SupabaseExt
from .ratelimit import RateLimiter


def create_app(config: BaseConfig | None = None) -> Flask:
    """Create and configure the Flask application.

    The store is connected here; a ``PersistenceError`` escaping this call
    means the service cannot start.
    """
    app = Flask(__name__)
    app.config.from_object(config or BaseConfig())
    CORS(app, resources={r"/*": {"origins": app.config["CORS_ORIGINS"]}})

    # Init extensions; each app owns its own instances
    backend = (app.config.get("USER_REPO_BACKEND") or "sqlalchemy").lower()
    if backend == "supabase":
        SupabaseExt(app)
    else:
        Database(app)
    if app.config.get("RATE_LIMIT_ENABLED", True):
        RateLimiter(
            max_requests=app.config["RATE_LIMIT_MAX_REQUESTS"],
            window_seconds=app.config["RATE_LIMIT_WINDOW_SECONDS"],
        ).init_app(app)

    # Register blueprints
    app.register_blueprint(health_bp)
    app.register_blueprint(users_bp, url_prefix="/users")
    app.register_blueprint(docs_bp)

    # Global error handlers
    register_error_handlers(app)

    @app.after_request
    def log_request(response):
        logger.debug("{} {} -> {}", request.method, request.path, response.status_code)
        return response

    return app
