"""Health check endpoints."""
from __future__ import annotations

from flask import Blueprint, Response, current_app

from ...errors import ok


bp = Blueprint("health", __name__)


@bp.get("/")
def root() -> Response:
    return Response("API is running...", mimetype="text/html")


@bp.get("/health")
def health():
    backend = (current_app.config.get("USER_REPO_BACKEND") or "sqlalchemy").lower()
    if backend == "supabase":
        supabase_ext = current_app.extensions.get("supabase")
        up = bool(supabase_ext and (supabase_ext.service or supabase_ext.anon))
    else:
        db = current_app.extensions.get("db")
        up = bool(db and db.ping())
    body = {"status": "ok" if up else "degraded", "backend": backend, "database": up}
    return ok(body, 200 if up else 503)
