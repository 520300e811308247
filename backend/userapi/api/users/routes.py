"""Users blueprint (CRUD)."""
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from flask import Blueprint, Response, current_app, request
from loguru import logger
from sqlalchemy.orm import Session

from ...db.repositories.factory import user_repo
from ...errors import PersistenceError, ValidationFailure, message, ok
from ...services.pagination import PageRequest
from ...services.user_service import UserService
from .schemas import UserOut


bp = Blueprint("users", __name__)

NOT_FOUND = "User not found"


def _service() -> UserService:
    session: Session | None = None
    db = current_app.extensions.get("db")
    if db is not None:
        assert db.Session is not None, "DB session is not initialized"
        session = db.Session()
    return UserService(user_repo(session))


def _body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _out(user) -> Dict[str, Any]:
    return UserOut.model_validate(asdict(user)).model_dump()


@bp.get("")
def list_users():
    page = PageRequest.from_args(request.args.get("page"), request.args.get("limit"))
    try:
        result = _service().list_users(page)
    except PersistenceError:
        logger.exception("Failed to fetch users")
        return message("Failed to fetch users", 500)
    return ok({
        "users": [_out(u) for u in result.users],
        "totalPages": result.total_pages,
        "currentPage": result.current_page,
    })


@bp.get("/<user_id>")
def get_user(user_id: str):
    try:
        user = _service().get_user(user_id)
    except PersistenceError:
        logger.exception("Error retrieving user {}", user_id)
        return message("Error retrieving user", 500)
    if not user:
        return message(NOT_FOUND, 404)
    return ok(_out(user))


@bp.post("")
def create_user():
    try:
        user = _service().create_user(_body())
    except ValidationFailure as exc:
        return ok({"errors": exc.violations}, 400)
    except PersistenceError:
        logger.exception("Error saving user")
        return message("Error saving user", 500)
    return ok(_out(user), 201)


@bp.put("/<user_id>")
def update_user(user_id: str):
    try:
        user = _service().update_user(user_id, _body())
    except PersistenceError:
        logger.exception("Error updating user {}", user_id)
        return message("Error updating user", 500)
    if not user:
        return message(NOT_FOUND, 404)
    return ok(_out(user))


@bp.delete("/<user_id>")
def delete_user(user_id: str):
    try:
        _service().delete_user(user_id)
    except PersistenceError:
        logger.exception("Error deleting user {}", user_id)
        return message("Error deleting user", 500)
    return Response(status=204)
