"""Error taxonomy, global HTTP error handling and JSON response helpers."""
from __future__ import annotations

from typing import Any

from flask import Flask, jsonify
from loguru import logger
from werkzeug.exceptions import HTTPException


class PersistenceError(Exception):
    """Any failure of the underlying store (connection, query, commit)."""


class ValidationFailure(Exception):
    """One or more field violations found in a request body."""

    def __init__(self, violations: list[dict[str, Any]]) -> None:
        super().__init__(f"{len(violations)} validation error(s)")
        self.violations = violations


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(400)
    def bad_request(err: HTTPException):  # type: ignore[override]
        return jsonify({"error": "bad_request", "message": err.description}), 400

    @app.errorhandler(404)
    def not_found(err: HTTPException):  # type: ignore[override]
        return jsonify({"error": "not_found", "message": err.description}), 404

    @app.errorhandler(405)
    def method_not_allowed(err: HTTPException):  # type: ignore[override]
        return jsonify({"error": "method_not_allowed", "message": err.description}), 405

    @app.errorhandler(500)
    def internal(err: Exception):  # type: ignore[override]
        original = getattr(err, "original_exception", None)
        if original is not None:
            logger.opt(exception=original).error("Unhandled error")
        return jsonify({"error": "internal_server_error", "message": "unexpected error"}), 500


def ok(data: Any, status: int = 200):
    return jsonify(data), status


def message(text: str, status: int):
    return jsonify({"message": text}), status
