"""Builds the OpenAPI spec from the Pydantic schemas."""
from __future__ import annotations

from typing import Any, Dict

from flask import request

from ..api.users.schemas import (
    MessageOut,
    UserCreateIn,
    UserOut,
    UserPageOut,
    UserUpdateIn,
    ValidationErrorOut,
)
from ..services.pagination import DEFAULT_LIMIT, DEFAULT_PAGE

_REF = "#/components/schemas/{model}"


def _schemas() -> Dict[str, Any]:
    schemas: Dict[str, Any] = {}
    for model in (UserCreateIn, UserUpdateIn, UserOut, UserPageOut, ValidationErrorOut, MessageOut):
        schema = model.model_json_schema(ref_template=_REF)
        # Nested models land in $defs; hoist them next to the others.
        schemas.update(schema.pop("$defs", {}))
        schemas[model.__name__] = schema
    return schemas


def _json(ref: str) -> Dict[str, Any]:
    return {"application/json": {"schema": {"$ref": f"#/components/schemas/{ref}"}}}


def _message(description: str) -> Dict[str, Any]:
    return {"description": description, "content": _json("MessageOut")}


def build_openapi() -> Dict[str, Any]:
    base_url = f"{request.scheme}://{request.host}"
    user_id = {
        "name": "user_id", "in": "path", "required": True,
        "description": "The user ID", "schema": {"type": "string"},
    }
    return {
        "openapi": "3.0.3",
        "info": {
            "title": "User API",
            "version": "1.0.0",
            "description": "A simple API for managing users",
        },
        "servers": [{"url": base_url}],
        "tags": [{"name": "Health"}, {"name": "Users"}],
        "paths": {
            "/health": {
                "get": {
                    "tags": ["Health"], "summary": "Health probe",
                    "responses": {
                        "200": {"description": "Store reachable"},
                        "503": {"description": "Store unreachable"},
                    },
                }
            },
            "/users": {
                "get": {
                    "tags": ["Users"], "summary": "Get all users",
                    "description": "Fetch all users from the database with pagination.",
                    "parameters": [
                        {
                            "name": "page", "in": "query", "required": False,
                            "description": "The page number to fetch",
                            "schema": {"type": "integer", "default": DEFAULT_PAGE},
                        },
                        {
                            "name": "limit", "in": "query", "required": False,
                            "description": "The number of users per page",
                            "schema": {"type": "integer", "default": DEFAULT_LIMIT},
                        },
                    ],
                    "responses": {
                        "200": {"description": "A page of users", "content": _json("UserPageOut")},
                        "500": _message("Failed to fetch users"),
                    },
                },
                "post": {
                    "tags": ["Users"], "summary": "Create a new user",
                    "requestBody": {"required": True, "content": _json("UserCreateIn")},
                    "responses": {
                        "201": {"description": "User created successfully", "content": _json("UserOut")},
                        "400": {"description": "Bad request, invalid data", "content": _json("ValidationErrorOut")},
                        "500": _message("Error saving user"),
                    },
                },
            },
            "/users/{user_id}": {
                "parameters": [user_id],
                "get": {
                    "tags": ["Users"], "summary": "Get a user by ID",
                    "responses": {
                        "200": {"description": "User details", "content": _json("UserOut")},
                        "404": _message("User not found"),
                        "500": _message("Error retrieving user"),
                    },
                },
                "put": {
                    "tags": ["Users"], "summary": "Update user details",
                    "description": "Only non-empty fields in the body replace stored values.",
                    "requestBody": {"required": True, "content": _json("UserUpdateIn")},
                    "responses": {
                        "200": {"description": "User updated successfully", "content": _json("UserOut")},
                        "404": _message("User not found"),
                        "500": _message("Error updating user"),
                    },
                },
                "delete": {
                    "tags": ["Users"], "summary": "Delete a user",
                    "responses": {
                        "204": {"description": "User deleted (or never existed)"},
                        "500": _message("Error deleting user"),
                    },
                },
            },
        },
        "components": {"schemas": _schemas()},
    }
