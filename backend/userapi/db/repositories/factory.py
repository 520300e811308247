"""Repository factory for User (sqlalchemy|supabase)."""
from __future__ import annotations

from typing import Optional, Protocol

from flask import current_app
from sqlalchemy.orm import Session

from ...domain.user import User
from .user_repo import UserRepository as SQLARepo
from .user_repo_supabase import UserRepositorySupabase


class UserGateway(Protocol):
    def find_many(self, *, skip: int = 0, limit: int = 10) -> list[User]: ...

    def count(self) -> int: ...

    def find_by_id(self, user_id: str) -> Optional[User]: ...

    def insert(self, data: User) -> User: ...

    def save(self, data: User) -> User: ...

    def delete_by_id(self, user_id: str) -> None: ...


def user_repo(session: Optional[Session] = None) -> UserGateway:
    backend = (current_app.config.get("USER_REPO_BACKEND") or "sqlalchemy").lower()
    if backend == "supabase":
        supabase_ext = current_app.extensions["supabase"]
        client = supabase_ext.service or supabase_ext.anon
        if client is None:
            raise RuntimeError("Supabase client is not initialized; set SUPABASE_URL and a key.")
        return UserRepositorySupabase(client)
    if session is None:
        raise RuntimeError("SQLAlchemy repo requires a session")
    return SQLARepo(session)
