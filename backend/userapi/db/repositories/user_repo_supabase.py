"""Supabase-backed User repository using supabase-py v2."""
from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import httpx
from supabase import Client, PostgrestAPIError

from ...domain.user import User
from ...errors import PersistenceError


def _row_to_dc(row: Dict[str, Any]) -> User:
    return User(
        id=str(row.get("id")),
        name=row.get("name") or "",
        email=row.get("email") or "",
    )


@contextmanager
def _errors(action: str) -> Iterator[None]:
    try:
        yield
    except (PostgrestAPIError, httpx.HTTPError) as exc:
        raise PersistenceError(f"{action} failed") from exc


class UserRepositorySupabase:
    def __init__(self, client: Client, table: str = "users") -> None:
        self.client = client
        self.table = client.table(table)

    def find_many(self, *, skip: int = 0, limit: int = 10) -> List[User]:
        # PostgREST ranges are inclusive on both ends.
        q = self.table.select("*").order("created_at").range(skip, skip + limit - 1)
        with _errors("find_many"):
            res = q.execute()
        return [_row_to_dc(r) for r in res.data or []]

    def count(self) -> int:
        with _errors("count"):
            res = self.table.select("id", count="exact").limit(1).execute()
        return int(res.count or 0)

    def find_by_id(self, user_id: str) -> Optional[User]:
        with _errors("find_by_id"):
            res = self.table.select("*").eq("id", user_id).limit(1).execute()
        rows = res.data or []
        return _row_to_dc(rows[0]) if rows else None

    def insert(self, data: User) -> User:
        row = {"id": str(uuid.uuid4()), "name": data.name, "email": data.email}
        with _errors("insert"):
            res = self.table.insert(row).execute()
        created = (res.data or [row])[0]
        return _row_to_dc(created)

    def save(self, data: User) -> User:
        row = {"id": data.id, "name": data.name, "email": data.email}
        with _errors("save"):
            res = self.table.upsert(row).execute()
        saved = (res.data or [row])[0]
        return _row_to_dc(saved)

    def delete_by_id(self, user_id: str) -> None:
        with _errors("delete_by_id"):
            self.table.delete().eq("id", user_id).execute()
