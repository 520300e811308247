"""SQLAlchemy-backed User repository returning dataclasses."""
from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.user import UserModel
from ...domain.user import User
from ...errors import PersistenceError


def _to_dc(m: UserModel) -> User:
    return User(id=m.id, name=m.name, email=m.email)


class UserRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def _errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except (SQLAlchemyError, OverflowError) as exc:
            # sqlite3 raises OverflowError for integers beyond 64 bits
            self.session.rollback()
            raise PersistenceError(f"{action} failed") from exc

    def find_many(self, *, skip: int = 0, limit: int = 10) -> List[User]:
        stmt = (
            select(UserModel)
            .order_by(UserModel.created_at, UserModel.id)
            .offset(skip)
            .limit(limit)
        )
        with self._errors("find_many"):
            return [_to_dc(m) for m in self.session.scalars(stmt).all()]

    def count(self) -> int:
        with self._errors("count"):
            return self.session.scalar(select(func.count()).select_from(UserModel)) or 0

    def find_by_id(self, user_id: str) -> Optional[User]:
        with self._errors("find_by_id"):
            m = self.session.get(UserModel, user_id)
        return _to_dc(m) if m else None

    def insert(self, data: User) -> User:
        m = UserModel(id=str(uuid.uuid4()), name=data.name, email=data.email)
        with self._errors("insert"):
            self.session.add(m)
            self.session.commit()
            self.session.refresh(m)
        return _to_dc(m)

    def save(self, data: User) -> User:
        with self._errors("save"):
            m = self.session.get(UserModel, data.id)
            if m is None:
                m = UserModel(id=data.id, name=data.name, email=data.email)
                self.session.add(m)
            else:
                m.name = data.name
                m.email = data.email
            self.session.commit()
            self.session.refresh(m)
        return _to_dc(m)

    def delete_by_id(self, user_id: str) -> None:
        with self._errors("delete_by_id"):
            self.session.execute(delete(UserModel).where(UserModel.id == user_id))
            self.session.commit()
