"""User service encapsulating business rules."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from loguru import logger

from ..api.users.validation import validate_user_create
from ..db.repositories.factory import UserGateway
from ..domain.user import User
from ..errors import ValidationFailure
from .pagination import PageRequest, total_pages


@dataclass(slots=True)
class UserPage:
    users: List[User]
    total_pages: int
    current_page: int


class UserService:
    """The five CRUD operations over the user gateway.

    Store failures surface as ``PersistenceError`` from the gateway and are
    left for the HTTP layer to map onto a generic 500.
    """

    def __init__(self, repo: UserGateway) -> None:
        self.repo = repo

    def list_users(self, page: PageRequest) -> UserPage:
        users = self.repo.find_many(skip=page.skip, limit=page.limit)
        total = self.repo.count()
        return UserPage(
            users=users,
            total_pages=total_pages(total, page.limit),
            current_page=page.page,
        )

    def get_user(self, user_id: str) -> Optional[User]:
        return self.repo.find_by_id(user_id)

    def create_user(self, body: Mapping[str, Any]) -> User:
        payload, violations = validate_user_create(body)
        if violations:
            logger.warning("Rejected user creation: {}", [v["path"] for v in violations])
            raise ValidationFailure(violations)
        assert payload is not None
        created = self.repo.insert(User(id="", name=payload.name, email=payload.email))
        logger.info("Created user {}", created.id)
        return created

    def update_user(self, user_id: str, body: Mapping[str, Any]) -> Optional[User]:
        user = self.repo.find_by_id(user_id)
        if user is None:
            return None
        # Empty or missing values keep the stored field.
        name = body.get("name")
        email = body.get("email")
        if name:
            user.name = str(name)
        if email:
            user.email = str(email)
        return self.repo.save(user)

    def delete_user(self, user_id: str) -> None:
        self.repo.delete_by_id(user_id)
