"""Pydantic request/response schemas for Users API."""
from __future__ import annotations

from typing import Any, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserCreateIn(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = Field(..., min_length=1)
    email: str = Field(..., json_schema_extra={"format": "email"})

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        # Bare addresses only; the submitted text is kept as is.
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(str(exc)) from exc
        if "<" in value or ">" in value:
            raise ValueError("display names are not allowed")
        return value


class UserUpdateIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class UserOut(BaseModel):
    id: str
    name: str
    email: str


class UserPageOut(BaseModel):
    users: List[UserOut]
    totalPages: int
    currentPage: int


class ViolationOut(BaseModel):
    type: str = "field"
    value: Optional[Any] = None
    msg: str
    path: str
    location: str = "body"


class ValidationErrorOut(BaseModel):
    errors: List[ViolationOut]


class MessageOut(BaseModel):
    message: str
