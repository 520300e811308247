"""Domain dataclass for User entities (DB-agnostic)."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class User:
    id: str
    name: str
    email: str
