"""Field checks for the user creation body."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from .schemas import UserCreateIn

# Report order follows this mapping: email first, then name.
VIOLATION_MESSAGES: Dict[str, str] = {
    "email": "Please provide a valid email",
    "name": "Name is required",
}


def _violation(body: Mapping[str, Any], field: str) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"type": "field"}
    if field in body:
        entry["value"] = body[field]
    entry.update(msg=VIOLATION_MESSAGES[field], path=field, location="body")
    return entry


def validate_user_create(
    body: Mapping[str, Any],
) -> Tuple[Optional[UserCreateIn], List[Dict[str, Any]]]:
    """Run every creation check and collect all violations.

    Returns the parsed payload when the body is valid, otherwise ``None`` and
    one violation entry per failing field. Checks never short-circuit each
    other, so a body with a bad email and an empty name yields two entries.
    """
    try:
        return UserCreateIn.model_validate(dict(body)), []
    except ValidationError as exc:
        failed = {str(err["loc"][0]) for err in exc.errors() if err.get("loc")}
    return None, [_violation(body, f) for f in VIOLATION_MESSAGES if f in failed]
