from __future__ import annotations

from userapi.api.users.validation import validate_user_create


def test_valid_body_returns_payload():
    payload, violations = validate_user_create({"name": "Ann", "email": "ann@example.com"})
    assert violations == []
    assert payload is not None
    assert payload.name == "Ann"


def test_bad_email_gives_one_email_violation():
    payload, violations = validate_user_create({"name": "Ann", "email": "not-an-email"})
    assert payload is None
    assert violations == [
        {
            "type": "field",
            "value": "not-an-email",
            "msg": "Please provide a valid email",
            "path": "email",
            "location": "body",
        }
    ]


def test_empty_name_gives_one_name_violation():
    _, violations = validate_user_create({"name": "", "email": "ann@example.com"})
    assert [v["path"] for v in violations] == ["name"]
    assert violations[0]["msg"] == "Name is required"


def test_both_invalid_report_both():
    _, violations = validate_user_create({"name": "", "email": "nope"})
    assert [v["path"] for v in violations] == ["email", "name"]


def test_missing_fields_omit_value():
    _, violations = validate_user_create({})
    assert [v["path"] for v in violations] == ["email", "name"]
    assert all("value" not in v for v in violations)


def test_extra_fields_are_ignored():
    _, violations = validate_user_create(
        {"name": "Ann", "email": "ann@example.com", "role": "admin"}
    )
    assert violations == []


def test_display_name_form_is_rejected():
    _, violations = validate_user_create({"name": "Ann", "email": "Ann Smith <ann@example.com>"})
    assert [v["path"] for v in violations] == ["email"]


def test_email_is_kept_as_submitted():
    payload, violations = validate_user_create({"name": "Ann", "email": "Ann@EXAMPLE.COM"})
    assert violations == []
    assert payload.email == "Ann@EXAMPLE.COM"


def test_numeric_name_is_accepted_as_text():
    payload, violations = validate_user_create({"name": 123, "email": "ann@example.com"})
    assert violations == []
    assert payload.name == "123"


def test_numeric_email_is_an_email_violation():
    _, violations = validate_user_create({"name": "Ann", "email": 123})
    assert [v["path"] for v in violations] == ["email"]
    assert violations[0]["value"] == 123
