from __future__ import annotations

import pytest

from userapi import create_app
from userapi.api.users import routes
from userapi.errors import PersistenceError

from conftest import make_config


class FailingRepo:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def _fail(self, name: str):
        self.calls.append(name)
        raise PersistenceError(f"{name} failed: connection reset by 10.0.0.5")

    def find_many(self, *, skip=0, limit=10):
        self._fail("find_many")

    def count(self):
        self._fail("count")

    def find_by_id(self, user_id):
        self._fail("find_by_id")

    def insert(self, data):
        self._fail("insert")

    def save(self, data):
        self._fail("save")

    def delete_by_id(self, user_id):
        self._fail("delete_by_id")


@pytest.fixture
def failing_repo(monkeypatch):
    repo = FailingRepo()
    monkeypatch.setattr(routes, "user_repo", lambda session=None: repo)
    return repo


@pytest.mark.parametrize(
    "method, path, body, message",
    [
        ("get", "/users", None, "Failed to fetch users"),
        ("get", "/users/abc", None, "Error retrieving user"),
        ("post", "/users", {"name": "Ann", "email": "ann@example.com"}, "Error saving user"),
        ("put", "/users/abc", {"name": "New"}, "Error updating user"),
        ("delete", "/users/abc", None, "Error deleting user"),
    ],
)
def test_store_failures_return_generic_500(client, failing_repo, method, path, body, message):
    resp = getattr(client, method)(path, json=body)
    assert resp.status_code == 500
    assert resp.get_json() == {"message": message}
    assert "10.0.0.5" not in resp.get_data(as_text=True)


def test_validation_runs_before_the_store(client, failing_repo):
    resp = client.post("/users", json={"name": "", "email": "bad"})
    assert resp.status_code == 400
    assert failing_repo.calls == []


def test_delete_does_not_check_existence(client, failing_repo):
    client.delete("/users/abc")
    assert failing_repo.calls == ["delete_by_id"]


def test_unreachable_database_fails_startup(tmp_path):
    url = f"sqlite:///{tmp_path / 'missing' / 'users.db'}"
    with pytest.raises(PersistenceError):
        create_app(make_config(DATABASE_URL=url))
