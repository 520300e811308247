from __future__ import annotations

import pytest

from userapi import create_app
from userapi.config import BaseConfig


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_config(**overrides) -> BaseConfig:
    values = dict(
        DATABASE_URL="sqlite://",
        USER_REPO_BACKEND="sqlalchemy",
        AUTO_CREATE_TABLES=True,
        RATE_LIMIT_ENABLED=True,
        RATE_LIMIT_WINDOW_SECONDS=15 * 60,
        RATE_LIMIT_MAX_REQUESTS=100,
        CORS_ORIGINS="*",
    )
    values.update(overrides)
    return BaseConfig(**values)


@pytest.fixture
def app():
    app = create_app(make_config())
    app.config["TESTING"] = True
    yield app
    app.extensions["db"].dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def create_user(client):
    def _create(name: str = "Ann", email: str = "ann@example.com") -> dict:
        resp = client.post("/users", json={"name": name, "email": email})
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()

    return _create


@pytest.fixture
def clock():
    return FakeClock()
