"""SQLAlchemy engine/session initialization and lifecycle management."""
from __future__ import annotations

from typing import Any

from flask import Flask
from loguru import logger
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..errors import PersistenceError
from .base import Base
from .models import user  # noqa: F401


def _engine_options(url: str, app: Flask) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": app.config.get("SQL_ECHO", False), "future": True}
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            # One shared connection, otherwise every session sees an empty database.
            options["poolclass"] = StaticPool
        return options
    options.update(
        pool_pre_ping=True,
        pool_size=app.config.get("POOL_SIZE", 10),
        max_overflow=app.config.get("MAX_OVERFLOW", 20),
    )
    return options


class Database:
    def __init__(self, app: Flask | None = None) -> None:
        self.engine = None
        self.Session = None  # type: ignore[assignment]
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        url: str = app.config["DATABASE_URL"]
        self.engine = create_engine(url, **_engine_options(url, app))
        self.Session = scoped_session(
            sessionmaker(bind=self.engine, expire_on_commit=False, autoflush=False, future=True)
        )
        self.connect()
        logger.info("Database connected: {}", self.engine.url.render_as_string(hide_password=True))
        if app.config.get("AUTO_CREATE_TABLES", True):
            try:
                Base.metadata.create_all(self.engine)
            except SQLAlchemyError as exc:
                raise PersistenceError("could not create tables") from exc

        app.extensions["db"] = self

        @app.teardown_appcontext
        def remove_session(_: object | None) -> None:
            if self.Session is not None:
                self.Session.remove()

    def connect(self) -> None:
        """Verify the store answers; raised errors are fatal at startup."""
        assert self.engine is not None, "engine is not initialized"
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"could not connect to {self.engine.url.render_as_string(hide_password=True)}"
            ) from exc

    def ping(self) -> bool:
        try:
            self.connect()
        except PersistenceError:
            return False
        return True

    def dispose(self) -> None:
        if self.Session is not None:
            self.Session.remove()
        if self.engine is not None:
            self.engine.dispose()
