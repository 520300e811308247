from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from userapi.db.base import Base
from userapi.db.repositories.user_repo import UserRepository
from userapi.domain.user import User
from userapi.errors import PersistenceError


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, expire_on_commit=False)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def repo(session):
    return UserRepository(session)


def test_insert_assigns_id(repo):
    user = repo.insert(User(id="", name="Ann", email="ann@example.com"))
    assert user.id
    assert repo.find_by_id(user.id) == user


def test_find_many_keeps_insertion_order(repo):
    names = [f"u{i}" for i in range(5)]
    for name in names:
        repo.insert(User(id="", name=name, email=f"{name}@example.com"))

    assert [u.name for u in repo.find_many(skip=0, limit=10)] == names
    assert [u.name for u in repo.find_many(skip=2, limit=2)] == ["u2", "u3"]
    assert repo.count() == 5


def test_save_updates_existing(repo):
    user = repo.insert(User(id="", name="Ann", email="ann@example.com"))
    user.name = "Anne"
    repo.save(user)
    assert repo.find_by_id(user.id).name == "Anne"
    assert repo.count() == 1


def test_save_inserts_missing(repo):
    repo.save(User(id="fixed-id", name="Ann", email="ann@example.com"))
    assert repo.find_by_id("fixed-id").email == "ann@example.com"


def test_delete_by_id_is_idempotent(repo):
    user = repo.insert(User(id="", name="Ann", email="ann@example.com"))
    repo.delete_by_id(user.id)
    repo.delete_by_id(user.id)
    assert repo.find_by_id(user.id) is None
    assert repo.count() == 0


def test_store_errors_become_persistence_errors(repo, session):
    Base.metadata.drop_all(session.get_bind())
    with pytest.raises(PersistenceError):
        repo.count()
    with pytest.raises(PersistenceError):
        repo.insert(User(id="", name="Ann", email="ann@example.com"))


def test_out_of_range_integers_become_persistence_errors(repo):
    with pytest.raises(PersistenceError):
        repo.find_many(skip=0, limit=10**25)
