"""Shared fixtures: an isolated in-memory database and application per test."""

import itertools
import os
from decimal import Decimal

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from sportmate.main import create_app
from sportmate.repository import field_repository, user_repository


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def app(engine):
    return create_app(engine=engine)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def session_factory(app):
    return app.state.session_factory


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_user(session_factory):
    counter = itertools.count(1)

    def _make_user(name=None, *, is_admin=False):
        index = next(counter)
        session = session_factory()
        try:
            return user_repository.create_user(
                session,
                {
                    "name": name or f"Player {index}",
                    "email": f"player{index}@example.com",
                    "is_admin": is_admin,
                },
            )
        finally:
            session.close()

    return _make_user


@pytest.fixture
def make_field(session_factory):
    def _make_field(*, price="100000", is_available=True, sport="football", location="Lima"):
        session = session_factory()
        try:
            return field_repository.create_field(
                session,
                {
                    "name": f"{sport.title()} field",
                    "location": location,
                    "sport": sport,
                    "price": Decimal(price),
                    "images": [],
                    "is_available": is_available,
                },
            )
        finally:
            session.close()

    return _make_field
