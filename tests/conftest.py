"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from taskboard.database import create_tables, get_db
from taskboard.main import app
from taskboard.models import User, UserRole
from taskboard.routers.auth import create_access_token, get_password_hash

PASSWORD = "s3cret-pass"


@pytest.fixture
def engine():
    """In-memory SQLite shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_user(db, name: str, email: str, role: UserRole = UserRole.USER) -> User:
    user = User(name=name, email=email, hashed_password=get_password_hash(PASSWORD), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(data={'sub': user.email})}"}


@pytest.fixture
def alice(db) -> User:
    return make_user(db, "Alice", "alice@example.com")


@pytest.fixture
def bob(db) -> User:
    return make_user(db, "Bob", "bob@example.com")


@pytest.fixture
def admin(db) -> User:
    return make_user(db, "Root", "admin@example.com", role=UserRole.ADMIN)
