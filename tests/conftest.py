"""Shared fixtures: in-memory SQLite, an app client and token helpers."""

import os

# must be set before storefront is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models import UserModel
from storefront.main import app
from storefront.services.auth_service import issue_token


@pytest.fixture(autouse=True)
def _tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def query():
    """Run fn(session) in a short-lived session and return its result."""

    def run(fn):
        session = SessionLocal()
        try:
            return fn(session)
        finally:
            session.close()

    return run


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user():
    def create(email="ann@example.com", first_name="Ann", last_name="Lee", role="user"):
        session = SessionLocal()
        try:
            user = UserModel(email=email, first_name=first_name, last_name=last_name, role=role)
            session.add(user)
            session.commit()
            return user.id
        finally:
            session.close()

    return create


def bearer(user_id, role="user"):
    return {"Authorization": f"Bearer {issue_token(user_id, role)}"}


@pytest.fixture
def user_id(make_user):
    return make_user()


@pytest.fixture
def auth(user_id):
    return bearer(user_id)


@pytest.fixture
def admin_auth(make_user):
    admin_id = make_user(email="admin@example.com", first_name="Site", last_name="Admin", role="admin")
    return bearer(admin_id, "admin")


@pytest.fixture
def token_for():
    return bearer
