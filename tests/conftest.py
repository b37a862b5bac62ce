"""
Global pytest config and fixtures.

Settings are read once at import time, so the environment is prepared before
anything under `app` is imported.
"""

import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="guest-admin-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ENVIRONMENT"] = "test"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["EMAIL_USER"] = ""
os.environ["EMAIL_PASSWORD"] = ""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.infrastructure.database import Base, SessionLocal, engine
from app.application.services.auth_service import create_access_token, create_admin
from app.domain.models.guest_account import GuestAccount
from app.domain.schemas.auth import AdminContext
from app.infrastructure.repositories.guest_account_repository import SQLAlchemyGuestAccountRepository


@pytest.fixture(autouse=True)
def _tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def repo(db):
    return SQLAlchemyGuestAccountRepository(db, GuestAccount)


@pytest.fixture
def admin(db):
    return create_admin(db, name="Alice", email="alice@sub.example.com", password="secret@123")


@pytest.fixture
def other_admin(db):
    return create_admin(db, name="Oscar", email="oscar@other.org", password="secret@456")


@pytest.fixture
def admin_ctx(admin):
    return AdminContext(id=admin.id, email=admin.email)


@pytest.fixture
def client():
    # No context manager: the lifespan (default admin seeding) is not needed here
    return TestClient(app)


def _headers(email):
    return {"Authorization": f"Bearer {create_access_token({'sub': email})}"}


@pytest.fixture
def auth_headers(admin):
    return _headers(admin.email)


@pytest.fixture
def other_headers(other_admin):
    return _headers(other_admin.email)


@pytest.fixture
def guest_payload():
    return {
        "base_username": "bob",
        "expiration": {"days": 14},
        "full_name": "Bob Guest",
        "email": "bob@guest.org",
        "phone_number": "+4712345678",
    }
