"""
Shared fixtures: an in-memory database seeded with the demo users and
accounts, and a TestClient wired to it.
"""

import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DB", "0")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import database
import main
import models
from permissions import CurrentUser

API_PREFIX = "/api/v1"
STAFF = ("kyloren@vader.com", "password123")
OTHER_STAFF = ("obiwan@therebellion.com", "password123")
CLIENT = ("thor@avengers.com", "password1")
OTHER_CLIENT = ("olegunnar@manutd.com", "password1")
ACCOUNT_NUMBER = 8897654324


@pytest.fixture
def db_session():
    """Fresh in-memory database for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database.Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine)
    session = TestingSession()
    database.seed_db(session)
    yield session
    session.close()
    database.Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    main.app.dependency_overrides[main.get_db] = override_get_db
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


def signin(client, credentials):
    email, password = credentials
    r = client.post(f"{API_PREFIX}/auth/signin", json={"email": email, "password": password})
    assert r.status_code == 200
    return r.json()["data"][0]["token"]


@pytest.fixture
def staff_token(client):
    return signin(client, STAFF)


@pytest.fixture
def other_staff_token(client):
    return signin(client, OTHER_STAFF)


@pytest.fixture
def client_token(client):
    return signin(client, CLIENT)


def identity(db_session, email):
    user = db_session.query(models.User).filter_by(email=email).one()
    return CurrentUser(id=user.id, email=user.email, role=user.role)


@pytest.fixture
def cashier(db_session):
    return identity(db_session, STAFF[0])


@pytest.fixture
def customer(db_session):
    return identity(db_session, CLIENT[0])
