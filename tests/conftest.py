"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown with seeded companies, jobs and users
- FastAPI test client
- Bearer headers for a regular user and an admin
"""

import os

# Cheap hashing for the seeded users; must be set before settings are loaded
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.database import Base, get_db, run_query
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.user import UserRegisterRequest
import jobly.models  # noqa: F401
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def enable_foreign_keys(dbapi_connection, connection_record):
    """SQLite only enforces ON DELETE CASCADE with this pragma."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def seed(db):
    """Companies c1..c3, one job each (j1..j3), users u1 and admin."""
    for n in (1, 2, 3):
        run_query(
            db,
            """INSERT INTO companies (handle, name, num_employees, description, logo_url)
               VALUES ($1, $2, $3, $4, $5)""",
            [f"c{n}", f"C{n}", n, f"Desc{n}", f"http://c{n}.img"],
        )

    for n, salary in ((1, 75000), (2, 95000), (3, 175000)):
        run_query(
            db,
            """INSERT INTO jobs (title, salary, equity, company_handle)
               VALUES ($1, $2, $3, $4)""",
            [f"j{n}", salary, 0.5, f"c{n}"],
        )

    for username, is_admin in (("u1", False), ("admin", True)):
        user_crud.register(
            db,
            UserRegisterRequest(
                username=username,
                password="password1",
                firstName=f"{username}F",
                lastName=f"{username}L",
                email=f"{username}@user.com",
            ),
            is_admin=is_admin,
        )


@pytest.fixture
def db_session():
    """
    Create a fresh, seeded database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        seed(db)
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def u1_headers():
    """Bearer header for the regular user u1"""
    return {"Authorization": f"Bearer {create_token('u1', is_admin=False)}"}


@pytest.fixture
def admin_headers():
    """Bearer header for the admin user"""
    return {"Authorization": f"Bearer {create_token('admin', is_admin=True)}"}
