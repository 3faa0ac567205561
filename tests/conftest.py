"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- An isolated FastAPI application and test client per test
- Seed companies/jobs and bearer tokens
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.config import Settings
from jobly.core.database import Base
from jobly.core.security import TokenVerifier, create_access_token
from jobly.models import Company, Job
from main import create_app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
TEST_SECRET_KEY = "test-secret-key"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    # Match PostgreSQL: enforce FKs and ON DELETE CASCADE
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def db_session():
    """
    Create fresh tables and a session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def app(db_session):
    """Application wired to the test database and test signing key."""
    settings = Settings(SECRET_KEY=TEST_SECRET_KEY, JSON_LOGS=False, LOG_LEVEL="WARNING")
    return create_app(
        settings=settings,
        session_factory=TestingSessionLocal,
        token_verifier=TokenVerifier(TEST_SECRET_KEY),
    )


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers():
    token = create_access_token("admin", is_admin=True, secret_key=TEST_SECRET_KEY)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers():
    token = create_access_token("u1", is_admin=False, secret_key=TEST_SECRET_KEY)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_data(db_session):
    """
    Three companies and four jobs.

    Returns a dict mapping job titles to their generated ids.
    """
    db_session.add_all([
        Company(handle="c1", name="C1", description="Desc1", num_employees=1,
                logo_url="http://c1.img"),
        Company(handle="c2", name="C2", description="Desc2", num_employees=2,
                logo_url="http://c2.img"),
        Company(handle="c3", name="C3", description="Desc3", num_employees=3,
                logo_url="http://c3.img"),
    ])
    db_session.flush()

    jobs = [
        Job(title="j1", salary=1000, equity=Decimal("0.1"), company_handle="c1"),
        Job(title="j2", salary=2000, equity=Decimal("0.2"), company_handle="c2"),
        Job(title="j3", salary=3000, equity=Decimal("0.3"), company_handle="c3"),
        Job(title="j4", salary=4000, equity=None, company_handle="c3"),
    ]
    db_session.add_all(jobs)
    db_session.commit()

    return {job.title: job.id for job in jobs}
