"""
Pytest configuration for the auth service tests.

Points the service at a throwaway SQLite file and log directory before any
application module reads its settings.
"""
import os
import tempfile

_tmp_dir = tempfile.mkdtemp(prefix="jwt_auth_tests_")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_tmp_dir}/test_auth.db")
os.environ.setdefault("LOG_DIR", os.path.join(_tmp_dir, "logs"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from jwt_auth.jwt_auth.auth_service.db import Base, engine, SessionLocal  # noqa: E402
from jwt_auth.jwt_auth.auth_service.main import app  # noqa: E402


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture
def db_session():
    """Create a database session for testing."""
    session = SessionLocal()
    yield session
    session.close()
