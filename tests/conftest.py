import pytest
import os
import shutil
import tempfile
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="jobportal-uploads-")

from jobportal.database import Base, get_db
from jobportal.core.config import settings
from jobportal.main import app
from jobportal.models.user import User, UserRole
from jobportal.services import auth as auth_service
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

PASSWORD = "Password123!"
# Hashing once keeps bcrypt out of every fixture
PASSWORD_HASH = auth_service.get_password_hash(PASSWORD)

PDF_MIMETYPE = "application/pdf"


@pytest.fixture(scope="function")
def db_session():
    """Fresh in-memory database per test; services commit freely."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def upload_dir():
    """The configured upload directory, emptied for each test."""
    path = Path(settings.upload_dir)
    shutil.rmtree(path, ignore_errors=True)
    path.mkdir(parents=True, exist_ok=True)
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture(scope="function")
def make_user(db_session):
    """Factory for users stored straight into the test database."""
    counter = {"n": 0}

    def _make_user(role: UserRole = UserRole.JOB_SEEKER, name: str = None) -> User:
        counter["n"] += 1
        user = User(
            name=name or f"{role.value} {counter['n']}",
            email=f"{role.value}{counter['n']}@acme.io",
            hashed_password=PASSWORD_HASH,
            role=role,
            is_active=True,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture(scope="function")
def employer(make_user):
    return make_user(UserRole.EMPLOYER, name="TechCorp HR")


@pytest.fixture(scope="function")
def other_employer(make_user):
    return make_user(UserRole.EMPLOYER, name="Rival HR")


@pytest.fixture(scope="function")
def seeker(make_user):
    return make_user(UserRole.JOB_SEEKER, name="Jane Seeker")


@pytest.fixture(scope="function")
def admin_user(make_user):
    return make_user(UserRole.ADMIN, name="System Admin")


@pytest.fixture(scope="function")
def auth_headers():
    """Helper fixture to build bearer headers for a user."""
    def _auth_headers(user):
        return {"Authorization": f"Bearer {auth_service.token_for_user(user)}"}
    return _auth_headers


@pytest.fixture(scope="function")
def job_payload():
    def _job_payload(**overrides):
        payload = {
            "title": "Frontend Developer",
            "company": "TechCorp Inc.",
            "location": "San Francisco, CA",
            "type": "Full-time",
            "experience": "Mid Level",
            "category": "Technology",
            "salary_min": 90000,
            "salary_max": 120000,
            "salary_range": "$90,000 - $120,000",
            "description": "Build user interfaces with React and modern CSS.",
            "requirements": "3+ years of experience with React.",
            "skills": ["JavaScript", "React", "CSS"],
            "benefits": ["Health Insurance", "Remote Work"],
        }
        payload.update(overrides)
        return payload
    return _job_payload


@pytest.fixture(scope="function")
def create_job(client, employer, auth_headers, job_payload):
    """Create a job through the API and return its JSON representation."""
    def _create_job(owner=None, **overrides):
        response = client.post(
            "/api/jobs",
            headers=auth_headers(owner or employer),
            json=job_payload(**overrides),
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]
    return _create_job


@pytest.fixture(scope="function")
def client(db_session, upload_dir):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def user_password():
    """Plain-text password shared by every fixture user."""
    return PASSWORD
