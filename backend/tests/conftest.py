"""
Shared fixtures: a fresh in-memory SQLite database per test, the FastAPI app wired to it,
and bearer-token headers for an admin and a regular HR user.
"""

import os

# Must be set before hrm is imported: hrm.database builds its engine at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hrm import models, security
from hrm.database import Base, enable_sqlite_foreign_keys, get_db
from hrm.main import app


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    enable_sqlite_foreign_keys(test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Open short-lived sessions with ``with session_factory() as db:`` to seed or inspect rows."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def client(session_factory, tmp_path, monkeypatch):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    monkeypatch.setattr("hrm.candidates.UPLOAD_DIR", str(tmp_path / "uploads"))
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _create_user(session_factory, name, email, role, password="secret123"):
    with session_factory() as db:
        user = models.User(
            name=name,
            email=email,
            phone="9876543210",
            hashed_password=security.hash_password(password),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return {"id": user.id, "token": security.create_access_token(user)}


@pytest.fixture
def admin_user(session_factory):
    return _create_user(session_factory, "Alice Admin", "alice@example.com", "admin")


@pytest.fixture
def hr_user(session_factory):
    return _create_user(session_factory, "Harry Hr", "harry@example.com", "hr")


@pytest.fixture
def auth_headers(admin_user):
    return {"Authorization": f"Bearer {admin_user['token']}"}


@pytest.fixture
def hr_headers(hr_user):
    return {"Authorization": f"Bearer {hr_user['token']}"}


def candidate_payload(**overrides):
    payload = {
        "fullName": "Jane Doe",
        "email": "jane.doe@example.com",
        "phone": "5551234567",
        "totalExperience": 4,
        "skills": ["Python", "SQL"],
        "education": ["B.Sc. Computer Science"],
        "appliedPosition": ["Backend Developer"],
        "currentSalary": 50000,
        "expectedSalary": 65000,
        "notes": "Referred by a colleague",
    }
    payload.update(overrides)
    return payload


def interview_payload(candidate_id, **overrides):
    payload = {
        "interviewer": "Bob Smith",
        "candidateId": candidate_id,
        "date": "2024-02-01",
        "startTime": "2:00 PM",
        "endTime": "3:00 PM",
        "interviewRound": "Technical Assessment",
        "meetingLink": "https://meet.example.com/abc",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_candidate(client, auth_headers):
    def _create(**overrides):
        response = client.post("/api/candidate/add-details", json=candidate_payload(**overrides), headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create


@pytest.fixture
def create_interview(client, auth_headers):
    def _create(candidate_id, **overrides):
        response = client.post(
            "/api/interview/add-interview", json=interview_payload(candidate_id, **overrides), headers=auth_headers
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
