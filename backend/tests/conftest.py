"""
Test configuration and fixtures
"""
import os
from datetime import datetime, timedelta, timezone

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-for-testing"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from core.database import get_session
from main import app
from models.complaints import Complaint, ComplaintCategory, ComplaintStatus
from models.user import User, UserRole
from repositories.complaint_repository import ComplaintRepository
from services.complaint_service import ComplaintService
from services.guard import Principal
from utils.security import create_access_token


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def make_user(session):
    """Insert a user; the password hash is a placeholder unless one is given."""
    counter = {"n": 0}

    def _make(role=UserRole.student, name=None, email=None, password_hash="not-a-real-hash"):
        counter["n"] += 1
        user = User(
            name=name or f"User {counter['n']}",
            email=email or f"user{counter['n']}@college.com",
            password_hash=password_hash,
            role=role,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


@pytest.fixture
def student(make_user):
    return make_user(name="Student A")


@pytest.fixture
def other_student(make_user):
    return make_user(name="Student B")


@pytest.fixture
def admin(make_user):
    return make_user(role=UserRole.admin, name="Admin User")


def principal_for(user: User) -> Principal:
    return Principal(id=user.id, role=user.role)


@pytest.fixture
def repository(session):
    return ComplaintRepository(session)


@pytest.fixture
def service(repository):
    return ComplaintService(repository)


@pytest.fixture
def make_complaint(session):
    """Insert a complaint directly, bypassing the service."""
    base = datetime(2024, 1, 1, 9, 0, 0, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _make(owner, category=ComplaintCategory.hostel, status=ComplaintStatus.pending, title=None, created_at=None):
        counter["n"] += 1
        complaint = Complaint(
            owner_id=owner.id,
            category=category,
            title=title or f"Complaint {counter['n']}",
            description="Details",
            status=status,
            created_at=created_at or base + timedelta(minutes=counter["n"]),
        )
        session.add(complaint)
        session.commit()
        session.refresh(complaint)
        return complaint

    return _make


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}
