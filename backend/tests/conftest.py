# backend/tests/conftest.py
import os

# must be set before questlms.db builds its engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from questlms.db import Base, get_db
import questlms.models  # noqa: F401
from questlms.main import app


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    s = session_factory()
    yield s
    s.close()


@pytest.fixture()
def client(session_factory):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ----------------------------------------------------------------------
# Builders (go through the API so validation is exercised too)
# ----------------------------------------------------------------------
@pytest.fixture()
def make_user(client):
    counter = {"n": 0}

    def _make(role="student", full_name=None, username=None):
        counter["n"] += 1
        n = counter["n"]
        username = username or f"{role}{n}"
        r = client.post("/users", json={
            "username": username,
            "email": f"{username}@school.edu",
            "password": "secret123",
            "full_name": full_name or f"{role.title()} {n}",
            "role": role,
        })
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture()
def lecturer(make_user):
    return make_user("lecturer", full_name="Test Lecturer")


@pytest.fixture()
def student(make_user):
    return make_user("student", full_name="Test Student")


@pytest.fixture()
def make_course(client, lecturer):
    def _make(name="Total Quality Management", description="TQM course"):
        r = client.post("/courses", json={
            "name": name,
            "description": description,
            "lecturer_id": lecturer["id"],
        })
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture()
def course(make_course):
    return make_course()


@pytest.fixture()
def make_mission(client, course):
    def _make(meeting_number=1, points_reward=100, is_active=True, course_id=None, title=None):
        r = client.post("/missions", json={
            "course_id": course_id or course["id"],
            "title": title or f"Meeting {meeting_number}",
            "description": None,
            "meeting_number": meeting_number,
            "points_reward": points_reward,
            "is_active": is_active,
        })
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture()
def mission(make_mission):
    return make_mission()


@pytest.fixture()
def enroll(client):
    def _enroll(student_id, course_id):
        r = client.post("/progress", json={"student_id": student_id, "course_id": course_id})
        assert r.status_code == 201, r.text
        return r.json()

    return _enroll
