"""
Shared pytest fixtures.

The app is pointed at an in-memory SQLite database: settings are seeded from
the environment before anything under app/ is imported, and get_db is swapped
through app.dependency_overrides so every request uses the test engine.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.db.base  # noqa: F401,E402
from app.core.security import create_access_token  # noqa: E402
from app.db.base_class import Base  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app as fastapi_app  # noqa: E402
from app.models.content import Comment, Thread  # noqa: E402
from app.models.follower import Follower  # noqa: E402
from app.models.notification import Notification  # noqa: E402
from app.models.student import Profile, Student  # noqa: E402

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    yield factory
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()


# ── Factories ─────────────────────────────────────────────────────────────────

@pytest.fixture
def make_student(db):
    def _make(student_code, display_name=None, avatar_url=None, **fields):
        student = Student(student_code=student_code, **fields)
        db.add(student)
        db.flush()
        if display_name is not None or avatar_url is not None:
            db.add(Profile(student_id=student.id, display_name=display_name, avatar_url=avatar_url))
        db.commit()
        db.refresh(student)
        return student

    return _make


@pytest.fixture
def make_notification(db):
    def _make(recipient, notification_type="system", minutes=0, sender=None, title=None, **fields):
        n = Notification(
            recipient_id=recipient.id,
            sender_id=sender.id if sender else None,
            title=title or f"{notification_type} notification",
            type=notification_type,
            created_at=BASE_TIME + timedelta(minutes=minutes),
            **fields,
        )
        db.add(n)
        db.commit()
        return n

    return _make


@pytest.fixture
def make_thread(db):
    def _make(title):
        thread = Thread(title=title)
        db.add(thread)
        db.commit()
        return thread

    return _make


@pytest.fixture
def make_comment(db):
    def _make(content):
        comment = Comment(content=content)
        db.add(comment)
        db.commit()
        return comment

    return _make


@pytest.fixture
def make_follow(db):
    def _make(follower, following, bell_enabled=True, minutes=0):
        edge = Follower(
            follower_id=follower.id,
            following_id=following.id,
            bell_enabled=bell_enabled,
            created_at=BASE_TIME + timedelta(minutes=minutes),
        )
        db.add(edge)
        db.commit()
        return edge

    return _make


@pytest.fixture
def alice(make_student):
    return make_student("STU-001", display_name="Alice", avatar_url="https://cdn.example/alice.png")


@pytest.fixture
def bob(make_student):
    return make_student("STU-002", email="bob@example.com")


@pytest.fixture
def auth_headers():
    def _headers(student):
        return {"Authorization": f"Bearer {create_access_token(student.id)}"}

    return _headers
