"""
Tests for response shaping of senders and follow edges.
"""

import uuid
from datetime import datetime, timezone

from app.models.follower import Follower
from app.models.notification import Notification
from app.models.student import Profile, Student
from app.services.presenters import (
    display_name,
    present_follower,
    present_notification,
    sender_info,
)


def _student(code="STU-100", profile=None, **fields):
    student = Student(id=uuid.uuid4(), student_code=code, **fields)
    student.profile = profile
    return student


class TestSenderInfo:
    def test_profile_display_name_wins(self):
        student = _student(profile=Profile(display_name="Maya", avatar_url="https://a/img.png"))

        info = sender_info(student)

        assert info.display_name == "Maya"
        assert info.avatar_url == "https://a/img.png"

    def test_falls_back_to_student_code_without_profile(self):
        student = _student(code="STU-777", email="s@example.com")

        info = sender_info(student)

        assert info.display_name == "STU-777"
        assert info.avatar_url is None
        assert info.email == "s@example.com"

    def test_blank_profile_fields_fall_back(self):
        student = _student(code="STU-5", profile=Profile(display_name="", avatar_url=None))

        assert display_name(student) == "STU-5"
        assert sender_info(student).avatar_url is None

    def test_no_sender(self):
        assert sender_info(None) is None


def test_present_notification_includes_sender():
    sender = _student(code="STU-9")
    n = Notification(
        id=uuid.uuid4(),
        recipient_id=uuid.uuid4(),
        sender_id=sender.id,
        title="New reply",
        type="comment_reply",
        reference_id=uuid.uuid4(),
        reference_type="comment",
        is_read=False,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    n.sender = sender

    out = present_notification(n)

    assert out.title == "New reply"
    assert out.sender.display_name == "STU-9"
    assert out.is_read is False


def test_present_follower_includes_followed_student():
    followed = _student(code="STU-2", full_name="Bo", avatar_url="https://a/bo.png")
    edge = Follower(
        id=uuid.uuid4(),
        follower_id=uuid.uuid4(),
        following_id=followed.id,
        bell_enabled=True,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    edge.following = followed

    out = present_follower(edge)

    assert out.bell_enabled is True
    assert out.following.student_code == "STU-2"
    assert out.following.full_name == "Bo"
