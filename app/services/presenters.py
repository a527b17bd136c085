# app/services/presenters.py
# Shapes ORM rows into API responses.
# Every read path that returns sender details goes through sender_info() so the
# display-name fallback is the same everywhere.

from typing import Optional

from app.models.follower import Follower
from app.models.notification import Notification
from app.models.student import Student
from app.schemas.follower import FollowedStudent, FollowerResponse
from app.schemas.notification import NotificationResponse, SenderInfo


def display_name(student: Student) -> str:
    """Profile display name, falling back to the student code."""
    profile = student.profile
    if profile and profile.display_name:
        return profile.display_name
    return student.student_code


def avatar_url(student: Student) -> Optional[str]:
    profile = student.profile
    if profile and profile.avatar_url:
        return profile.avatar_url
    return None


def sender_info(student: Optional[Student]) -> Optional[SenderInfo]:
    if student is None:
        return None
    return SenderInfo(
        id=student.id,
        student_code=student.student_code,
        email=student.email,
        display_name=display_name(student),
        avatar_url=avatar_url(student),
    )


def present_notification(n: Notification) -> NotificationResponse:
    return NotificationResponse(
        id=n.id,
        recipient_id=n.recipient_id,
        sender_id=n.sender_id,
        title=n.title,
        type=n.type,
        reference_id=n.reference_id,
        reference_type=n.reference_type,
        is_read=bool(n.is_read),
        created_at=n.created_at,
        sender=sender_info(n.sender),
    )


def present_follower(edge: Follower) -> FollowerResponse:
    following = edge.following
    return FollowerResponse(
        id=edge.id,
        follower_id=edge.follower_id,
        following_id=edge.following_id,
        bell_enabled=edge.bell_enabled,
        created_at=edge.created_at,
        following=FollowedStudent.model_validate(following) if following else None,
    )
