# app/services/notification_service.py
# Notification reads, writes and read-state for a single recipient
#
# Usage (from endpoints or other services):
#   from app.services import notification_service
#   notification_service.create_notification(db, {"recipient_id": ..., "title": ..., "type": "mention"})
#   notification_service.notify_followers(db, sender_id=author_id, title="New thread", notification_type="system")
#
# Every query is scoped to recipient_id and ordered newest-first.

import logging
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from sqlalchemy import and_
from sqlalchemy.orm import Query, Session, joinedload

from app.core.exceptions import NotFoundError
from app.models.content import Comment, Thread
from app.models.notification import Notification
from app.models.student import Student
from app.schemas.notification import NotificationResponse
from app.services import follow_service
from app.services.grouping import group_notifications
from app.services.presenters import present_notification

logger = logging.getLogger("notifications.service")

# Columns a caller may set on insert -- anything else in the payload is dropped
CREATE_FIELDS = (
    "recipient_id",
    "sender_id",
    "title",
    "type",
    "reference_id",
    "reference_type",
)


def _with_sender(db: Session) -> Query:
    return db.query(Notification).options(
        joinedload(Notification.sender).joinedload(Student.profile)
    )


def _owned(notification_id: UUID, user_id: UUID):
    return and_(
        Notification.id == notification_id,
        Notification.recipient_id == user_id,
    )


# ── Reads ─────────────────────────────────────────────────────────────────────

def list_notifications(
    db: Session,
    user_id: UUID,
    notification_type: Optional[str] = None,
    is_read: Optional[bool] = None,
    limit: Optional[int] = None,
) -> List[NotificationResponse]:
    """
    A recipient's notifications, newest first.
    Each filter is optional; None means no constraint.
    """
    query = _with_sender(db).filter(Notification.recipient_id == user_id)
    if notification_type is not None:
        query = query.filter(Notification.type == notification_type)
    if is_read is not None:
        query = query.filter(Notification.is_read == is_read)

    query = query.order_by(Notification.created_at.desc())
    if limit is not None:
        query = query.limit(limit)

    return [present_notification(n) for n in query.all()]


def get_notification(db: Session, notification_id: UUID, user_id: UUID) -> NotificationResponse:
    """Raises NotFoundError when the notification is missing or not the caller's."""
    n = _with_sender(db).filter(_owned(notification_id, user_id)).first()
    if n is None:
        raise NotFoundError("Notification not found")
    return present_notification(n)


def thread_comment_groups(db: Session, user_id: UUID) -> List[Dict[str, Any]]:
    """Comments on the recipient's threads, grouped per thread."""
    rows = (
        _with_sender(db)
        .add_columns(Thread.title)
        .outerjoin(Thread, Thread.id == Notification.reference_id)
        .filter(
            and_(
                Notification.recipient_id == user_id,
                Notification.type == "thread_comment",
            )
        )
        .order_by(Notification.created_at.desc())
        .all()
    )
    return group_notifications(
        ((present_notification(n), title) for n, title in rows),
        "thread_comment",
    )


def comment_reply_groups(db: Session, user_id: UUID) -> List[Dict[str, Any]]:
    """Replies to the recipient's comments, grouped per parent comment."""
    rows = (
        _with_sender(db)
        .add_columns(Comment.content)
        .outerjoin(Comment, Comment.id == Notification.reference_id)
        .filter(
            and_(
                Notification.recipient_id == user_id,
                Notification.type == "comment_reply",
            )
        )
        .order_by(Notification.created_at.desc())
        .all()
    )
    return group_notifications(
        ((present_notification(n), content) for n, content in rows),
        "comment_reply",
    )


def unread_count(db: Session, user_id: UUID) -> int:
    return (
        db.query(Notification)
        .filter(
            and_(
                Notification.recipient_id == user_id,
                Notification.is_read == False,  # noqa: E712
            )
        )
        .count()
    )


# ── Writes ────────────────────────────────────────────────────────────────────

def create_notification(db: Session, data: Mapping[str, Any]) -> NotificationResponse:
    """
    Insert a notification from a payload.
    Only CREATE_FIELDS are read; is_read always starts False.
    """
    values = {field: data.get(field) for field in CREATE_FIELDS}
    n = Notification(**values, is_read=False)
    db.add(n)
    db.commit()
    logger.info(f"Notification {n.id} ({n.type}) created for {n.recipient_id}")
    return present_notification(n)


def notify_followers(
    db: Session,
    sender_id: UUID,
    title: str,
    notification_type: str,
    reference_id: Optional[UUID] = None,
    reference_type: Optional[str] = None,
) -> List[NotificationResponse]:
    """
    Send one notification to every follower of sender_id whose bell is on.
    Followers with the bell disabled are skipped.
    """
    recipients = follow_service.bell_subscribers(db, sender_id)
    created = []
    for recipient_id in recipients:
        n = Notification(
            recipient_id=recipient_id,
            sender_id=sender_id,
            title=title,
            type=notification_type,
            reference_id=reference_id,
            reference_type=reference_type,
            is_read=False,
        )
        db.add(n)
        created.append(n)
    db.commit()

    logger.info(f"Fanned out '{notification_type}' from {sender_id} to {len(created)} followers")
    return [present_notification(n) for n in created]


def mark_as_read(db: Session, notification_id: UUID, user_id: UUID) -> NotificationResponse:
    n = _with_sender(db).filter(_owned(notification_id, user_id)).first()
    if n is None:
        raise NotFoundError("Notification not found")
    n.is_read = True
    db.commit()
    return present_notification(n)


def mark_all_as_read(db: Session, user_id: UUID) -> int:
    """Single UPDATE over the recipient's unread rows. Returns rows changed."""
    updated = (
        db.query(Notification)
        .filter(
            and_(
                Notification.recipient_id == user_id,
                Notification.is_read == False,  # noqa: E712
            )
        )
        .update({"is_read": True})
    )
    db.commit()
    logger.info(f"Marked {updated} notifications read for {user_id}")
    return updated


def delete_notification(db: Session, notification_id: UUID, user_id: UUID) -> int:
    """Deleting a missing or foreign notification removes nothing and is not an error."""
    deleted = (
        db.query(Notification)
        .filter(_owned(notification_id, user_id))
        .delete()
    )
    db.commit()
    return deleted


def delete_all_notifications(db: Session, user_id: UUID) -> int:
    deleted = (
        db.query(Notification)
        .filter(Notification.recipient_id == user_id)
        .delete()
    )
    db.commit()
    logger.info(f"Deleted {deleted} notifications for {user_id}")
    return deleted
