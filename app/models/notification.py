# app/models/notification.py
# In-app notifications delivered to a student

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from app.db.base_class import Base

NOTIFICATION_TYPES = (
    "thread_comment",   # Someone commented on your thread
    "comment_reply",    # Someone replied to your comment
    "follow",           # Someone followed you
    "mention",          # @mention in a thread or comment
    "like",             # Someone liked your content
    "system",           # Platform announcement
)

REFERENCE_TYPES = ("thread", "comment", "resource", "collection")


class Notification(Base):
    """
    Notification owned by its recipient.
    Immutable after creation except for is_read.
    reference_id points at a thread, comment, resource or collection depending
    on reference_type -- polymorphic, so no foreign key.
    """
    __tablename__ = "notifications"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    recipient_id = Column(
        Uuid,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id = Column(
        Uuid,
        ForeignKey("students.id", ondelete="SET NULL"),
        nullable=True,
    )

    title = Column(String(255), nullable=False)
    type = Column(
        Enum(*NOTIFICATION_TYPES, name="notification_type_enum"),
        nullable=False,
        index=True,
    )

    # ── Reference ─────────────────────────────────────────────────────────────
    reference_id = Column(Uuid, nullable=True, index=True)
    reference_type = Column(
        Enum(*REFERENCE_TYPES, name="notification_reference_type_enum"),
        nullable=True,
    )

    is_read = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    # ── Relationships ─────────────────────────────────────────────────────────
    sender = relationship("Student", foreign_keys=[sender_id])

    def __repr__(self) -> str:
        return (
            f"<Notification recipient={self.recipient_id} "
            f"type={self.type} read={self.is_read}>"
        )
