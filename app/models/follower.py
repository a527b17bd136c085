# app/models/follower.py
# Directed follow edges between students

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Follower(Base):
    """
    follower_id follows following_id.
    A follows B and B follows A are two independent edges.
    bell_enabled is changed by the follower only.
    """
    __tablename__ = "followers"
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_followers_pair"),
        CheckConstraint("follower_id <> following_id", name="ck_followers_not_self"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    follower_id = Column(
        Uuid,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    following_id = Column(
        Uuid,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    bell_enabled = Column(Boolean, nullable=False, default=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # ── Relationships ─────────────────────────────────────────────────────────
    following = relationship("Student", foreign_keys=[following_id])

    def __repr__(self) -> str:
        return f"<Follower {self.follower_id} -> {self.following_id} bell={self.bell_enabled}>"
