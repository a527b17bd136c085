# app/models/student.py
# Student identities and their public profiles.
# Owned by the accounts service -- mapped here read-only so notifications and
# follow edges can join sender / followed-student details.

import uuid

from sqlalchemy import Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_code = Column(String(50), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    avatar_url = Column(Text, nullable=True)

    # ── Relationships ─────────────────────────────────────────────────────────
    profile = relationship("Profile", back_populates="student", uselist=False)

    def __repr__(self) -> str:
        return f"<Student {self.student_code}>"


class Profile(Base):
    """
    Optional display details. A student without a profile row is shown by
    student_code.
    """
    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(
        Uuid,
        ForeignKey("students.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    display_name = Column(String(255), nullable=True)
    avatar_url = Column(Text, nullable=True)

    student = relationship("Student", back_populates="profile")
