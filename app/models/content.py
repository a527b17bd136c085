# app/models/content.py
# Forum threads and comments that notifications point at via reference_id.
# Owned by the forum service -- only the columns used for group labels are mapped.

import uuid

from sqlalchemy import Column, ForeignKey, String, Text, Uuid

from app.db.base_class import Base


class Thread(Base):
    __tablename__ = "threads"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    thread_id = Column(Uuid, ForeignKey("threads.id", ondelete="CASCADE"), nullable=True)
    content = Column(Text, nullable=True)
