# app/services/follow_service.py
# Follow edges between students and their per-edge notification bell
#
# Usage (from endpoints):
#   from app.services import follow_service
#   follow_service.follow(db, follower_id=me.id, following_id=other_id)
#
# At most one edge exists per (follower_id, following_id). The pre-insert check
# gives a friendly error; uq_followers_pair catches concurrent duplicates.

import logging
from typing import List
from uuid import UUID

from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session, joinedload

from app.core.exceptions import DuplicateFollowError, InvalidFollowError, NotFoundError
from app.models.follower import Follower
from app.models.student import Student
from app.schemas.follower import FollowerResponse
from app.services.presenters import present_follower

logger = logging.getLogger("notifications.follow")

# How the store reports a uq_followers_pair violation: PostgreSQL names the
# constraint, SQLite lists the constrained columns.
DUPLICATE_EDGE_MARKERS = (
    "uq_followers_pair",
    "UNIQUE constraint failed: followers.follower_id, followers.following_id",
)


def is_duplicate_edge(exc: IntegrityError) -> bool:
    """True only for a violation of the one-edge-per-pair constraint."""
    constraint = getattr(getattr(exc.orig, "diag", None), "constraint_name", None)
    if constraint:
        return constraint == "uq_followers_pair"
    message = str(exc.orig)
    return any(marker in message for marker in DUPLICATE_EDGE_MARKERS)


def _edges(db: Session) -> Query:
    return db.query(Follower).options(joinedload(Follower.following))


def _pair(follower_id: UUID, following_id: UUID):
    return and_(
        Follower.follower_id == follower_id,
        Follower.following_id == following_id,
    )


def follow(db: Session, follower_id: UUID, following_id: UUID) -> FollowerResponse:
    """
    Create a follow edge with the bell enabled.

    Raises:
        InvalidFollowError: follower_id == following_id
        NotFoundError: the student to follow does not exist
        DuplicateFollowError: the edge already exists
        IntegrityError: any other constraint failure, left to the store-error handler
    """
    if follower_id == following_id:
        raise InvalidFollowError()

    if db.get(Student, following_id) is None:
        raise NotFoundError("Student not found")

    existing = db.query(Follower.id).filter(_pair(follower_id, following_id)).first()
    if existing:
        raise DuplicateFollowError()

    edge = Follower(follower_id=follower_id, following_id=following_id, bell_enabled=True)
    db.add(edge)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_duplicate_edge(exc):
            raise DuplicateFollowError()
        raise

    logger.info(f"Student {follower_id} followed {following_id}")
    edge = _edges(db).filter(Follower.id == edge.id).one()
    return present_follower(edge)


def unfollow(db: Session, follower_id: UUID, following_id: UUID) -> int:
    """
    Delete the edge for the pair. Deleting an edge that does not exist is not
    an error; returns the number of rows removed (0 or 1).
    """
    deleted = (
        db.query(Follower)
        .filter(_pair(follower_id, following_id))
        .delete()
    )
    db.commit()
    logger.info(f"Student {follower_id} unfollowed {following_id} (rows={deleted})")
    return deleted


def toggle_bell(
    db: Session,
    follower_id: UUID,
    following_id: UUID,
    enabled: bool,
) -> FollowerResponse:
    edge = _edges(db).filter(_pair(follower_id, following_id)).first()
    if edge is None:
        raise NotFoundError("Follow relationship not found")

    edge.bell_enabled = enabled
    db.commit()
    logger.info(f"Bell {'enabled' if enabled else 'disabled'}: {follower_id} -> {following_id}")
    return present_follower(edge)


def list_following(db: Session, follower_id: UUID) -> List[FollowerResponse]:
    edges = (
        _edges(db)
        .filter(Follower.follower_id == follower_id)
        .order_by(Follower.created_at.desc())
        .all()
    )
    return [present_follower(edge) for edge in edges]


def bell_subscribers(db: Session, following_id: UUID) -> List[UUID]:
    """Followers of following_id who want to be notified about their activity."""
    rows = (
        db.query(Follower.follower_id)
        .filter(
            and_(
                Follower.following_id == following_id,
                Follower.bell_enabled == True,  # noqa: E712
            )
        )
        .order_by(Follower.created_at)
        .all()
    )
    return [row.follower_id for row in rows]
