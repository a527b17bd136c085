# app/core/dependencies.py
# FastAPI dependency functions for authentication
#
# The acting student is the `sub` claim of the Bearer token. Every
# recipient/follower-scoped route depends on require_login().

from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.security import decode_token
from app.db.session import get_db
from app.models.student import Student

# Bearer token extractor -- auto_error=False so we can handle 401 ourselves
bearer_scheme = HTTPBearer(auto_error=False)


def _extract_student_from_token(
    credentials: Optional[HTTPAuthorizationCredentials],
    db: Session,
) -> Optional[Student]:
    """
    Internal helper: decode Bearer token and load the student from DB.
    Returns None if no token, invalid token, or student not found.
    """
    if not credentials:
        return None

    payload = decode_token(credentials.credentials)
    if not payload:
        return None

    if payload.get("type") != "access":
        return None

    subject = payload.get("sub")
    if not subject:
        return None

    try:
        student_id = UUID(subject)
    except ValueError:
        return None

    return db.get(Student, student_id)


def require_login(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Student:
    """
    Requires a valid JWT token. Raises 401 if not authenticated.
    """
    student = _extract_student_from_token(credentials, db)
    if not student:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required. Please log in.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return student
