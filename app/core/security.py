# app/core/security.py
# JWT decoding for requests forwarded by the gateway / auth service
# Used by: dependencies.py
#
# Tokens are minted elsewhere; create_access_token exists for local tooling
# and tests that need a valid Bearer header.

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from app.core.config import settings


def create_access_token(student_id: UUID, expires_minutes: int = 60) -> str:
    """
    Create a short-lived JWT access token.

    Payload:
        sub  -- student UUID as string
        type -- "access"
        exp  -- expiry timestamp
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(student_id),
        "type": "access",
        "exp": now + timedelta(minutes=expires_minutes),
        "iat": now,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT token.
    Returns the payload dict if valid, None if expired or invalid.
    Does NOT check the database -- use dependencies.py for full validation.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
        return payload
    except JWTError:
        return None
