# app/schemas/follower.py

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class FollowedStudent(BaseModel):
    """Public fields of the followed student."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    student_code: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None


class FollowerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    follower_id: UUID
    following_id: UUID
    bell_enabled: bool = True
    created_at: datetime
    following: Optional[FollowedStudent] = None


class FollowRequest(BaseModel):
    following_id: UUID


class BellToggleRequest(BaseModel):
    bell_enabled: bool


class FollowingListResponse(BaseModel):
    success: bool = True
    count: int
    following: List[FollowerResponse]


class FollowMutationResponse(BaseModel):
    success: bool = True
    message: str
    follower: FollowerResponse
