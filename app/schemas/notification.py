# app/schemas/notification.py

from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

NotificationType = Literal[
    "thread_comment", "comment_reply", "follow", "mention", "like", "system"
]
ReferenceType = Literal["thread", "comment", "resource", "collection"]


class SenderInfo(BaseModel):
    id: UUID
    student_code: str
    email: Optional[str] = None
    display_name: str
    avatar_url: Optional[str] = None


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    recipient_id: UUID
    sender_id: Optional[UUID] = None
    title: str
    type: NotificationType
    reference_id: Optional[UUID] = None
    reference_type: Optional[ReferenceType] = None
    is_read: bool = False
    created_at: datetime
    sender: Optional[SenderInfo] = None


class NotificationCreateRequest(BaseModel):
    """Unknown fields in the body are dropped, never stored."""

    model_config = ConfigDict(extra="ignore")

    recipient_id: UUID
    title: str = Field(..., min_length=1, max_length=255)
    type: NotificationType
    sender_id: Optional[UUID] = None
    reference_id: Optional[UUID] = None
    reference_type: Optional[ReferenceType] = None


# ── Grouped views ─────────────────────────────────────────────────────────────

class ThreadCommentGroup(BaseModel):
    thread_id: Optional[UUID] = None
    thread_title: str
    type: Literal["thread_comment"] = "thread_comment"
    count: int
    notifications: List[NotificationResponse]
    latest_created_at: datetime
    has_unread: bool


class CommentReplyGroup(BaseModel):
    comment_id: Optional[UUID] = None
    comment_preview: str
    type: Literal["comment_reply"] = "comment_reply"
    count: int
    notifications: List[NotificationResponse]
    latest_created_at: datetime
    has_unread: bool


# ── Envelopes ─────────────────────────────────────────────────────────────────

class NotificationListResponse(BaseModel):
    success: bool = True
    count: int
    notifications: List[NotificationResponse]


class ThreadCommentGroupsResponse(BaseModel):
    success: bool = True
    count: int
    grouped_notifications: List[ThreadCommentGroup]


class CommentReplyGroupsResponse(BaseModel):
    success: bool = True
    count: int
    grouped_notifications: List[CommentReplyGroup]


class NotificationDetailResponse(BaseModel):
    success: bool = True
    notification: NotificationResponse


class NotificationMutationResponse(BaseModel):
    success: bool = True
    message: str
    notification: NotificationResponse


class UnreadCountResponse(BaseModel):
    success: bool = True
    unread_count: int


class MessageResponse(BaseModel):
    success: bool = True
    message: str
