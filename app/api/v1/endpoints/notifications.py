# app/api/v1/endpoints/notifications.py
# Notification + follow-edge endpoints
#
# Access rules:
#   Everything except POST "" is scoped to the logged-in student
#   (recipient for notifications, follower for follow edges)
#
# Static paths are declared before /{notification_id} so they are not
# swallowed by the UUID path parameter.

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.dependencies import require_login
from app.db.session import get_db
from app.models.student import Student
from app.schemas.follower import (
    BellToggleRequest,
    FollowingListResponse,
    FollowMutationResponse,
    FollowRequest,
)
from app.schemas.notification import (
    CommentReplyGroupsResponse,
    MessageResponse,
    NotificationCreateRequest,
    NotificationDetailResponse,
    NotificationListResponse,
    NotificationMutationResponse,
    NotificationType,
    ThreadCommentGroupsResponse,
    UnreadCountResponse,
)
from app.services import follow_service, notification_service

router = APIRouter()


# ── Notifications: collection ─────────────────────────────────────────────────

@router.get(
    "",
    response_model=NotificationListResponse,
    summary="List own notifications",
)
def list_notifications(
    type: Optional[NotificationType] = Query(None),
    is_read: Optional[bool] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=100),
    current_user: Student = Depends(require_login),
    db: Session = Depends(get_db),
):
    notifications = notification_service.list_notifications(
        db,
        current_user.id,
        notification_type=type,
        is_read=is_read,
        limit=limit,
    )
    return NotificationListResponse(count=len(notifications), notifications=notifications)


@router.post(
    "",
    response_model=NotificationMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a notification",
)
def create_notification(
    payload: NotificationCreateRequest,
    db: Session = Depends(get_db),
):
    notification = notification_service.create_notification(db, payload.model_dump())
    return NotificationMutationResponse(
        message="Notification created successfully",
        notification=notification,
    )


@router.get(
    "/grouped/thread-comments",
    response_model=ThreadCommentGroupsResponse,
    summary="Comments on own threads, grouped by thread",
)
def grouped_thread_comments(
    current_user: Student = Depends(require_login),
    db: Session = Depends(get_db),
):
    groups = notification_service.thread_comment_groups(db, current_user.id)
    return ThreadCommentGroupsResponse(count=len(groups), grouped_notifications=groups)


@router.get(
    "/grouped/comment-replies",
    response_model=CommentReplyGroupsResponse,
    summary="Replies to own comments, grouped by comment",
)
def grouped_comment_replies(
    current_user: Student = Depends(require_login),
    db: Session = Depends(get_db),
):
    groups = notification_service.comment_reply_groups(db, current_user.id)
    return CommentReplyGroupsResponse(count=len(groups), grouped_notifications=groups)


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    summary="Get unread notification count",
)
def get_unread_count(
    current_user: Student = Depends(require_login),
    db: Session = Depends(get_db),
):
    return UnreadCountResponse(
        unread_count=notification_service.unread_count(db, current_user.id)
    )


@router.put(
    "/mark-all-read",
    response_model=MessageResponse,
    summary="Mark all notifications as read",
)
def mark_all_read(
    current_user: Student = Depends(require_login),
    db: Session = Depends(get_db),
):
    notification_service.mark_all_as_read(db, current_user.id)
    return MessageResponse(message="All notifications marked as read")


@router.delete(
    "/delete-all",
    response_model=MessageResponse,
    summary="Delete all own notifications",
)
def delete_all_notifications(
    current_user: Student = Depends(require_login),
    db: Session = Depends(get_db),
):
    notification_service.delete_all_notifications(db, current_user.id)
    return MessageResponse(message="All notifications deleted successfully")


# ── Following ─────────────────────────────────────────────────────────────────

@router.get(
    "/following/list",
    response_model=FollowingListResponse,
    summary="Students the caller follows",
)
def following_list(
    current_user: Student = Depends(require_login),
    db: Session = Depends(get_db),
):
    following = follow_service.list_following(db, current_user.id)
    return FollowingListResponse(count=len(following), following=following)


@router.post(
    "/following",
    response_model=FollowMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Follow a student",
)
def follow_student(
    payload: FollowRequest,
    current_user: Student = Depends(require_login),
    db: Session = Depends(get_db),
):
    follower = follow_service.follow(db, current_user.id, payload.following_id)
    return FollowMutationResponse(message="User followed successfully", follower=follower)


@router.delete(
    "/following/{following_id}",
    response_model=MessageResponse,
    summary="Unfollow a student",
)
def unfollow_student(
    following_id: UUID,
    current_user: Student = Depends(require_login),
    db: Session = Depends(get_db),
):
    follow_service.unfollow(db, current_user.id, following_id)
    return MessageResponse(message="User unfollowed successfully")


@router.put(
    "/following/{following_id}/bell",
    response_model=FollowMutationResponse,
    summary="Enable or disable the notification bell for a followed student",
)
def toggle_bell(
    following_id: UUID,
    payload: BellToggleRequest,
    current_user: Student = Depends(require_login),
    db: Session = Depends(get_db),
):
    follower = follow_service.toggle_bell(
        db, current_user.id, following_id, payload.bell_enabled
    )
    state = "enabled" if payload.bell_enabled else "disabled"
    return FollowMutationResponse(
        message=f"Bell notification {state} successfully",
        follower=follower,
    )


# ── Notifications: single item ────────────────────────────────────────────────

@router.get(
    "/{notification_id}",
    response_model=NotificationDetailResponse,
    summary="Get one of own notifications",
)
def get_notification(
    notification_id: UUID,
    current_user: Student = Depends(require_login),
    db: Session = Depends(get_db),
):
    notification = notification_service.get_notification(db, notification_id, current_user.id)
    return NotificationDetailResponse(notification=notification)


@router.put(
    "/{notification_id}/mark-read",
    response_model=NotificationMutationResponse,
    summary="Mark notification as read",
)
def mark_read(
    notification_id: UUID,
    current_user: Student = Depends(require_login),
    db: Session = Depends(get_db),
):
    notification = notification_service.mark_as_read(db, notification_id, current_user.id)
    return NotificationMutationResponse(
        message="Notification marked as read",
        notification=notification,
    )


@router.delete(
    "/{notification_id}",
    response_model=MessageResponse,
    summary="Delete a notification",
)
def delete_notification(
    notification_id: UUID,
    current_user: Student = Depends(require_login),
    db: Session = Depends(get_db),
):
    notification_service.delete_notification(db, notification_id, current_user.id)
    return MessageResponse(message="Notification deleted successfully")
