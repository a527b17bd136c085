# app/services/grouping.py
# Groups a student's notifications by the thread / comment they point at.
#
# Input rows must already be ordered newest-first: the first row seen for a
# key supplies the group label and latest_created_at, and groups are emitted
# in first-seen order. Rows without a reference_id share one group keyed None.

from typing import Any, Dict, Iterable, List, Optional, Tuple

COMMENT_PREVIEW_LENGTH = 50

GROUPINGS = {
    "thread_comment": {
        "key": "thread_id",
        "label": "thread_title",
        "missing": "Deleted Thread",
    },
    "comment_reply": {
        "key": "comment_id",
        "label": "comment_preview",
        "missing": "Deleted Comment",
    },
}


def comment_preview(content: Optional[str]) -> Optional[str]:
    if not content:
        return None
    return content[:COMMENT_PREVIEW_LENGTH] + "..."


def _label(notification_type: str, reference_text: Optional[str]) -> str:
    if notification_type == "comment_reply":
        reference_text = comment_preview(reference_text)
    return reference_text or GROUPINGS[notification_type]["missing"]


def group_notifications(
    rows: Iterable[Tuple[Any, Optional[str]]],
    notification_type: str,
) -> List[Dict[str, Any]]:
    """
    Fold (notification, reference_text) pairs into grouped notifications.

    reference_text is the joined thread title for thread_comment and the
    joined comment content for comment_reply; None when the referenced row
    no longer exists.

    Returns dicts shaped like:
        {"thread_id": ..., "thread_title": ..., "type": "thread_comment",
         "count": 2, "notifications": [...], "latest_created_at": ...,
         "has_unread": True}
    """
    if notification_type not in GROUPINGS:
        raise ValueError(f"Notifications of type {notification_type!r} are not grouped")
    fields = GROUPINGS[notification_type]

    groups: Dict[Any, Dict[str, Any]] = {}
    for notification, reference_text in rows:
        key = notification.reference_id
        group = groups.get(key)
        if group is None:
            group = {
                fields["key"]: key,
                fields["label"]: _label(notification_type, reference_text),
                "type": notification_type,
                "count": 0,
                "notifications": [],
                "latest_created_at": notification.created_at,
                "has_unread": False,
            }
            groups[key] = group

        group["count"] += 1
        group["notifications"].append(notification)
        if not notification.is_read:
            group["has_unread"] = True

    return list(groups.values())
