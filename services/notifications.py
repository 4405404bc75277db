"""
Best-effort notification dispatch.

Notifications are a side effect of the join request workflow: the primary
write is already committed when `notify` runs, and a failure here is logged
and swallowed so it never fails the request that triggered it.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from models.Notification import Notification, NotificationType
from models.User import User
from services.fcm_service import send_notification

logger = logging.getLogger("travelmates.notifications")

PUSH_TITLES = {
    NotificationType.JOIN_REQUEST: "New join request",
    NotificationType.REQUEST_ACCEPTED: "Request accepted",
    NotificationType.REQUEST_DECLINED: "Request declined",
    NotificationType.PARTICIPANT_REMOVED: "Removed from trip",
}


def notify(
    db: Session,
    *,
    recipient_id: str,
    sender_id: str,
    type: NotificationType,
    message: str,
    sender_name: Optional[str] = None,
    sender_photo: Optional[str] = None,
    trip_id: Optional[int] = None,
    related_id: Optional[int] = None,
) -> Optional[Notification]:
    """Store a notification for `recipient_id`, then push it if possible.

    `sender_name` defaults to the sender's profile name, or "System".
    Returns the stored notification, or None if it could not be created.
    """
    try:
        if sender_name is None:
            sender_name = _display_name(db, sender_id)
        notification = Notification(
            recipient_id=recipient_id,
            sender_id=sender_id,
            sender_name=sender_name,
            sender_photo=sender_photo or "",
            type=type,
            trip_id=trip_id,
            related_id=related_id,
            message=message,
            read=False,
        )
        db.add(notification)
        db.commit()
        db.refresh(notification)
    except Exception:
        db.rollback()
        logger.exception("Error creating %s notification for %s", type.value, recipient_id)
        return None

    _push(db, notification)
    return notification


def _display_name(db: Session, uid: str, fallback: str = "System") -> str:
    user = db.query(User).filter(User.uid == uid).first()
    return user.name if user else fallback


def _push(db: Session, notification: Notification) -> None:
    try:
        recipient = db.query(User).filter(User.uid == notification.recipient_id).first()
        if not recipient or not recipient.fcm_token:
            return
        send_notification(
            fcm_token=recipient.fcm_token,
            title=PUSH_TITLES.get(notification.type, "Travel Mates"),
            body=notification.message,
            data={
                "type": notification.type.value,
                "notification_id": str(notification.id),
                "trip_id": str(notification.trip_id or ""),
                "related_id": str(notification.related_id or ""),
            },
        )
    except Exception:
        logger.exception("Error pushing notification %s", notification.id)
