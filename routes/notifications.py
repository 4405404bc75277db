from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from config import NOTIFICATIONS_LIMIT
from database import get_db
from models.Notification import Notification
from schemas import NotificationFeed, NotificationsMarkRead
from utils.identity import require_user_id

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def _notification_to_read(n: Notification) -> dict:
    # Sender columns are nested under `sender` on the wire
    return {
        "id": n.id,
        "recipient": n.recipient_id,
        "sender": {"user_id": n.sender_id, "name": n.sender_name, "photo_url": n.sender_photo},
        "type": n.type,
        "trip_id": n.trip_id,
        "related_id": n.related_id,
        "message": n.message,
        "read": n.read,
        "created_at": n.created_at,
    }


@router.get("", response_model=NotificationFeed)
def list_notifications(user_id: str = Depends(require_user_id), db: Session = Depends(get_db)):
    """Newest notifications for the caller plus the number still unread"""
    notifications = (
        db.query(Notification)
        .filter(Notification.recipient_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(NOTIFICATIONS_LIMIT)
        .all()
    )

    unread_count = db.query(Notification).filter(
        Notification.recipient_id == user_id,
        Notification.read.is_(False)
    ).count()

    return {
        "notifications": [_notification_to_read(n) for n in notifications],
        "unread_count": unread_count,
    }


@router.put("", response_model=dict)
def mark_notifications_read(
    payload: NotificationsMarkRead,
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db)
):
    """Mark one notification, or all unread ones, as read"""
    if payload.mark_all:
        db.query(Notification).filter(
            Notification.recipient_id == user_id,
            Notification.read.is_(False)
        ).update({Notification.read: True}, synchronize_session=False)
    elif payload.notification_id is not None:
        updated = db.query(Notification).filter(
            Notification.id == payload.notification_id,
            Notification.recipient_id == user_id
        ).update({Notification.read: True}, synchronize_session=False)
        if not updated:
            raise HTTPException(status_code=404, detail="Notification not found")
    else:
        raise HTTPException(status_code=400, detail="Invalid request")

    db.commit()
    return {"message": "Notifications updated"}
