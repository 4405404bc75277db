from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from models.Trip import Trip
from models.TripParticipant import TripParticipant
from models.User import User
from models.ChatMessage import ChatMessage
from schemas import ChatMessageWrite, ChatMessageRead, ChatInboxEntry
from database import get_db
from routes.trips import get_trip_or_404
from utils.identity import require_user_id

router = APIRouter(prefix="/trips/{trip_id}/chat", tags=["Chat Messages"])
router2 = APIRouter(prefix="/chats", tags=["Chat Messages"])


def get_member_trip(db: Session, trip_id: int, user_id: str, action: str) -> Trip:
    trip = get_trip_or_404(db, trip_id)
    if not trip.is_member(user_id):
        raise HTTPException(status_code=403, detail=f"Only trip participants can {action}")
    return trip


def require_sender_trip(
    trip_id: int,
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db)
) -> Trip:
    # Resolved as a dependency so outsiders get 403 before the body is validated
    return get_member_trip(db, trip_id, user_id, "send messages")


# =====================================================
#                 GET LIST MESSAGES
# =====================================================
@router.get("", response_model=List[ChatMessageRead])
def list_messages(trip_id: int, user_id: str = Depends(require_user_id), db: Session = Depends(get_db)):
    get_member_trip(db, trip_id, user_id, "access the chat")

    messages = (
        db.query(ChatMessage)
        .filter(ChatMessage.trip_id == trip_id)
        .order_by(ChatMessage.created_at.asc(), ChatMessage.id.asc())
        .all()
    )
    return messages


# =====================================================
#                 POST MESSAGE
# =====================================================
@router.post("", response_model=ChatMessageRead, status_code=status.HTTP_201_CREATED)
def post_message(
    trip_id: int,
    payload: ChatMessageWrite,
    trip: Trip = Depends(require_sender_trip),
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db)
):
    text = (payload.message or "").strip()
    if not text:
        raise HTTPException(status_code=400, detail="Message cannot be empty")

    msg = ChatMessage(
        trip_id=trip.id,
        sender_id=user_id,
        sender_name=payload.sender_name or "User",
        sender_photo=payload.sender_photo or "",
        message=text,
    )
    db.add(msg)
    db.commit()
    db.refresh(msg)

    return msg


# =====================================================
#                 INBOX
# =====================================================
@router2.get("", response_model=List[ChatInboxEntry])
def list_chats(user_id: str = Depends(require_user_id), db: Session = Depends(get_db)):
    """Trips the caller owns or takes part in, with their latest message"""
    trips = (
        db.query(Trip)
        .outerjoin(TripParticipant, Trip.id == TripParticipant.trip_id)
        .filter(
            or_(
                Trip.owner_id == user_id,
                TripParticipant.user_id == user_id
            )
        )
        .distinct()
        .order_by(Trip.created_at.desc(), Trip.id.desc())
        .all()
    )

    result = []
    for trip in trips:
        creator = db.query(User).filter(User.uid == trip.owner_id).first()
        last_message = (
            db.query(ChatMessage)
            .filter(ChatMessage.trip_id == trip.id)
            .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())
            .first()
        )
        message_count = (
            db.query(func.count(ChatMessage.id))
            .filter(ChatMessage.trip_id == trip.id)
            .scalar()
        )

        result.append({
            "id": trip.id,
            "title": trip.title,
            "destination": trip.destination,
            "image_url": trip.image_url,
            "created_by": {
                "name": creator.name if creator else "Unknown",
                "photo_url": (creator.photo_url or "") if creator else "",
            },
            "participants": trip.participants,
            "is_creator": trip.owner_id == user_id,
            "last_message": last_message,
            "message_count": message_count,
        })

    return result
