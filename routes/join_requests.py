import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import DEFAULT_JOIN_MESSAGE
from database import get_db
from models.JoinRequest import JoinRequest, JoinRequestStatus
from models.Notification import NotificationType
from models.TripParticipant import TripParticipant
from routes.trips import get_trip_or_404
from schemas import (
    JoinRequestWrite,
    JoinRequestDecision,
    JoinRequestDetails,
    JoinRequestStatusRead,
    JoinRequestSubmitted,
)
from services.notifications import notify
from services.request_transitions import (
    JoinEvent,
    TransitionError,
    event_for_decision,
    next_status,
)
from utils.identity import require_user_id

logger = logging.getLogger("travelmates.join_requests")

router = APIRouter(prefix="/trips/{trip_id}", tags=["Join Requests"])
router2 = APIRouter(prefix="/requests", tags=["Join Requests"])


def _find_request(db: Session, trip_id: int, user_id: str) -> Optional[JoinRequest]:
    return db.query(JoinRequest).filter(
        JoinRequest.trip_id == trip_id,
        JoinRequest.user_id == user_id
    ).first()


# =====================================================
#                 SUBMIT
# =====================================================
@router.post("/join", response_model=JoinRequestSubmitted)
def submit_join_request(trip_id: int, payload: JoinRequestWrite, db: Session = Depends(get_db)):
    """Ask to join a trip; the owner decides later through PUT /requests/{id}"""
    trip = get_trip_or_404(db, trip_id)

    if trip.has_participant(payload.user_id):
        raise HTTPException(status_code=400, detail="Already joined this trip")

    if trip.is_full:
        raise HTTPException(status_code=400, detail="Trip is full")

    existing = _find_request(db, trip_id, payload.user_id)
    try:
        new_status = next_status(
            existing.status if existing else None,
            JoinEvent.SUBMIT,
            is_participant=trip.has_participant(payload.user_id),
        )
    except TransitionError as e:
        raise HTTPException(status_code=400, detail=e.message)

    message = (payload.message or "").strip() or DEFAULT_JOIN_MESSAGE

    if existing:
        # Rejected or stale accepted: reopen the same record
        request = existing
        request.status = new_status
        request.message = message
        request.user_name = payload.name
        request.user_photo = payload.photo_url
    else:
        request = JoinRequest(
            trip_id=trip_id,
            user_id=payload.user_id,
            user_name=payload.name,
            user_photo=payload.photo_url,
            message=message,
            status=new_status,
        )
        db.add(request)

    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent submission for the same pair
        db.rollback()
        raise HTTPException(status_code=400, detail="Request already pending")
    db.refresh(request)

    request_id = request.id
    logger.info("Join request %s for trip %s by %s is pending", request_id, trip.id, payload.user_id)

    if trip.owner_id != payload.user_id:
        notify(
            db,
            recipient_id=trip.owner_id,
            sender_id=payload.user_id,
            sender_name=payload.name,
            sender_photo=payload.photo_url,
            type=NotificationType.JOIN_REQUEST,
            trip_id=trip.id,
            related_id=request_id,
            message=f'{payload.name} requested to join "{trip.title}"',
        )

    return {"message": "Request sent successfully", "request_id": request_id}


# =====================================================
#                 STATUS
# =====================================================
@router.get(
    "/request-status",
    response_model=JoinRequestStatusRead,
    response_model_exclude_unset=True,
)
def get_request_status(
    trip_id: int,
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db)
):
    if not user_id:
        return {"status": None, "message": "No user ID provided"}

    request = _find_request(db, trip_id, user_id)
    if not request:
        return {"status": None}

    return {"status": request.status, "request_id": request.id}


# =====================================================
#                 DETAILS
# =====================================================
@router2.get("/{request_id}", response_model=JoinRequestDetails)
def get_join_request(
    request_id: int,
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db)
):
    request = db.query(JoinRequest).filter(JoinRequest.id == request_id).first()
    if not request:
        raise HTTPException(status_code=404, detail="Request not found")

    trip = get_trip_or_404(db, request.trip_id)

    # Only the trip creator or the requester may look at it
    if trip.owner_id != user_id and request.user_id != user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")

    return {"request": request, "trip": trip}


# =====================================================
#                 DECIDE
# =====================================================
@router2.put("/{request_id}", response_model=dict)
def decide_join_request(
    request_id: int,
    payload: JoinRequestDecision,
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db)
):
    """Accept or reject a pending request (trip creator only)"""
    try:
        event = event_for_decision(payload.status)
    except TransitionError as e:
        raise HTTPException(status_code=400, detail=e.message)

    request = db.query(JoinRequest).filter(JoinRequest.id == request_id).first()
    if not request:
        raise HTTPException(status_code=404, detail="Request not found")

    try:
        new_status = next_status(request.status, event)
    except TransitionError as e:
        raise HTTPException(status_code=400, detail=e.message)

    trip = get_trip_or_404(db, request.trip_id, for_update=True)

    if trip.owner_id != user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")

    if new_status is JoinRequestStatus.ACCEPTED and not trip.has_participant(request.user_id):
        # Capacity is re-checked under the trip lock so concurrent accepts cannot overfill
        if trip.is_full:
            raise HTTPException(status_code=400, detail="Trip is full")
        trip.participants.append(TripParticipant(
            user_id=request.user_id,
            name=request.user_name,
            photo_url=request.user_photo,
        ))

    request.status = new_status
    db.commit()

    decision = new_status.value
    logger.info("Join request %s for trip %s %s by %s", request_id, trip.id, decision, user_id)

    notify(
        db,
        recipient_id=request.user_id,
        sender_id=trip.owner_id,
        type=(
            NotificationType.REQUEST_ACCEPTED
            if new_status is JoinRequestStatus.ACCEPTED
            else NotificationType.REQUEST_DECLINED
        ),
        trip_id=trip.id,
        related_id=request_id,
        message=f'Your request to join "{trip.title}" was {decision}',
    )

    return {"message": f"Request {decision}"}
