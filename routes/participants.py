import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database import get_db
from models.JoinRequest import JoinRequest
from models.Notification import NotificationType
from routes.trips import get_trip_or_404
from schemas import ParticipantRemoved
from services.notifications import notify
from utils.identity import require_user_id

logger = logging.getLogger("travelmates.participants")

router = APIRouter(prefix="/trips/{trip_id}/participants", tags=["Trip Participants"])


@router.delete("/{participant_id}", response_model=ParticipantRemoved)
def remove_participant(
    trip_id: int,
    participant_id: str,
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db)
):
    """Remove an accepted participant (trip creator only).

    The participant's JoinRequest is deleted as well so they can ask to
    join again later.
    """
    trip = get_trip_or_404(db, trip_id, for_update=True)

    if trip.owner_id != user_id:
        raise HTTPException(status_code=403, detail="Only the trip creator can remove participants")

    if participant_id == trip.owner_id:
        raise HTTPException(status_code=400, detail="Cannot remove the trip creator")

    participant = next((p for p in trip.participants if p.user_id == participant_id), None)
    if participant is None:
        raise HTTPException(status_code=404, detail="Participant not found in this trip")

    trip.participants.remove(participant)
    db.query(JoinRequest).filter(
        JoinRequest.trip_id == trip_id,
        JoinRequest.user_id == participant_id
    ).delete(synchronize_session=False)
    db.commit()
    db.refresh(trip)

    logger.info("Participant %s removed from trip %s", participant_id, trip_id)

    notify(
        db,
        recipient_id=participant_id,
        sender_id=trip.owner_id,
        type=NotificationType.PARTICIPANT_REMOVED,
        trip_id=trip.id,
        message=f'You have been removed from the trip "{trip.title}"',
    )

    return {"message": "Participant removed successfully", "trip": trip}
