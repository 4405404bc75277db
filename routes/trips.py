from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, selectinload

from models.Trip import Trip
from schemas import TripWrite, TripRead, LeaveTrip
from database import get_db
from utils.identity import require_user_id

router = APIRouter(prefix="/trips", tags=["Trips"])


def get_trip_or_404(db: Session, trip_id: int, for_update: bool = False) -> Trip:
    query = db.query(Trip).filter(Trip.id == trip_id)
    if for_update:
        # Serializes concurrent participant mutations on stores with row locks
        query = query.with_for_update()
    trip = query.first()
    if not trip:
        raise HTTPException(status_code=404, detail="Trip not found")
    return trip


@router.post("/", response_model=TripRead, status_code=status.HTTP_201_CREATED)
def create_trip(
    payload: TripWrite,
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db)
):
    trip = Trip(owner_id=user_id, **payload.model_dump())
    db.add(trip)
    db.commit()
    db.refresh(trip)
    return trip


@router.get("/", response_model=List[TripRead])
def list_trips(db: Session = Depends(get_db)):
    trips = (
        db.query(Trip)
        .options(selectinload(Trip.participants))
        .order_by(Trip.created_at.desc(), Trip.id.desc())
        .all()
    )
    return trips


@router.get("/{trip_id}", response_model=TripRead)
def get_trip(trip_id: int, db: Session = Depends(get_db)):
    return get_trip_or_404(db, trip_id)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_trip(
    trip_id: int,
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db)
):
    trip = get_trip_or_404(db, trip_id)
    if trip.owner_id != user_id:
        raise HTTPException(status_code=403, detail="Only the trip creator can delete this trip")
    db.delete(trip)
    db.commit()


@router.post("/{trip_id}/leave", response_model=TripRead)
def leave_trip(trip_id: int, payload: LeaveTrip, db: Session = Depends(get_db)):
    """Drop the user from the participant list.

    The user's JoinRequest stays `accepted`; a later join attempt treats it
    as stale and reopens it.
    """
    trip = get_trip_or_404(db, trip_id, for_update=True)
    trip.participants = [p for p in trip.participants if p.user_id != payload.user_id]
    db.commit()
    db.refresh(trip)
    return trip
