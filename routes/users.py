from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session
from sqlalchemy import or_

from models.User import User
from schemas import UserWrite, UserRead, FCMTokenUpdate
from database import get_db

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "/",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
)
def create_user(payload: UserWrite, db: Session = Depends(get_db)):
    conditions = [User.uid == payload.uid]
    if payload.email:
        conditions.append(User.email == payload.email)
    exists = db.query(User).filter(or_(*conditions)).first()
    if exists:
        raise HTTPException(status_code=409, detail="UID or email already exists")

    new_user = User(
        uid=payload.uid,
        name=payload.name,
        email=payload.email,
        photo_url=payload.photo_url,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    return new_user


@router.get("/{uid}", response_model=UserRead)
def get_user(uid: str, db: Session = Depends(get_db)):
    """
    Get a user by uid.
    """
    user = db.query(User).filter(User.uid == uid).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/{uid}/fcm-token", response_model=dict, status_code=status.HTTP_200_OK)
def update_fcm_token(
    uid: str,
    payload: FCMTokenUpdate,
    db: Session = Depends(get_db)
):
    """Store the device token used for push notifications"""
    user = db.query(User).filter(User.uid == uid).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    user.fcm_token = payload.fcm_token
    db.commit()

    return {"message": "FCM token updated"}
