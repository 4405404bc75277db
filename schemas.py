# schemas.py (Pydantic v2)
# Wire format is camelCase to match the web client; fields are snake_case.
# max_length values mirror the column sizes in models/.
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import List, Optional
from datetime import date, datetime

from models.JoinRequest import JoinRequestStatus
from models.Notification import NotificationType


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# ---------- Users ----------
class UserWrite(CamelModel):
    uid: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    photo_url: Optional[str] = Field(None, max_length=500, alias="photoURL")

class UserRead(CamelModel):
    uid: str
    name: str
    email: Optional[str] = None
    photo_url: Optional[str] = Field(None, serialization_alias="photoURL")
    created_at: datetime = Field(serialization_alias="createdAt")

class FCMTokenUpdate(CamelModel):
    fcm_token: str = Field(..., min_length=1, max_length=500, alias="fcmToken")


# ---------- Trips ----------
class TripWrite(CamelModel):
    title: str = Field(..., min_length=1, max_length=150)
    start_location: str = Field(..., max_length=250, alias="startLocation")
    destination: str = Field(..., max_length=250)
    start_date: date = Field(..., alias="startDate")
    duration: int = Field(..., ge=1)
    max_participants: int = Field(..., ge=1, alias="maxParticipants")
    description: str
    budget: Optional[float] = None
    image_url: Optional[str] = Field(None, max_length=500, alias="imageUrl")

class LeaveTrip(CamelModel):
    user_id: str = Field(..., max_length=64, alias="userId")

class ParticipantRead(CamelModel):
    user_id: str = Field(serialization_alias="userId")
    name: Optional[str] = None
    photo_url: Optional[str] = Field(None, serialization_alias="photoURL")

class TripRead(CamelModel):
    id: int
    owner_id: str = Field(serialization_alias="userId")
    title: str
    start_location: str = Field(serialization_alias="startLocation")
    destination: str
    start_date: date = Field(serialization_alias="startDate")
    duration: int
    max_participants: int = Field(serialization_alias="maxParticipants")
    description: str
    budget: Optional[float] = None
    image_url: Optional[str] = Field(None, serialization_alias="imageUrl")
    participants: List[ParticipantRead] = []
    created_at: datetime = Field(serialization_alias="createdAt")

class TripSummary(CamelModel):
    id: int
    title: str
    destination: str
    image_url: Optional[str] = Field(None, serialization_alias="imageUrl")

class ParticipantRemoved(CamelModel):
    message: str
    trip: TripRead


# ---------- Join Requests ----------
class JoinRequestWrite(CamelModel):
    """Body of POST /trips/{id}/join"""
    user_id: str = Field(..., min_length=1, max_length=64, alias="userId")
    name: str = Field(..., min_length=1, max_length=100)
    photo_url: Optional[str] = Field(None, max_length=500, alias="photoURL")
    message: Optional[str] = Field(None, max_length=500)

class JoinRequestDecision(BaseModel):
    # Validated in the route so an unknown value is a 400 "Invalid status"
    status: str

class JoinRequestRead(CamelModel):
    id: int
    trip_id: int = Field(serialization_alias="tripId")
    user_id: str = Field(serialization_alias="userId")
    user_name: str = Field(serialization_alias="userName")
    user_photo: Optional[str] = Field(None, serialization_alias="userPhoto")
    status: JoinRequestStatus
    message: str
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

class JoinRequestDetails(CamelModel):
    request: JoinRequestRead
    trip: TripSummary

class JoinRequestSubmitted(CamelModel):
    message: str
    request_id: int = Field(serialization_alias="requestId")

class JoinRequestStatusRead(CamelModel):
    # Routes return only the keys that apply; read with response_model_exclude_unset
    status: Optional[JoinRequestStatus] = None
    request_id: Optional[int] = Field(None, serialization_alias="requestId")
    message: Optional[str] = None


# ---------- Notifications ----------
class NotificationSender(CamelModel):
    user_id: str = Field(serialization_alias="userId")
    name: str
    photo_url: Optional[str] = Field(None, serialization_alias="photoURL")

class NotificationRead(CamelModel):
    id: int
    recipient: str
    sender: NotificationSender
    type: NotificationType
    trip_id: Optional[int] = Field(None, serialization_alias="tripId")
    related_id: Optional[int] = Field(None, serialization_alias="relatedId")
    message: str
    read: bool
    created_at: datetime = Field(serialization_alias="createdAt")

class NotificationFeed(CamelModel):
    notifications: List[NotificationRead]
    unread_count: int = Field(serialization_alias="unreadCount")

class NotificationsMarkRead(CamelModel):
    notification_id: Optional[int] = Field(None, alias="notificationId")
    mark_all: bool = Field(False, alias="markAll")


# ---------- Chat Messages ----------
class ChatMessageWrite(CamelModel):
    sender_name: Optional[str] = Field(None, max_length=100, alias="senderName")
    sender_photo: Optional[str] = Field(None, max_length=500, alias="senderPhoto")
    message: Optional[str] = None

class ChatMessageRead(CamelModel):
    id: int
    trip_id: int = Field(serialization_alias="tripId")
    sender_id: str = Field(serialization_alias="senderId")
    sender_name: str = Field(serialization_alias="senderName")
    sender_photo: str = Field(serialization_alias="senderPhoto")
    message: str
    created_at: datetime = Field(serialization_alias="createdAt")

class ChatCreator(CamelModel):
    name: str
    photo_url: str = Field(serialization_alias="photoURL")

class ChatLastMessage(CamelModel):
    message: str
    sender_name: str = Field(serialization_alias="senderName")
    created_at: datetime = Field(serialization_alias="createdAt")

class ChatInboxEntry(CamelModel):
    id: int
    title: str
    destination: str
    image_url: Optional[str] = Field(None, serialization_alias="imageUrl")
    created_by: ChatCreator = Field(serialization_alias="createdBy")
    participants: List[ParticipantRead] = []
    is_creator: bool = Field(serialization_alias="isCreator")
    last_message: Optional[ChatLastMessage] = Field(None, serialization_alias="lastMessage")
    message_count: int = Field(serialization_alias="messageCount")
