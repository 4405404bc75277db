from .User import User
from .Trip import Trip
from .TripParticipant import TripParticipant
from .JoinRequest import JoinRequest, JoinRequestStatus
from .Notification import Notification, NotificationType
from .ChatMessage import ChatMessage

__all__ = [
    "User",
    "Trip",
    "TripParticipant",
    "JoinRequest",
    "JoinRequestStatus",
    "Notification",
    "NotificationType",
    "ChatMessage",
]
