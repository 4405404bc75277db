from . import users
from . import trips
from . import join_requests
from . import participants
from . import notifications
from . import chat_messages

__all__ = [
    "users",
    "trips",
    "join_requests",
    "participants",
    "notifications",
    "chat_messages",
]
