from sqlalchemy import Column, String, DateTime
from database import Base
from models.base import utcnow

class User(Base):
    __tablename__ = "users"

    uid = Column(String(64), primary_key=True, index=True)  # Identity provider uid
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=True)
    photo_url = Column(String(500), nullable=True)
    fcm_token = Column(String(500), nullable=True)  # Firebase Cloud Messaging token
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
