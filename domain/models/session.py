"""
Account and session models consulted by the authentication gate.
"""

from sqlalchemy import Column, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base
from domain.timestamps import utc_now


class AppUser(Base):
    """Account owning sessions"""

    __tablename__ = "app_user"

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(Text, nullable=False)
    email = Column(Text, unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )

    sessions = relationship(
        "UserSession", back_populates="user", cascade="all, delete-orphan"
    )


class UserSession(Base):
    """Opaque session token issued by the sign-in provider"""

    __tablename__ = "user_session"

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    token = Column(Text, unique=True, nullable=False)
    user_id = Column(
        Text, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    expires_at = Column(DateTime(timezone=True), nullable=False)
    ip_address = Column(Text)
    user_agent = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    user = relationship("AppUser", back_populates="sessions")
