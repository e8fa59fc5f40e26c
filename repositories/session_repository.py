"""
Session Repository - Lookups for the authentication gate
"""

import secrets
from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import AppUser, UserSession
from domain.timestamps import utc_now


class SessionRepository(BaseRepository[UserSession]):
    """Repository for session tokens"""

    def __init__(self, db: Session):
        super().__init__(db, UserSession)

    def get_active(self, token: str, now: Optional[datetime] = None) -> Optional[UserSession]:
        """Session with this token that has not expired yet"""
        if not token:
            return None
        return self.db.scalars(
            select(UserSession).where(
                UserSession.token == token,
                UserSession.expires_at > (now or utc_now()),
            )
        ).first()

    def get_or_create_user(self, email: str, name: str) -> AppUser:
        user = self.db.scalars(select(AppUser).where(AppUser.email == email)).first()
        if user:
            return user
        user = AppUser(email=email, name=name)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def create_session(
        self, user: AppUser, ttl: timedelta = timedelta(days=7), token: str = None
    ) -> UserSession:
        """Issue a new session token for a user"""
        session = UserSession(
            user_id=user.id,
            token=token or secrets.token_urlsafe(32),
            expires_at=utc_now() + ttl,
        )
        return self.create(session)
