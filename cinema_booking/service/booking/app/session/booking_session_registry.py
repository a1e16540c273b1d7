from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from uuid_utils import uuid7

from cinema_booking.platform.exception.exceptions import NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.session.booking_session import (
    BookingSession,
    SessionPrincipal,
)
from cinema_booking.service.booking.domain.booking_wizard import BookingWizard
from cinema_booking.service.booking.domain.value_object.principal import Principal


class BookingSessionRegistry:
    """In-process home of live booking wizards, keyed by session id"""

    def __init__(self, *, ttl_minutes: int = 30) -> None:
        self._sessions: Dict[str, BookingSession] = {}
        self._ttl = timedelta(minutes=ttl_minutes)

    def register(self, *, wizard: BookingWizard, auth: SessionPrincipal) -> BookingSession:
        self.dispose_expired()
        session = BookingSession(id=str(uuid7()), wizard=wizard, auth=auth)
        self._sessions[session.id] = session
        Logger.base.info(f'🎟️ [SESSION] Opened booking session {session.id}')
        return session

    def get(self, *, session_id: str, principal: Optional[Principal]) -> BookingSession:
        """
        Raises:
            NotFoundError: Unknown or expired session
            ForbiddenError: Session owned by another user
        """
        session = self._sessions.get(session_id)
        if session is None or self._is_expired(session, datetime.now(timezone.utc)):
            self._sessions.pop(session_id, None)
            raise NotFoundError('Booking session not found or expired')
        session.authorize(principal)
        session.touch()
        return session

    def dispose(self, *, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is not None:
            Logger.base.info(f'🎟️ [SESSION] Closed booking session {session_id}')

    def dispose_expired(self, *, now: Optional[datetime] = None) -> int:
        now = now or datetime.now(timezone.utc)
        expired = [sid for sid, s in self._sessions.items() if self._is_expired(s, now)]
        for session_id in expired:
            del self._sessions[session_id]
        if expired:
            Logger.base.info(f'🧹 [SESSION] Dropped {len(expired)} expired booking sessions')
        return len(expired)

    def _is_expired(self, session: BookingSession, now: datetime) -> bool:
        return now - session.last_active_at > self._ttl

    def __len__(self) -> int:
        return len(self._sessions)
