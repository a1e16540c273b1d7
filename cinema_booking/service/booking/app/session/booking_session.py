from datetime import datetime, timezone
from typing import Optional

import attrs

from cinema_booking.platform.exception.exceptions import AuthenticationRequiredError, ForbiddenError
from cinema_booking.service.booking.domain.booking_wizard import BookingWizard
from cinema_booking.service.booking.domain.value_object.principal import Principal


@attrs.define
class SessionPrincipal:
    """Who is signed in for this booking session; read by the wizard at confirm time"""

    principal: Optional[Principal] = None

    def current_principal(self) -> Optional[Principal]:
        return self.principal

    def sign_in(self, principal: Principal) -> None:
        """
        Raises:
            ForbiddenError: When the session already belongs to another user
        """
        if self.principal is not None and self.principal.id != principal.id:
            raise ForbiddenError('This booking session belongs to another user')
        self.principal = principal


@attrs.define
class BookingSession:
    id: str
    wizard: BookingWizard
    auth: SessionPrincipal
    created_at: datetime = attrs.field(factory=lambda: datetime.now(timezone.utc))
    last_active_at: datetime = attrs.field(factory=lambda: datetime.now(timezone.utc))

    def touch(self) -> None:
        self.last_active_at = datetime.now(timezone.utc)

    def authorize(self, principal: Optional[Principal]) -> None:
        """
        Anonymous sessions can be picked up by whoever signs in first; owned sessions
        only by their owner.
        """
        owner = self.auth.current_principal()
        if principal is None:
            if owner is not None:
                raise AuthenticationRequiredError('Please sign in to continue this booking')
            return
        self.auth.sign_in(principal)
