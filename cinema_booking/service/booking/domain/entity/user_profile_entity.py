from datetime import datetime, timezone
from typing import Optional

import attrs

from cinema_booking.service.booking.domain.enum.user_role import UserRole


@attrs.define
class UserProfile:
    id: str
    name: str
    email: str
    role: UserRole = UserRole.USER
    created_at: Optional[datetime] = None

    @classmethod
    def create(cls, *, id: str, name: Optional[str], email: Optional[str]) -> 'UserProfile':
        return cls(
            id=id,
            name=name or '',
            email=email or '',
            role=UserRole.USER,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
