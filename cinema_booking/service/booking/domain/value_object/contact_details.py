import re
from typing import List, Optional

import attrs

from cinema_booking.platform.exception.exceptions import ValidationError
from cinema_booking.service.booking.domain.value_object.principal import Principal


EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
# Leading '+' allowed; digits separated by spaces or dashes; at least 7 characters
PHONE_PATTERN = re.compile(r'^\+?[0-9][0-9\s\-]{5,}[0-9]$')


def _strip(value: Optional[str]) -> str:
    return (value or '').strip()


@attrs.define(frozen=True)
class ContactDetails:
    name: str = attrs.field(default='', converter=_strip)
    email: str = attrs.field(default='', converter=_strip)
    phone: str = attrs.field(default='', converter=_strip)

    @classmethod
    def from_principal(cls, principal: Optional[Principal]) -> 'ContactDetails':
        """Pre-fill name and email from the signed-in user; phone is always typed in"""
        if principal is None:
            return cls()
        return cls(name=principal.display_name or '', email=principal.email or '')

    def update(
        self, *, name: Optional[str] = None, email: Optional[str] = None, phone: Optional[str] = None
    ) -> 'ContactDetails':
        changes = {
            key: value
            for key, value in (('name', name), ('email', email), ('phone', phone))
            if value is not None
        }
        return attrs.evolve(self, **changes)

    def missing_fields(self) -> List[str]:
        return [field for field in ('name', 'email', 'phone') if not getattr(self, field)]

    def invalid_fields(self) -> List[str]:
        invalid = []
        if self.email and not EMAIL_PATTERN.match(self.email):
            invalid.append('email')
        if self.phone and not PHONE_PATTERN.match(self.phone):
            invalid.append('phone')
        return invalid

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields() and not self.invalid_fields()

    def validate(self) -> None:
        """
        Raises:
            ValidationError: When a field is empty or malformed
        """
        if missing := self.missing_fields():
            raise ValidationError(f'Please fill in all contact details (missing: {", ".join(missing)})')
        if invalid := self.invalid_fields():
            raise ValidationError(f'Invalid contact details: {", ".join(invalid)}')
