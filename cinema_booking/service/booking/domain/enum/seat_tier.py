from enum import StrEnum
from typing import Optional


class SeatTier(StrEnum):
    VIP = 'VIP'
    PREMIUM = 'PREMIUM'
    STANDARD = 'STANDARD'
    ACCESSIBLE = 'ACCESSIBLE'

    @classmethod
    def _missing_(cls, value: object) -> Optional['SeatTier']:
        # Older booking documents recorded accessible seats as 'DISABLED'
        if isinstance(value, str):
            normalized = value.strip().upper()
            if normalized == 'DISABLED':
                return cls.ACCESSIBLE
            for member in cls:
                if member.value == normalized:
                    return member
        return None
