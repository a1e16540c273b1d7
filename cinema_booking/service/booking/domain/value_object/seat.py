import attrs

from cinema_booking.service.booking.domain.enum.seat_tier import SeatTier


@attrs.define(frozen=True)
class Seat:
    row: str
    number: int
    tier: SeatTier
    booked: bool = False

    @property
    def seat_id(self) -> str:
        """Seat label as printed on the ticket, e.g. 'A1'"""
        return f'{self.row}{self.number}'
