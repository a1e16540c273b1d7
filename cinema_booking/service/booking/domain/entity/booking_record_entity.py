from datetime import datetime
from typing import List, Optional

import attrs

from cinema_booking.platform.exception.exceptions import DataIntegrityError, DomainError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.domain.enum.booking_status import BookingStatus, PaymentStatus
from cinema_booking.service.booking.domain.value_object.show_context import build_show_id


@attrs.define
class BookingRecord:
    """Persisted booking; seats[i] has tier seat_types[i]"""

    movie_id: str
    movie_title: str
    movie_poster: str
    theatre_id: str
    theatre_name: str
    date: str
    time: str
    seats: List[str]
    seat_types: List[str]
    total_price: int
    user_id: str
    user_email: str
    user_name: str
    user_phone: str
    status: BookingStatus = BookingStatus.CONFIRMED
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: Optional[datetime] = None
    id: Optional[str] = None  # Only None before the store assigns one

    def __attrs_post_init__(self) -> None:
        if len(self.seats) != len(self.seat_types):
            raise DataIntegrityError(
                f'Booking has {len(self.seats)} seats but {len(self.seat_types)} seat types'
            )

    @property
    def show_id(self) -> str:
        return build_show_id(
            movie_id=self.movie_id, theatre_id=self.theatre_id, date=self.date, time=self.time
        )

    @property
    def is_cancelled(self) -> bool:
        return self.status == BookingStatus.CANCELLED

    @Logger.io
    def cancel(self) -> 'BookingRecord':
        """
        Raises:
            DomainError: When the booking is already cancelled
        """
        if self.is_cancelled:
            raise DomainError('Booking already cancelled')
        return attrs.evolve(self, status=BookingStatus.CANCELLED)
