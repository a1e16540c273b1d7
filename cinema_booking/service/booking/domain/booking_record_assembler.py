"""
Booking Record Assembler

Turns a confirmed wizard state into the record handed to the booking store,
and splits stored records into upcoming and past for the history view.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from cinema_booking.platform.exception.exceptions import DataIntegrityError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.domain.entity.booking_record_entity import BookingRecord
from cinema_booking.service.booking.domain.enum.booking_status import BookingStatus, PaymentStatus
from cinema_booking.service.booking.domain.pricing import total_of
from cinema_booking.service.booking.domain.value_object.contact_details import ContactDetails
from cinema_booking.service.booking.domain.value_object.principal import Principal
from cinema_booking.service.booking.domain.value_object.seat import Seat
from cinema_booking.service.booking.domain.value_object.show_context import ShowContext


@Logger.io
def assemble(
    *,
    show: ShowContext,
    selection: Sequence[Seat],
    contact: ContactDetails,
    principal: Principal,
    now: Optional[datetime] = None,
) -> BookingRecord:
    """
    Raises:
        DataIntegrityError: When the movie or theatre of the screening is unknown
    """
    if show.movie is None:
        raise DataIntegrityError(f'Movie {show.movie_id} not found; cannot assemble booking')
    if show.theatre is None:
        raise DataIntegrityError(f'Theatre {show.theatre_id} not found; cannot assemble booking')

    seats = list(selection)
    return BookingRecord(
        movie_id=show.movie.id,
        movie_title=show.movie.title,
        movie_poster=show.movie.poster,
        theatre_id=show.theatre.id,
        theatre_name=show.theatre.name,
        date=show.date,
        time=show.time,
        seats=[seat.seat_id for seat in seats],
        seat_types=[seat.tier.value for seat in seats],
        total_price=total_of(seats),
        user_id=principal.id,
        user_email=contact.email,
        user_name=contact.name,
        user_phone=contact.phone,
        status=BookingStatus.CONFIRMED,
        payment_status=PaymentStatus.PENDING,
        created_at=now or datetime.now(timezone.utc),
    )


def parse_show_date(date: str, *, now: datetime) -> Optional[datetime]:
    """Midnight at the start of the show date, in now's timezone; None if unparseable"""
    try:
        parsed = datetime.fromisoformat(date)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=now.tzinfo)
    if now.tzinfo is None:
        return parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def is_past_booking(record: BookingRecord, *, now: datetime) -> bool:
    """Past iff the show date is strictly before now; unparseable dates stay upcoming"""
    show_start = parse_show_date(record.date, now=now)
    if show_start is None:
        return False
    return show_start < now


def partition_by_date(
    records: Iterable[BookingRecord], *, now: Optional[datetime] = None
) -> Tuple[List[BookingRecord], List[BookingRecord]]:
    """
    Returns:
        (upcoming, past), each keeping the input order
    """
    now = now or datetime.now(timezone.utc)
    upcoming: List[BookingRecord] = []
    past: List[BookingRecord] = []
    for record in records:
        (past if is_past_booking(record, now=now) else upcoming).append(record)
    return upcoming, past
