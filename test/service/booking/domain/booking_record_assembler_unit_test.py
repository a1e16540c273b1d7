"""
Unit tests for the booking record assembler and history partition
"""

from datetime import datetime, timedelta, timezone
from typing import Callable

import attrs
import pytest

from cinema_booking.platform.exception.exceptions import DataIntegrityError, DomainError
from cinema_booking.service.booking.domain.booking_record_assembler import (
    assemble,
    is_past_booking,
    parse_show_date,
    partition_by_date,
)
from cinema_booking.service.booking.domain.entity.booking_record_entity import BookingRecord
from cinema_booking.service.booking.domain.enum.booking_status import BookingStatus, PaymentStatus
from cinema_booking.service.booking.domain.enum.seat_tier import SeatTier
from cinema_booking.service.booking.domain.value_object.contact_details import ContactDetails
from cinema_booking.service.booking.domain.value_object.principal import Principal
from cinema_booking.service.booking.domain.value_object.seat import Seat
from cinema_booking.service.booking.domain.value_object.show_context import ShowContext


NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def contact() -> ContactDetails:
    return ContactDetails(name='Ada Lovelace', email='ada@example.com', phone='+44 20 7946 0958')


@pytest.fixture
def selection() -> list[Seat]:
    return [
        Seat(row='A', number=1, tier=SeatTier.VIP),
        Seat(row='D', number=3, tier=SeatTier.STANDARD),
    ]


@pytest.mark.unit
class TestAssemble:
    def test_assemble_copies_show_seats_and_contact(
        self,
        show: ShowContext,
        selection: list[Seat],
        contact: ContactDetails,
        principal: Principal,
    ) -> None:
        # Act
        record = assemble(
            show=show, selection=selection, contact=contact, principal=principal, now=NOW
        )

        # Assert
        assert record.id is None
        assert record.movie_title == 'Inception'
        assert record.movie_poster == show.movie.poster
        assert record.theatre_name == 'Grand Cinema'
        assert record.seats == ['A1', 'D3']
        assert record.seat_types == ['VIP', 'STANDARD']
        assert record.total_price == 400
        assert record.user_id == 'user-1'
        assert record.user_phone == '+44 20 7946 0958'
        assert record.status == BookingStatus.CONFIRMED
        assert record.payment_status == PaymentStatus.PENDING
        assert record.created_at == NOW
        assert record.show_id == 'movie_1:theatre_1:2099-01-10:18:45'

    def test_assemble_without_movie_raises(
        self,
        show: ShowContext,
        selection: list[Seat],
        contact: ContactDetails,
        principal: Principal,
    ) -> None:
        show_without_movie = attrs.evolve(show, movie=None)

        with pytest.raises(DataIntegrityError, match='Movie movie_1 not found'):
            assemble(
                show=show_without_movie, selection=selection, contact=contact, principal=principal
            )

    def test_assemble_without_theatre_raises(
        self,
        show: ShowContext,
        selection: list[Seat],
        contact: ContactDetails,
        principal: Principal,
    ) -> None:
        show_without_theatre = attrs.evolve(show, theatre=None)

        with pytest.raises(DataIntegrityError):
            assemble(
                show=show_without_theatre,
                selection=selection,
                contact=contact,
                principal=principal,
            )


@pytest.mark.unit
class TestBookingRecord:
    def test_mismatched_seat_types_are_rejected(
        self, make_record: Callable[..., BookingRecord]
    ) -> None:
        with pytest.raises(DataIntegrityError):
            make_record(seats=['A1', 'A2'], seat_types=['VIP'])

    def test_cancel_is_one_way(self, make_record: Callable[..., BookingRecord]) -> None:
        record = make_record(id='b-1')

        cancelled = record.cancel()

        assert cancelled.status == BookingStatus.CANCELLED
        assert record.status == BookingStatus.CONFIRMED
        with pytest.raises(DomainError, match='already cancelled'):
            cancelled.cancel()


@pytest.mark.unit
class TestPartitionByDate:
    def test_split_into_upcoming_and_past(
        self, make_record: Callable[..., BookingRecord]
    ) -> None:
        # Arrange
        old = make_record(id='old', date='2020-01-01')
        tomorrow = make_record(id='tomorrow', date=(NOW + timedelta(days=1)).date().isoformat())
        garbage = make_record(id='garbage', date='next friday')

        # Act
        upcoming, past = partition_by_date([old, tomorrow, garbage], now=NOW)

        # Assert
        assert [r.id for r in upcoming] == ['tomorrow', 'garbage']
        assert [r.id for r in past] == ['old']

    def test_today_midnight_before_now_is_past(
        self, make_record: Callable[..., BookingRecord]
    ) -> None:
        today = make_record(date=NOW.date().isoformat())

        assert is_past_booking(today, now=NOW) is True

    def test_show_start_equal_to_now_is_not_past(
        self, make_record: Callable[..., BookingRecord]
    ) -> None:
        midnight = NOW.replace(hour=0)
        record = make_record(date=midnight.date().isoformat())

        assert is_past_booking(record, now=midnight) is False

    def test_parse_show_date_takes_timezone_of_now(self) -> None:
        parsed = parse_show_date('2025-06-15', now=NOW)

        assert parsed == datetime(2025, 6, 15, tzinfo=timezone.utc)

    def test_parse_show_date_with_naive_now(self) -> None:
        parsed = parse_show_date('2025-06-15T00:00:00+00:00', now=datetime(2025, 6, 16))

        assert parsed == datetime(2025, 6, 15)

    def test_parse_show_date_unparseable(self) -> None:
        assert parse_show_date('', now=NOW) is None
