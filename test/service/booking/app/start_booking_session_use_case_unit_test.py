"""
Unit tests for StartBookingSessionUseCase

Test Focus:
1. Seat map reflects seats already booked for the screening
2. Contact details are pre-filled from the principal
3. Unknown movie / theatre and malformed requests fail before a session exists
"""

from typing import Callable

import pytest

from cinema_booking.platform.exception.exceptions import DataIntegrityError
from cinema_booking.service.booking.app.command.start_booking_session_use_case import (
    StartBookingSessionUseCase,
)
from cinema_booking.service.booking.app.session.booking_session_registry import (
    BookingSessionRegistry,
)
from cinema_booking.service.booking.domain.entity.booking_record_entity import BookingRecord
from cinema_booking.service.booking.domain.enum.booking_step import BookingStep
from cinema_booking.service.booking.domain.value_object.principal import Principal
from cinema_booking.service.booking.driven_adapter.catalog.static_movie_catalog import (
    StaticMovieCatalog,
)
from cinema_booking.service.booking.driven_adapter.store.in_memory_booking_store import (
    InMemoryBookingStore,
)


@pytest.fixture
def movie_catalog() -> StaticMovieCatalog:
    return StaticMovieCatalog()


@pytest.fixture
def use_case(
    booking_store: InMemoryBookingStore,
    movie_catalog: StaticMovieCatalog,
    session_registry: BookingSessionRegistry,
) -> StartBookingSessionUseCase:
    return StartBookingSessionUseCase(
        booking_store=booking_store,
        movie_catalog=movie_catalog,
        session_registry=session_registry,
        seat_rows=('A', 'B', 'C', 'D', 'E'),
        seats_per_row=10,
    )


@pytest.fixture
def show_request() -> dict[str, str]:
    return {
        'movie_id': 'movie_1',
        'theatre_id': 'theatre_1',
        'date': '2099-01-10',
        'time': '18:45',
    }


@pytest.mark.unit
class TestStartBookingSessionUseCase:
    @pytest.mark.asyncio
    async def test_start_session_builds_wizard(
        self,
        use_case: StartBookingSessionUseCase,
        session_registry: BookingSessionRegistry,
        principal: Principal,
        show_request: dict[str, str],
    ) -> None:
        # Act
        session = await use_case.execute(**show_request, principal=principal)

        # Assert
        wizard = session.wizard
        assert wizard.step == BookingStep.SEAT_SELECTION
        assert wizard.show.movie is not None
        assert wizard.show.movie.title == 'Inception'
        assert wizard.show.theatre is not None
        assert wizard.show.theatre.name == 'Grand Cinema'
        assert len(wizard.seat_map) == 50
        assert wizard.seat_map.booked_seat_ids == []
        assert wizard.contact.email == 'ada@example.com'
        assert session_registry.get(session_id=session.id, principal=principal) is session

    @pytest.mark.asyncio
    async def test_seats_booked_for_same_show_are_marked(
        self,
        use_case: StartBookingSessionUseCase,
        booking_store: InMemoryBookingStore,
        make_record: Callable[..., BookingRecord],
        principal: Principal,
        show_request: dict[str, str],
    ) -> None:
        # Arrange
        await booking_store.submit_booking(record=make_record(seats=['A1', 'D3']))
        await booking_store.submit_booking(
            record=make_record(seats=['B2'], seat_types=['PREMIUM'], time='21:00')
        )

        # Act
        session = await use_case.execute(**show_request, principal=principal)

        # Assert - the 21:00 booking belongs to another screening
        assert sorted(session.wizard.seat_map.booked_seat_ids) == ['A1', 'D3']

    @pytest.mark.asyncio
    async def test_anonymous_session_has_empty_contact(
        self, use_case: StartBookingSessionUseCase, show_request: dict[str, str]
    ) -> None:
        session = await use_case.execute(**show_request, principal=None)

        assert session.auth.current_principal() is None
        assert session.wizard.contact.missing_fields() == ['name', 'email', 'phone']

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'override',
        [
            {'movie_id': 'movie_404'},
            {'theatre_id': 'theatre_404'},
            {'date': '10/01/2099'},
            {'time': ''},
        ],
    )
    async def test_invalid_request_is_rejected(
        self,
        use_case: StartBookingSessionUseCase,
        session_registry: BookingSessionRegistry,
        principal: Principal,
        show_request: dict[str, str],
        override: dict[str, str],
    ) -> None:
        with pytest.raises(DataIntegrityError):
            await use_case.execute(**(show_request | override), principal=principal)

        assert len(session_registry) == 0
