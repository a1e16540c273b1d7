from datetime import date as date_type
from typing import Optional, Self, Sequence

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from cinema_booking.platform.config.core_setting import settings
from cinema_booking.platform.config.di import Container
from cinema_booking.platform.exception.exceptions import DataIntegrityError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.interface.i_booking_store import IBookingStore
from cinema_booking.service.booking.app.interface.i_movie_catalog import IMovieCatalog
from cinema_booking.service.booking.app.session.booking_session import (
    BookingSession,
    SessionPrincipal,
)
from cinema_booking.service.booking.app.session.booking_session_registry import (
    BookingSessionRegistry,
)
from cinema_booking.service.booking.domain.booking_wizard import BookingWizard
from cinema_booking.service.booking.domain.seat_map import SeatMapGenerator
from cinema_booking.service.booking.domain.value_object.principal import Principal
from cinema_booking.service.booking.domain.value_object.show_context import ShowContext


class StartBookingSessionUseCase:
    """
    Open a booking wizard for one screening.

    Flow:
    1. Resolve movie and theatre from the catalog (unknown -> DataIntegrityError)
    2. Fetch seats already booked for the screening
    3. Generate the seat map and pre-fill contact details from the principal
    4. Register the session; the caller drives the wizard through its id
    """

    def __init__(
        self,
        *,
        booking_store: IBookingStore,
        movie_catalog: IMovieCatalog,
        session_registry: BookingSessionRegistry,
        seat_rows: Sequence[str] = tuple(settings.SEAT_ROWS),
        seats_per_row: int = settings.SEATS_PER_ROW,
    ) -> None:
        self.booking_store = booking_store
        self.movie_catalog = movie_catalog
        self.session_registry = session_registry
        self.seat_rows = seat_rows
        self.seats_per_row = seats_per_row
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_store: IBookingStore = Depends(Provide[Container.booking_store]),
        movie_catalog: IMovieCatalog = Depends(Provide[Container.movie_catalog]),
        session_registry: BookingSessionRegistry = Depends(Provide[Container.session_registry]),
    ) -> Self:
        return cls(
            booking_store=booking_store,
            movie_catalog=movie_catalog,
            session_registry=session_registry,
        )

    def _resolve_show(self, *, movie_id: str, theatre_id: str, date: str, time: str) -> ShowContext:
        if not (movie_id and theatre_id and date and time):
            raise DataIntegrityError('Invalid booking request: movie, theatre, date and time are required')
        try:
            date_type.fromisoformat(date)
        except ValueError:
            raise DataIntegrityError(f'Invalid booking request: bad date {date!r}')

        movie = self.movie_catalog.get_movie(movie_id=movie_id)
        if movie is None:
            raise DataIntegrityError(f'Invalid booking request: unknown movie {movie_id}')
        theatre = self.movie_catalog.get_theatre(theatre_id=theatre_id)
        if theatre is None:
            raise DataIntegrityError(f'Invalid booking request: unknown theatre {theatre_id}')

        return ShowContext(
            movie_id=movie_id,
            theatre_id=theatre_id,
            date=date,
            time=time,
            movie=movie,
            theatre=theatre,
        )

    @Logger.io
    async def execute(
        self,
        *,
        movie_id: str,
        theatre_id: str,
        date: str,
        time: str,
        principal: Optional[Principal],
    ) -> BookingSession:
        with self.tracer.start_as_current_span(
            'use_case.start_booking_session',
            attributes={'movie.id': movie_id, 'theatre.id': theatre_id},
        ):
            show = self._resolve_show(movie_id=movie_id, theatre_id=theatre_id, date=date, time=time)
            booked = await self.booking_store.fetch_booked_seats(show_id=show.show_id)
            seat_map = SeatMapGenerator.generate(
                rows=self.seat_rows, seats_per_row=self.seats_per_row, booked_seat_ids=booked
            )

            auth = SessionPrincipal(principal=principal)
            wizard = BookingWizard(
                show=show,
                seat_map=seat_map,
                principal_provider=auth,
                submitter=self.booking_store,
            )
            session = self.session_registry.register(wizard=wizard, auth=auth)

            Logger.base.info(
                f'🎬 [START-SESSION] {session.id} for {show.show_id} '
                f'({len(booked)} of {len(seat_map)} seats booked)'
            )
            return session
