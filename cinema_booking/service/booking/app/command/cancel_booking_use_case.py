from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.exception.exceptions import ForbiddenError, NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.interface.i_booking_store import IBookingStore
from cinema_booking.service.booking.domain.entity.booking_record_entity import BookingRecord
from cinema_booking.service.booking.domain.value_object.principal import Principal


class CancelBookingUseCase:
    def __init__(self, *, booking_store: IBookingStore) -> None:
        self.booking_store = booking_store
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls, booking_store: IBookingStore = Depends(Provide[Container.booking_store])
    ) -> Self:
        return cls(booking_store=booking_store)

    @Logger.io
    async def execute(self, *, booking_id: str, principal: Principal) -> BookingRecord:
        """
        Raises:
            NotFoundError: Unknown booking
            ForbiddenError: Booking belongs to someone else
            DomainError: Booking already cancelled
        """
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking', attributes={'booking.id': booking_id}
        ):
            booking = await self.booking_store.get_booking(booking_id=booking_id)
            if booking is None:
                raise NotFoundError('Booking not found')
            if booking.user_id != principal.id:
                raise ForbiddenError('Only the booker can cancel this booking')

            # One-way rule check before touching the store
            booking.cancel()

            cancelled = await self.booking_store.cancel_booking(booking_id=booking_id)
            Logger.base.info(f'🚫 [CANCEL] Booking {booking_id} cancelled by {principal.id}')
            return cancelled
