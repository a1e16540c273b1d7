from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.exception.exceptions import ForbiddenError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.dto.booking_history import AdminStats
from cinema_booking.service.booking.app.interface.i_booking_store import IBookingStore
from cinema_booking.service.booking.domain.value_object.principal import Principal


RECENT_BOOKINGS_LIMIT = 10


class GetAdminStatsUseCase:
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
    async def execute(self, *, principal: Principal) -> AdminStats:
        """
        Raises:
            ForbiddenError: Caller has no admin profile
        """
        with self.tracer.start_as_current_span(
            'use_case.get_admin_stats', attributes={'user.id': principal.id}
        ):
            profile = await self.booking_store.fetch_user_profile(user_id=principal.id)
            if profile is None or not profile.is_admin:
                raise ForbiddenError('Admin access required')

            bookings = await self.booking_store.fetch_all_bookings()
            return AdminStats(
                total_bookings=len(bookings),
                total_revenue=sum(b.total_price or 0 for b in bookings),
                recent_bookings=bookings[:RECENT_BOOKINGS_LIMIT],
            )
