from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.dto.booking_history import BookingHistory
from cinema_booking.service.booking.app.interface.i_booking_store import IBookingStore
from cinema_booking.service.booking.domain.booking_record_assembler import partition_by_date
from cinema_booking.service.booking.domain.value_object.principal import Principal


_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class ListMyBookingsUseCase:
    def __init__(self, *, booking_store: IBookingStore) -> None:
        self.booking_store = booking_store

    @classmethod
    @inject
    def depends(
        cls, booking_store: IBookingStore = Depends(Provide[Container.booking_store])
    ) -> Self:
        return cls(booking_store=booking_store)

    @Logger.io
    async def execute(
        self, *, principal: Principal, now: Optional[datetime] = None
    ) -> BookingHistory:
        records = await self.booking_store.fetch_user_bookings(user_id=principal.id)
        records.sort(key=lambda r: _as_aware(r.created_at), reverse=True)
        upcoming, past = partition_by_date(records, now=now)
        return BookingHistory(upcoming=upcoming, past=past)


def _as_aware(value: Optional[datetime]) -> datetime:
    if value is None:
        return _EPOCH
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
