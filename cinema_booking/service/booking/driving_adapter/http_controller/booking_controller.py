from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status
from sse_starlette.sse import EventSourceResponse

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.command.cancel_booking_use_case import (
    CancelBookingUseCase,
)
from cinema_booking.service.booking.app.interface.i_booking_store import IBookingStore
from cinema_booking.service.booking.app.query.list_my_bookings_use_case import (
    ListMyBookingsUseCase,
)
from cinema_booking.service.booking.domain.enum.feed_topic import FeedTopic
from cinema_booking.service.booking.domain.value_object.principal import Principal
from cinema_booking.service.booking.driving_adapter.http_controller.auth.principal_auth import (
    require_principal,
)
from cinema_booking.service.booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingHistoryResponse,
    BookingRecordResponse,
)
from cinema_booking.service.booking.driving_adapter.http_controller.sse_feed import snapshot_feed


router = APIRouter()


@router.get('/my_booking', response_model=BookingHistoryResponse)
@Logger.io
async def list_my_bookings(
    principal: Principal = Depends(require_principal),
    use_case: ListMyBookingsUseCase = Depends(ListMyBookingsUseCase.depends),
) -> BookingHistoryResponse:
    history = await use_case.execute(principal=principal)
    return BookingHistoryResponse.from_history(history)


@router.get('/my_booking/sse', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def stream_my_bookings(
    principal: Principal = Depends(require_principal),
    use_case: ListMyBookingsUseCase = Depends(ListMyBookingsUseCase.depends),
    booking_store: IBookingStore = Depends(Provide[Container.booking_store]),
) -> EventSourceResponse:
    """SSE feed of the caller's booking list, refreshed on every created or cancelled event"""

    async def history_snapshot() -> dict:
        history = await use_case.execute(principal=principal)
        return BookingHistoryResponse.from_history(history).model_dump(mode='json')

    return snapshot_feed(
        booking_store=booking_store,
        topic=FeedTopic.BOOKINGS,
        key=principal.id,
        snapshot=history_snapshot,
    )


@router.patch('/{booking_id}', status_code=status.HTTP_200_OK, response_model=BookingRecordResponse)
@Logger.io
async def cancel_booking(
    booking_id: str,
    principal: Principal = Depends(require_principal),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingRecordResponse:
    record = await use_case.execute(booking_id=booking_id, principal=principal)
    return BookingRecordResponse.from_record(record)
