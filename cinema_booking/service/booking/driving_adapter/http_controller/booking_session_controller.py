"""
Booking wizard over HTTP.

Each endpoint loads the caller's session from the registry, applies one wizard
operation and returns the resulting session view. Sessions that end (booked or
abandoned) are removed from the registry.
"""

from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.command.start_booking_session_use_case import (
    StartBookingSessionUseCase,
)
from cinema_booking.service.booking.app.session.booking_session import BookingSession
from cinema_booking.service.booking.app.session.booking_session_registry import (
    BookingSessionRegistry,
)
from cinema_booking.service.booking.domain.pricing import SEAT_TIER_CATALOG, price_of
from cinema_booking.service.booking.domain.value_object.principal import Principal
from cinema_booking.service.booking.driving_adapter.http_controller.auth.principal_auth import (
    get_optional_principal,
)
from cinema_booking.service.booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingSessionResponse,
    ConfirmBookingResponse,
    ContactDetailsRequest,
    ContactDetailsResponse,
    SeatResponse,
    SeatRowResponse,
    SeatToggleResponse,
    StartBookingSessionRequest,
    TierResponse,
)


router = APIRouter()


def build_session_response(session: BookingSession) -> BookingSessionResponse:
    wizard = session.wizard
    show = wizard.show
    seat_rows = [
        SeatRowResponse(
            row=row,
            tier=seats[0].tier.value if seats else '',
            seats=[
                SeatResponse(
                    id=seat.seat_id,
                    number=seat.number,
                    tier=seat.tier.value,
                    price=price_of(seat.tier),
                    booked=seat.booked,
                    selected=wizard.selection.is_selected(seat.row, seat.number),
                )
                for seat in seats
            ],
        )
        for row, seats in wizard.seat_map.rows.items()
    ]
    return BookingSessionResponse(
        session_id=session.id,
        step=wizard.step.value,
        movie_id=show.movie_id,
        movie_title=show.movie.title if show.movie else '',
        theatre_id=show.theatre_id,
        theatre_name=show.theatre.name if show.theatre else '',
        date=show.date,
        time=show.time,
        seat_rows=seat_rows,
        tiers=[
            TierResponse(tier=info.tier.value, label=info.display_label, price=info.unit_price)
            for info in SEAT_TIER_CATALOG.values()
        ],
        selected_seats=wizard.selection.seat_ids,
        total_price=wizard.current_total(),
        contact=ContactDetailsResponse(
            name=wizard.contact.name, email=wizard.contact.email, phone=wizard.contact.phone
        ),
        last_error=wizard.last_error,
        booking_id=wizard.booking_id,
    )


@router.post('', status_code=status.HTTP_201_CREATED, response_model=BookingSessionResponse)
@Logger.io
async def start_booking_session(
    request: StartBookingSessionRequest,
    principal: Optional[Principal] = Depends(get_optional_principal),
    use_case: StartBookingSessionUseCase = Depends(StartBookingSessionUseCase.depends),
) -> BookingSessionResponse:
    session = await use_case.execute(
        movie_id=request.movie_id,
        theatre_id=request.theatre_id,
        date=request.date,
        time=request.time,
        principal=principal,
    )
    return build_session_response(session)


@router.get('/{session_id}', response_model=BookingSessionResponse)
@Logger.io
@inject
async def get_booking_session(
    session_id: str,
    principal: Optional[Principal] = Depends(get_optional_principal),
    registry: BookingSessionRegistry = Depends(Provide[Container.session_registry]),
) -> BookingSessionResponse:
    session = registry.get(session_id=session_id, principal=principal)
    return build_session_response(session)


@router.post('/{session_id}/seat/{seat_id}', response_model=SeatToggleResponse)
@Logger.io
@inject
async def toggle_seat(
    session_id: str,
    seat_id: str,
    principal: Optional[Principal] = Depends(get_optional_principal),
    registry: BookingSessionRegistry = Depends(Provide[Container.session_registry]),
) -> SeatToggleResponse:
    session = registry.get(session_id=session_id, principal=principal)
    result = session.wizard.toggle_seat(seat_id)
    return SeatToggleResponse(
        seat_id=seat_id.strip().upper(),
        action=result.action.value if result.action else None,
        selected_seats=[seat.seat_id for seat in result.seats],
        total_price=session.wizard.current_total(),
    )


@router.put('/{session_id}/contact', response_model=BookingSessionResponse)
@Logger.io
@inject
async def update_contact_details(
    session_id: str,
    request: ContactDetailsRequest,
    principal: Optional[Principal] = Depends(get_optional_principal),
    registry: BookingSessionRegistry = Depends(Provide[Container.session_registry]),
) -> BookingSessionResponse:
    session = registry.get(session_id=session_id, principal=principal)
    session.wizard.update_contact(name=request.name, email=request.email, phone=request.phone)
    return build_session_response(session)


@router.post('/{session_id}/advance', response_model=BookingSessionResponse)
@Logger.io
@inject
async def advance_step(
    session_id: str,
    principal: Optional[Principal] = Depends(get_optional_principal),
    registry: BookingSessionRegistry = Depends(Provide[Container.session_registry]),
) -> BookingSessionResponse:
    session = registry.get(session_id=session_id, principal=principal)
    session.wizard.advance()
    return build_session_response(session)


@router.post('/{session_id}/back', response_model=BookingSessionResponse)
@Logger.io
@inject
async def back_step(
    session_id: str,
    principal: Optional[Principal] = Depends(get_optional_principal),
    registry: BookingSessionRegistry = Depends(Provide[Container.session_registry]),
) -> BookingSessionResponse:
    session = registry.get(session_id=session_id, principal=principal)
    session.wizard.back()
    return build_session_response(session)


@router.post(
    '/{session_id}/confirm',
    status_code=status.HTTP_201_CREATED,
    response_model=ConfirmBookingResponse,
)
@Logger.io
@inject
async def confirm_booking(
    session_id: str,
    principal: Optional[Principal] = Depends(get_optional_principal),
    registry: BookingSessionRegistry = Depends(Provide[Container.session_registry]),
) -> ConfirmBookingResponse:
    session = registry.get(session_id=session_id, principal=principal)
    wizard = session.wizard
    try:
        booking_id = await wizard.confirm()
    finally:
        if wizard.step.is_terminal:
            registry.dispose(session_id=session.id)

    record = wizard.submitted_record
    return ConfirmBookingResponse(
        booking_id=booking_id,
        total_price=record.total_price if record else wizard.current_total(),
        seats=list(record.seats) if record else wizard.selection.seat_ids,
        status=record.status.value if record else 'confirmed',
    )


@router.delete('/{session_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
@inject
async def abort_booking_session(
    session_id: str,
    principal: Optional[Principal] = Depends(get_optional_principal),
    registry: BookingSessionRegistry = Depends(Provide[Container.session_registry]),
) -> None:
    session = registry.get(session_id=session_id, principal=principal)
    session.wizard.abort()
    registry.dispose(session_id=session.id)
