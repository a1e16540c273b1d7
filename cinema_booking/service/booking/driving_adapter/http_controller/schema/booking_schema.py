from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from cinema_booking.service.booking.app.dto.booking_history import AdminStats, BookingHistory
from cinema_booking.service.booking.domain.entity.booking_record_entity import BookingRecord


class BookingRecordResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'movie_id': 'movie_1',
                'movie_title': 'Inception',
                'theatre_id': 'theatre_1',
                'theatre_name': 'Grand Cinema',
                'date': '2025-01-10',
                'time': '18:45',
                'seats': ['A1', 'D3'],
                'seat_types': ['VIP', 'STANDARD'],
                'total_price': 400,
                'status': 'confirmed',
                'payment_status': 'pending',
            }
        },
    }

    id: str
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
    status: str
    payment_status: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: BookingRecord) -> 'BookingRecordResponse':
        return cls(
            id=record.id or '',
            movie_id=record.movie_id,
            movie_title=record.movie_title,
            movie_poster=record.movie_poster,
            theatre_id=record.theatre_id,
            theatre_name=record.theatre_name,
            date=record.date,
            time=record.time,
            seats=list(record.seats),
            seat_types=list(record.seat_types),
            total_price=record.total_price,
            user_id=record.user_id,
            user_email=record.user_email,
            user_name=record.user_name,
            status=record.status.value,
            payment_status=record.payment_status.value,
            created_at=record.created_at,
        )


class BookingHistoryResponse(BaseModel):
    upcoming: List[BookingRecordResponse] = []
    past: List[BookingRecordResponse] = []

    @classmethod
    def from_history(cls, history: BookingHistory) -> 'BookingHistoryResponse':
        return cls(
            upcoming=[BookingRecordResponse.from_record(r) for r in history.upcoming],
            past=[BookingRecordResponse.from_record(r) for r in history.past],
        )


class AdminStatsResponse(BaseModel):
    total_bookings: int
    total_revenue: int
    recent_bookings: List[BookingRecordResponse] = []

    @classmethod
    def from_stats(cls, stats: AdminStats) -> 'AdminStatsResponse':
        return cls(
            total_bookings=stats.total_bookings,
            total_revenue=stats.total_revenue,
            recent_bookings=[BookingRecordResponse.from_record(r) for r in stats.recent_bookings],
        )


class StartBookingSessionRequest(BaseModel):
    movie_id: str
    theatre_id: str
    date: str = Field(examples=['2025-01-10'])
    time: str = Field(examples=['18:45'])


class ContactDetailsRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class ContactDetailsResponse(BaseModel):
    name: str
    email: str
    phone: str


class SeatResponse(BaseModel):
    id: str
    number: int
    tier: str
    price: int
    booked: bool
    selected: bool


class SeatRowResponse(BaseModel):
    row: str
    tier: str
    seats: List[SeatResponse]


class TierResponse(BaseModel):
    tier: str
    label: str
    price: int


class BookingSessionResponse(BaseModel):
    session_id: str
    step: str
    movie_id: str
    movie_title: str
    theatre_id: str
    theatre_name: str
    date: str
    time: str
    seat_rows: List[SeatRowResponse]
    tiers: List[TierResponse]
    selected_seats: List[str]
    total_price: int
    contact: ContactDetailsResponse
    last_error: Optional[str] = None
    booking_id: Optional[str] = None


class SeatToggleResponse(BaseModel):
    seat_id: str
    action: Optional[str]  # 'add' | 'remove' | None when the seat is booked
    selected_seats: List[str]
    total_price: int


class ConfirmBookingResponse(BaseModel):
    booking_id: str
    total_price: int
    seats: List[str]
    status: str
