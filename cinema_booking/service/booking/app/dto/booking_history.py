from typing import List

import attrs

from cinema_booking.service.booking.domain.entity.booking_record_entity import BookingRecord


@attrs.define
class BookingHistory:
    upcoming: List[BookingRecord] = attrs.field(factory=list)
    past: List[BookingRecord] = attrs.field(factory=list)


@attrs.define
class AdminStats:
    total_bookings: int
    total_revenue: int
    recent_bookings: List[BookingRecord] = attrs.field(factory=list)
