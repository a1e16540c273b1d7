"""
Seat Selection Tracker

Ordered set of seats the user picked in the current session. Insertion order
is kept so the booking record lists seats in the order they were chosen.
"""

from enum import StrEnum
from typing import Iterable, Iterator, Optional, Tuple

import attrs

from cinema_booking.service.booking.domain.value_object.seat import Seat


class ToggleAction(StrEnum):
    ADD = 'add'
    REMOVE = 'remove'


@attrs.define(frozen=True)
class ToggleResult:
    seats: Tuple[Seat, ...]
    action: Optional[ToggleAction]  # None when the seat was booked and nothing changed


class SeatSelection:
    def __init__(self, seats: Iterable[Seat] = ()) -> None:
        self._seats: list[Seat] = []
        for seat in seats:
            if not seat.booked and not self.is_selected(seat.row, seat.number):
                self._seats.append(seat)

    def toggle(self, seat: Seat) -> ToggleResult:
        if seat.booked:
            return ToggleResult(seats=self.seats, action=None)

        for index, selected in enumerate(self._seats):
            if selected.row == seat.row and selected.number == seat.number:
                del self._seats[index]
                return ToggleResult(seats=self.seats, action=ToggleAction.REMOVE)

        self._seats.append(seat)
        return ToggleResult(seats=self.seats, action=ToggleAction.ADD)

    def is_selected(self, row: str, number: int) -> bool:
        return any(seat.row == row and seat.number == number for seat in self._seats)

    def clear(self) -> None:
        self._seats.clear()

    @property
    def seats(self) -> Tuple[Seat, ...]:
        return tuple(self._seats)

    @property
    def seat_ids(self) -> list[str]:
        return [seat.seat_id for seat in self._seats]

    @property
    def is_empty(self) -> bool:
        return not self._seats

    def __iter__(self) -> Iterator[Seat]:
        return iter(tuple(self._seats))

    def __len__(self) -> int:
        return len(self._seats)
