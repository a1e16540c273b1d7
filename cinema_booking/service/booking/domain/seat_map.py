"""
Seat Map Generator

Builds the seating grid for one screening. Tiers follow a fixed row policy:
first row VIP, next two PREMIUM, last row ACCESSIBLE, everything else STANDARD.
"""

from typing import Collection, Dict, Iterator, List, Sequence, Tuple

from cinema_booking.platform.exception.exceptions import DomainError, NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.domain.enum.seat_tier import SeatTier
from cinema_booking.service.booking.domain.value_object.seat import Seat


DEFAULT_ROWS: Tuple[str, ...] = ('A', 'B', 'C', 'D', 'E', 'F', 'G', 'H')
DEFAULT_SEATS_PER_ROW = 10

_PREMIUM_ROW_COUNT = 2


def normalize_seat_id(seat_id: str) -> str:
    return seat_id.strip().upper()


def tier_for_row(row_index: int, row_count: int) -> SeatTier:
    if row_index == 0:
        return SeatTier.VIP
    if row_index == row_count - 1:
        return SeatTier.ACCESSIBLE
    if row_index <= _PREMIUM_ROW_COUNT:
        return SeatTier.PREMIUM
    return SeatTier.STANDARD


class SeatMap:
    def __init__(self, rows: Dict[str, List[Seat]]) -> None:
        self._rows = rows
        self._by_id = {seat.seat_id: seat for seats in rows.values() for seat in seats}

    @property
    def rows(self) -> Dict[str, List[Seat]]:
        return self._rows

    @property
    def booked_seat_ids(self) -> List[str]:
        return [seat.seat_id for seat in self if seat.booked]

    def get(self, seat_id: str) -> Seat:
        seat = self._by_id.get(normalize_seat_id(seat_id)) if seat_id else None
        if seat is None:
            raise NotFoundError(f'Seat {seat_id} does not exist in this theatre')
        return seat

    def __iter__(self) -> Iterator[Seat]:
        for seats in self._rows.values():
            yield from seats

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, seat_id: object) -> bool:
        return isinstance(seat_id, str) and normalize_seat_id(seat_id) in self._by_id


class SeatMapGenerator:
    @staticmethod
    @Logger.io(truncate_content=True)
    def generate(
        *,
        rows: Sequence[str] = DEFAULT_ROWS,
        seats_per_row: int = DEFAULT_SEATS_PER_ROW,
        booked_seat_ids: Collection[str] = (),
    ) -> SeatMap:
        if seats_per_row < 0:
            raise DomainError('seats_per_row must not be negative')
        normalized_rows = [row.strip().upper() for row in rows]
        if len(set(normalized_rows)) != len(normalized_rows):
            raise DomainError(f'Duplicate row letters in layout: {list(rows)}')

        booked = {normalize_seat_id(seat_id) for seat_id in booked_seat_ids}
        grid: Dict[str, List[Seat]] = {}
        for index, row in enumerate(normalized_rows):
            tier = tier_for_row(index, len(normalized_rows))
            grid[row] = [
                Seat(row=row, number=number, tier=tier, booked=f'{row}{number}' in booked)
                for number in range(1, seats_per_row + 1)
            ]
        return SeatMap(grid)
