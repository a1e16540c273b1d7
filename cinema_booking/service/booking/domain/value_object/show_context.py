from typing import Optional

import attrs

from cinema_booking.service.booking.domain.entity.movie_entity import Movie, Theatre


@attrs.define(frozen=True)
class ShowContext:
    """One screening: which movie, where, and when"""

    movie_id: str
    theatre_id: str
    date: str
    time: str
    movie: Optional[Movie] = None
    theatre: Optional[Theatre] = None

    @property
    def show_id(self) -> str:
        return build_show_id(
            movie_id=self.movie_id, theatre_id=self.theatre_id, date=self.date, time=self.time
        )


def build_show_id(*, movie_id: str, theatre_id: str, date: str, time: str) -> str:
    return f'{movie_id}:{theatre_id}:{date}:{time}'
