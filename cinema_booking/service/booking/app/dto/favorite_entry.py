from datetime import datetime

import attrs

from cinema_booking.service.booking.domain.entity.movie_entity import Movie


@attrs.define(frozen=True)
class FavoriteEntry:
    movie: Movie
    added_at: datetime
