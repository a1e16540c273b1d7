from typing import List

import attrs


@attrs.define(frozen=True)
class Movie:
    id: str
    title: str
    year: int
    rating: float
    synopsis: str
    duration: int  # minutes
    status: str  # 'now_showing' | 'coming_soon'
    image: str
    poster: str
    trailer: str = ''
    genre: List[str] = attrs.field(factory=list)
    languages: List[str] = attrs.field(factory=list)


@attrs.define(frozen=True)
class Theatre:
    id: str
    name: str
    location: str


@attrs.define(frozen=True)
class Showtime:
    """A fixed slot of one movie at one theatre, repeated every day"""

    id: str
    movie_id: str
    theatre_id: str
    time: str
