from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from cinema_booking.service.booking.app.dto.favorite_entry import FavoriteEntry
from cinema_booking.service.booking.driving_adapter.http_controller.schema.catalog_schema import (
    MovieResponse,
)


class UserProfileResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    created_at: Optional[datetime] = None


class FavoriteMovieResponse(BaseModel):
    movie: MovieResponse
    added_at: datetime

    @classmethod
    def from_entry(cls, entry: FavoriteEntry) -> 'FavoriteMovieResponse':
        return cls(movie=MovieResponse.from_movie(entry.movie), added_at=entry.added_at)


class FavoritesResponse(BaseModel):
    favorites: List[FavoriteMovieResponse]

    @classmethod
    def from_entries(cls, entries: List[FavoriteEntry]) -> 'FavoritesResponse':
        return cls(favorites=[FavoriteMovieResponse.from_entry(e) for e in entries])
