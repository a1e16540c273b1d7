from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from cinema_booking.service.booking.domain.entity.movie_entity import Movie, Theatre
from cinema_booking.service.booking.domain.entity.review_entity import Review


class MovieResponse(BaseModel):
    id: str
    title: str
    year: int
    genre: List[str]
    rating: float
    synopsis: str
    duration: int
    status: str
    image: str
    poster: str
    trailer: str
    languages: List[str]

    @classmethod
    def from_movie(cls, movie: Movie) -> 'MovieResponse':
        return cls(
            id=movie.id,
            title=movie.title,
            year=movie.year,
            genre=list(movie.genre),
            rating=movie.rating,
            synopsis=movie.synopsis,
            duration=movie.duration,
            status=movie.status,
            image=movie.image,
            poster=movie.poster,
            trailer=movie.trailer,
            languages=list(movie.languages),
        )


class TheatreResponse(BaseModel):
    id: str
    name: str
    location: str

    @classmethod
    def from_theatre(cls, theatre: Theatre) -> 'TheatreResponse':
        return cls(id=theatre.id, name=theatre.name, location=theatre.location)


class TheatreShowTimesResponse(BaseModel):
    theatre: TheatreResponse
    times: List[str]


class MovieShowsResponse(BaseModel):
    movie_id: str
    dates: List[str]
    theatres: List[TheatreShowTimesResponse]


class SubmitReviewRequest(BaseModel):
    # Range and emptiness are checked by the domain so the messages match the UI
    rating: int
    review: str


class ReviewResponse(BaseModel):
    id: Optional[str] = None
    movie_id: str
    user_id: str
    user_name: str
    rating: int
    review: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_review(cls, review: Review) -> 'ReviewResponse':
        return cls(
            id=review.id,
            movie_id=review.movie_id,
            user_id=review.user_id,
            user_name=review.user_name,
            rating=review.rating,
            review=review.review,
            created_at=review.created_at,
        )


class MovieReviewsResponse(BaseModel):
    movie_id: str
    reviews: List[ReviewResponse]
