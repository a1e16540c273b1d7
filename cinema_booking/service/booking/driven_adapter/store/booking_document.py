"""
Stored document shapes.

Field names are camelCase on the wire so documents written by earlier clients
stay readable. Every read goes through model_validate; a document that does
not fit surfaces as DataIntegrityError instead of leaking half-parsed data.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from cinema_booking.platform.exception.exceptions import DataIntegrityError
from cinema_booking.service.booking.domain.entity.booking_record_entity import BookingRecord
from cinema_booking.service.booking.domain.entity.review_entity import MAX_RATING, MIN_RATING, Review
from cinema_booking.service.booking.domain.entity.user_profile_entity import UserProfile
from cinema_booking.service.booking.domain.enum.booking_status import BookingStatus, PaymentStatus
from cinema_booking.service.booking.domain.enum.user_role import UserRole
from cinema_booking.service.booking.domain.value_object.favorite_movie import FavoriteMovie


class _Document(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')


class BookingDocument(_Document):
    movie_id: str
    movie_title: str = ''
    movie_poster: str = ''
    theatre_id: str
    theatre_name: str = ''
    date: str
    time: str
    seats: List[str]
    seat_types: List[str]
    total_price: int = Field(ge=0)
    user_id: str
    user_email: str = ''
    user_name: str = ''
    user_phone: str = ''
    status: BookingStatus = BookingStatus.CONFIRMED
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: Optional[datetime] = None

    @model_validator(mode='after')
    def check_parallel_seats(self) -> 'BookingDocument':
        if len(self.seats) != len(self.seat_types):
            raise ValueError('seats and seatTypes must have the same length')
        return self

    @classmethod
    def from_record(cls, record: BookingRecord) -> 'BookingDocument':
        return cls(
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
            user_phone=record.user_phone,
            status=record.status,
            payment_status=record.payment_status,
            created_at=record.created_at,
        )

    def to_record(self, *, booking_id: str) -> BookingRecord:
        return BookingRecord(
            id=booking_id,
            movie_id=self.movie_id,
            movie_title=self.movie_title,
            movie_poster=self.movie_poster,
            theatre_id=self.theatre_id,
            theatre_name=self.theatre_name,
            date=self.date,
            time=self.time,
            seats=list(self.seats),
            seat_types=list(self.seat_types),
            total_price=self.total_price,
            user_id=self.user_id,
            user_email=self.user_email,
            user_name=self.user_name,
            user_phone=self.user_phone,
            status=self.status,
            payment_status=self.payment_status,
            created_at=self.created_at,
        )

    def dump(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode='json')


class UserProfileDocument(_Document):
    name: str = ''
    email: str = ''
    role: UserRole = UserRole.USER
    created_at: Optional[datetime] = None

    @classmethod
    def from_profile(cls, profile: UserProfile) -> 'UserProfileDocument':
        return cls(
            name=profile.name, email=profile.email, role=profile.role, created_at=profile.created_at
        )

    def to_profile(self, *, user_id: str) -> UserProfile:
        return UserProfile(
            id=user_id, name=self.name, email=self.email, role=self.role, created_at=self.created_at
        )

    def dump(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode='json')


class FavoriteDocument(_Document):
    movie_id: str = Field(alias='id')
    added_at: datetime

    @classmethod
    def from_favorite(cls, favorite: FavoriteMovie) -> 'FavoriteDocument':
        return cls(movie_id=favorite.movie_id, added_at=favorite.added_at)

    def to_favorite(self) -> FavoriteMovie:
        return FavoriteMovie(movie_id=self.movie_id, added_at=self.added_at)

    def dump(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode='json')


class ReviewDocument(_Document):
    movie_id: str
    user_id: str
    user_name: str = 'Anonymous'
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING)
    review: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_review(cls, review: Review) -> 'ReviewDocument':
        return cls(
            movie_id=review.movie_id,
            user_id=review.user_id,
            user_name=review.user_name,
            rating=review.rating,
            review=review.review,
            created_at=review.created_at,
        )

    def to_review(self, *, review_id: str) -> Review:
        return Review(
            id=review_id,
            movie_id=self.movie_id,
            user_id=self.user_id,
            user_name=self.user_name,
            rating=self.rating,
            review=self.review,
            created_at=self.created_at,
        )

    def dump(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode='json')


def load_booking(raw: Any, *, booking_id: str) -> BookingRecord:
    """
    Raises:
        DataIntegrityError: When the stored document is malformed
    """
    try:
        document = (
            BookingDocument.model_validate_json(raw)
            if isinstance(raw, (str, bytes))
            else BookingDocument.model_validate(raw)
        )
    except ValidationError as e:
        raise DataIntegrityError(f'Booking {booking_id} is malformed: {e.error_count()} errors') from e
    return document.to_record(booking_id=booking_id)


def load_user_profile(raw: Any, *, user_id: str) -> UserProfile:
    try:
        document = (
            UserProfileDocument.model_validate_json(raw)
            if isinstance(raw, (str, bytes))
            else UserProfileDocument.model_validate(raw)
        )
    except ValidationError as e:
        raise DataIntegrityError(f'Profile of user {user_id} is malformed') from e
    return document.to_profile(user_id=user_id)


def load_favorite(raw: Any, *, user_id: str) -> FavoriteMovie:
    try:
        document = (
            FavoriteDocument.model_validate_json(raw)
            if isinstance(raw, (str, bytes))
            else FavoriteDocument.model_validate(raw)
        )
    except ValidationError as e:
        raise DataIntegrityError(f'Favorite of user {user_id} is malformed') from e
    return document.to_favorite()


def load_review(raw: Any, *, review_id: str) -> Review:
    try:
        document = (
            ReviewDocument.model_validate_json(raw)
            if isinstance(raw, (str, bytes))
            else ReviewDocument.model_validate(raw)
        )
    except ValidationError as e:
        raise DataIntegrityError(f'Review {review_id} is malformed: {e.error_count()} errors') from e
    return document.to_review(review_id=review_id)
