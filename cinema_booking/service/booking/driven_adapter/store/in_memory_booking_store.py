"""
In-memory Booking Store

Process-local store for development and tests. Documents are kept in their
serialized camelCase form so reads go through the same validation as Redis.
"""

from typing import Dict, List, Optional, Set

import anyio
from anyio.streams.memory import MemoryObjectReceiveStream
from uuid_utils import uuid7

from cinema_booking.platform.event.i_in_memory_broadcaster import IInMemoryEventBroadcaster
from cinema_booking.platform.exception.exceptions import NotFoundError, SeatConflictError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.interface.i_booking_store import IBookingStore
from cinema_booking.service.booking.domain.entity.booking_record_entity import BookingRecord
from cinema_booking.service.booking.domain.entity.review_entity import Review
from cinema_booking.service.booking.domain.entity.user_profile_entity import UserProfile
from cinema_booking.service.booking.domain.enum.booking_event_type import BookingEventType
from cinema_booking.service.booking.domain.enum.booking_status import BookingStatus
from cinema_booking.service.booking.domain.enum.feed_topic import FeedTopic
from cinema_booking.service.booking.domain.value_object.favorite_movie import FavoriteMovie
from cinema_booking.service.booking.driven_adapter.store.booking_document import (
    BookingDocument,
    FavoriteDocument,
    ReviewDocument,
    UserProfileDocument,
    load_booking,
    load_favorite,
    load_review,
    load_user_profile,
)
from cinema_booking.service.booking.driven_adapter.store.change_feed import ChangeFeed


class InMemoryBookingStore(IBookingStore):
    def __init__(self, *, broadcaster: IInMemoryEventBroadcaster) -> None:
        self.feed = ChangeFeed(broadcaster=broadcaster)
        self._bookings: Dict[str, dict] = {}
        self._profiles: Dict[str, dict] = {}
        # user_id -> movie_id -> favorite document, insertion ordered
        self._favorites: Dict[str, Dict[str, dict]] = {}
        # movie_id -> review_id -> review document
        self._reviews: Dict[str, Dict[str, dict]] = {}
        # Serializes the check-then-write of submit and cancel
        self._lock = anyio.Lock()

    def _booked_seats(self, show_id: str) -> Set[str]:
        booked: Set[str] = set()
        for booking_id, raw in self._bookings.items():
            record = load_booking(raw, booking_id=booking_id)
            if record.status == BookingStatus.CONFIRMED and record.show_id == show_id:
                booked.update(record.seats)
        return booked

    @Logger.io
    async def submit_booking(self, *, record: BookingRecord) -> str:
        async with self._lock:
            taken = sorted(self._booked_seats(record.show_id) & set(record.seats))
            if taken:
                raise SeatConflictError(
                    f'Seats already booked: {", ".join(taken)}', seat_ids=taken
                )
            booking_id = str(uuid7())
            self._bookings[booking_id] = BookingDocument.from_record(record).dump()

        await self.feed.publish(
            topic=FeedTopic.BOOKINGS,
            key=record.user_id,
            event_data={
                'event_type': BookingEventType.BOOKING_CREATED,
                'booking_id': booking_id,
                'status': BookingStatus.CONFIRMED,
            },
        )
        return booking_id

    @Logger.io
    async def fetch_booked_seats(self, *, show_id: str) -> Set[str]:
        return self._booked_seats(show_id)

    @Logger.io
    async def fetch_user_bookings(self, *, user_id: str) -> List[BookingRecord]:
        records = [
            load_booking(raw, booking_id=booking_id) for booking_id, raw in self._bookings.items()
        ]
        return [record for record in records if record.user_id == user_id]

    @Logger.io
    async def get_booking(self, *, booking_id: str) -> Optional[BookingRecord]:
        raw = self._bookings.get(booking_id)
        return load_booking(raw, booking_id=booking_id) if raw is not None else None

    @Logger.io
    async def cancel_booking(self, *, booking_id: str) -> BookingRecord:
        async with self._lock:
            raw = self._bookings.get(booking_id)
            if raw is None:
                raise NotFoundError('Booking not found')
            record = load_booking(raw, booking_id=booking_id)
            if record.is_cancelled:
                return record
            record = record.cancel()
            self._bookings[booking_id] = BookingDocument.from_record(record).dump()

        await self.feed.publish(
            topic=FeedTopic.BOOKINGS,
            key=record.user_id,
            event_data={
                'event_type': BookingEventType.BOOKING_CANCELLED,
                'booking_id': booking_id,
                'status': BookingStatus.CANCELLED,
            },
        )
        return record

    @Logger.io
    async def fetch_all_bookings(self) -> List[BookingRecord]:
        records = [
            load_booking(raw, booking_id=booking_id) for booking_id, raw in self._bookings.items()
        ]
        # uuid7 ids are time ordered, so they break createdAt ties deterministically
        return sorted(
            records,
            key=lambda r: (r.created_at.timestamp() if r.created_at else 0.0, r.id or ''),
            reverse=True,
        )

    @Logger.io
    async def fetch_user_profile(self, *, user_id: str) -> Optional[UserProfile]:
        raw = self._profiles.get(user_id)
        return load_user_profile(raw, user_id=user_id) if raw is not None else None

    @Logger.io
    async def save_user_profile(self, *, profile: UserProfile) -> None:
        self._profiles[profile.id] = UserProfileDocument.from_profile(profile).dump()

    @Logger.io
    async def add_favorite(self, *, user_id: str, favorite: FavoriteMovie) -> bool:
        favorites = self._favorites.setdefault(user_id, {})
        if favorite.movie_id in favorites:
            return False
        favorites[favorite.movie_id] = FavoriteDocument.from_favorite(favorite).dump()

        await self.feed.publish(
            topic=FeedTopic.FAVORITES,
            key=user_id,
            event_data={
                'event_type': BookingEventType.FAVORITE_ADDED,
                'movie_id': favorite.movie_id,
            },
        )
        return True

    @Logger.io
    async def remove_favorite(self, *, user_id: str, movie_id: str) -> bool:
        if self._favorites.get(user_id, {}).pop(movie_id, None) is None:
            return False

        await self.feed.publish(
            topic=FeedTopic.FAVORITES,
            key=user_id,
            event_data={'event_type': BookingEventType.FAVORITE_REMOVED, 'movie_id': movie_id},
        )
        return True

    @Logger.io
    async def fetch_favorites(self, *, user_id: str) -> List[FavoriteMovie]:
        return [
            load_favorite(raw, user_id=user_id)
            for raw in self._favorites.get(user_id, {}).values()
        ]

    @Logger.io
    async def submit_review(self, *, review: Review) -> str:
        review_id = str(uuid7())
        self._reviews.setdefault(review.movie_id, {})[review_id] = ReviewDocument.from_review(
            review
        ).dump()

        await self.feed.publish(
            topic=FeedTopic.REVIEWS,
            key=review.movie_id,
            event_data={'event_type': BookingEventType.REVIEW_ADDED, 'review_id': review_id},
        )
        return review_id

    @Logger.io
    async def fetch_movie_reviews(self, *, movie_id: str) -> List[Review]:
        reviews = [
            load_review(raw, review_id=review_id)
            for review_id, raw in self._reviews.get(movie_id, {}).items()
        ]
        return sorted(
            reviews,
            key=lambda r: (r.created_at.timestamp() if r.created_at else 0.0, r.id or ''),
            reverse=True,
        )

    async def subscribe(self, *, topic: FeedTopic, key: str) -> MemoryObjectReceiveStream[dict]:
        return await self.feed.subscribe(topic=topic, key=key)

    async def unsubscribe(
        self, *, topic: FeedTopic, key: str, stream: MemoryObjectReceiveStream[dict]
    ) -> None:
        await self.feed.unsubscribe(topic=topic, key=key, stream=stream)
