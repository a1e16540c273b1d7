"""
Redis Booking Store

Key layout (all under REDIS_KEY_PREFIX):
    booking:{id}                JSON booking document
    user_bookings:{user_id}     set of booking ids
    bookings:by_created         sorted set of booking ids scored by createdAt
    show_seats:{show_id}        set of seat labels held by confirmed bookings
    user_profile:{user_id}      JSON profile document
    user_favorites:{user_id}    hash of movie id -> favorite JSON
    review:{id}                 JSON review document
    movie_reviews:{movie_id}    sorted set of review ids scored by createdAt

Seat claims and cancellations run as Lua scripts so the check and the write
cannot interleave with another submission for the same screening.
"""

from typing import Any, List, Optional, Set

import orjson
from anyio.streams.memory import MemoryObjectReceiveStream
from opentelemetry import trace
from redis.asyncio import Redis
from uuid_utils import uuid7

from cinema_booking.platform.config.core_setting import settings
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
from cinema_booking.service.booking.driven_adapter.store.lua_script import (
    CANCEL_BOOKING_SCRIPT,
    SUBMIT_BOOKING_SCRIPT,
)


CANCEL_NOT_FOUND = 0
CANCEL_APPLIED = 1
CANCEL_ALREADY_CANCELLED = 2


def _decode(value: Any) -> str:
    return value.decode() if isinstance(value, bytes) else value


class RedisBookingStore(IBookingStore):
    def __init__(
        self,
        *,
        client: Redis,
        broadcaster: IInMemoryEventBroadcaster,
        key_prefix: Optional[str] = None,
    ) -> None:
        self.client = client
        self.feed = ChangeFeed(broadcaster=broadcaster)
        self.key_prefix = settings.REDIS_KEY_PREFIX if key_prefix is None else key_prefix
        self._submit_script = client.register_script(SUBMIT_BOOKING_SCRIPT)
        self._cancel_script = client.register_script(CANCEL_BOOKING_SCRIPT)
        self.tracer = trace.get_tracer(__name__)

    def _booking_key(self, booking_id: str) -> str:
        return f'{self.key_prefix}booking:{booking_id}'

    def _user_bookings_key(self, user_id: str) -> str:
        return f'{self.key_prefix}user_bookings:{user_id}'

    def _created_index_key(self) -> str:
        return f'{self.key_prefix}bookings:by_created'

    def _show_seats_key(self, show_id: str) -> str:
        return f'{self.key_prefix}show_seats:{show_id}'

    def _profile_key(self, user_id: str) -> str:
        return f'{self.key_prefix}user_profile:{user_id}'

    def _favorites_key(self, user_id: str) -> str:
        return f'{self.key_prefix}user_favorites:{user_id}'

    def _review_key(self, review_id: str) -> str:
        return f'{self.key_prefix}review:{review_id}'

    def _movie_reviews_key(self, movie_id: str) -> str:
        return f'{self.key_prefix}movie_reviews:{movie_id}'

    async def _load_many(self, booking_ids: List[str]) -> List[BookingRecord]:
        if not booking_ids:
            return []
        raws: List[Any] = await self.client.mget([self._booking_key(bid) for bid in booking_ids])
        return [
            load_booking(raw, booking_id=booking_id)
            for booking_id, raw in zip(booking_ids, raws)
            if raw is not None
        ]

    @Logger.io
    async def submit_booking(self, *, record: BookingRecord) -> str:
        with self.tracer.start_as_current_span(
            'redis_store.submit_booking', attributes={'show.id': record.show_id}
        ):
            booking_id = str(uuid7())
            payload = orjson.dumps(BookingDocument.from_record(record).dump()).decode()
            score = record.created_at.timestamp() if record.created_at else 0.0

            taken = await self._submit_script(
                keys=[
                    self._show_seats_key(record.show_id),
                    self._booking_key(booking_id),
                    self._user_bookings_key(record.user_id),
                    self._created_index_key(),
                ],
                args=[payload, booking_id, score, *record.seats],
            )
            if taken:
                seat_ids = sorted(_decode(s) for s in taken)
                raise SeatConflictError(
                    f'Seats already booked: {", ".join(seat_ids)}', seat_ids=seat_ids
                )

        Logger.base.info(f'🎫 [REDIS] Booking {booking_id} stored for show {record.show_id}')
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
        members = await self.client.smembers(self._show_seats_key(show_id))
        return {_decode(m) for m in members}

    @Logger.io
    async def fetch_user_bookings(self, *, user_id: str) -> List[BookingRecord]:
        booking_ids = await self.client.smembers(self._user_bookings_key(user_id))
        records = await self._load_many(sorted(_decode(bid) for bid in booking_ids))
        return [record for record in records if record.user_id == user_id]

    @Logger.io
    async def get_booking(self, *, booking_id: str) -> Optional[BookingRecord]:
        raw = await self.client.get(self._booking_key(booking_id))
        return load_booking(raw, booking_id=booking_id) if raw is not None else None

    @Logger.io
    async def cancel_booking(self, *, booking_id: str) -> BookingRecord:
        record = await self.get_booking(booking_id=booking_id)
        if record is None:
            raise NotFoundError('Booking not found')
        if record.is_cancelled:
            return record

        record = record.cancel()
        payload = orjson.dumps(BookingDocument.from_record(record).dump()).decode()
        outcome = int(
            await self._cancel_script(
                keys=[self._booking_key(booking_id), self._show_seats_key(record.show_id)],
                args=[payload],
            )
        )
        if outcome == CANCEL_NOT_FOUND:
            raise NotFoundError('Booking not found')
        if outcome == CANCEL_ALREADY_CANCELLED:
            # Lost the race to a concurrent cancel, which already released the seats
            return record

        Logger.base.info(f'🚫 [REDIS] Booking {booking_id} cancelled, seats released')
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
        booking_ids = await self.client.zrevrange(self._created_index_key(), 0, -1)
        return await self._load_many([_decode(bid) for bid in booking_ids])

    @Logger.io
    async def fetch_user_profile(self, *, user_id: str) -> Optional[UserProfile]:
        raw = await self.client.get(self._profile_key(user_id))
        return load_user_profile(raw, user_id=user_id) if raw is not None else None

    @Logger.io
    async def save_user_profile(self, *, profile: UserProfile) -> None:
        payload = orjson.dumps(UserProfileDocument.from_profile(profile).dump()).decode()
        await self.client.set(self._profile_key(profile.id), payload)

    @Logger.io
    async def add_favorite(self, *, user_id: str, favorite: FavoriteMovie) -> bool:
        payload = orjson.dumps(FavoriteDocument.from_favorite(favorite).dump()).decode()
        # HSETNX keeps the original addedAt when the movie is already a favorite
        added = bool(
            await self.client.hsetnx(self._favorites_key(user_id), favorite.movie_id, payload)
        )
        if added:
            await self.feed.publish(
                topic=FeedTopic.FAVORITES,
                key=user_id,
                event_data={
                    'event_type': BookingEventType.FAVORITE_ADDED,
                    'movie_id': favorite.movie_id,
                },
            )
        return added

    @Logger.io
    async def remove_favorite(self, *, user_id: str, movie_id: str) -> bool:
        removed = bool(await self.client.hdel(self._favorites_key(user_id), movie_id))
        if removed:
            await self.feed.publish(
                topic=FeedTopic.FAVORITES,
                key=user_id,
                event_data={
                    'event_type': BookingEventType.FAVORITE_REMOVED,
                    'movie_id': movie_id,
                },
            )
        return removed

    @Logger.io
    async def fetch_favorites(self, *, user_id: str) -> List[FavoriteMovie]:
        raws = await self.client.hgetall(self._favorites_key(user_id))
        favorites = [load_favorite(raw, user_id=user_id) for raw in raws.values()]
        # Hash field order is not stable once Redis converts the encoding
        return sorted(favorites, key=lambda f: (f.added_at, f.movie_id))

    @Logger.io
    async def submit_review(self, *, review: Review) -> str:
        with self.tracer.start_as_current_span(
            'redis_store.submit_review', attributes={'movie.id': review.movie_id}
        ):
            review_id = str(uuid7())
            payload = orjson.dumps(ReviewDocument.from_review(review).dump()).decode()
            score = review.created_at.timestamp() if review.created_at else 0.0

            async with self.client.pipeline(transaction=True) as pipe:
                pipe.set(self._review_key(review_id), payload)
                pipe.zadd(self._movie_reviews_key(review.movie_id), {review_id: score})
                await pipe.execute()

        Logger.base.info(f'⭐ [REDIS] Review {review_id} stored for movie {review.movie_id}')
        await self.feed.publish(
            topic=FeedTopic.REVIEWS,
            key=review.movie_id,
            event_data={'event_type': BookingEventType.REVIEW_ADDED, 'review_id': review_id},
        )
        return review_id

    @Logger.io
    async def fetch_movie_reviews(self, *, movie_id: str) -> List[Review]:
        review_ids = [
            _decode(rid)
            for rid in await self.client.zrevrange(self._movie_reviews_key(movie_id), 0, -1)
        ]
        if not review_ids:
            return []
        raws: List[Any] = await self.client.mget([self._review_key(rid) for rid in review_ids])
        return [
            load_review(raw, review_id=review_id)
            for review_id, raw in zip(review_ids, raws)
            if raw is not None
        ]

    async def subscribe(self, *, topic: FeedTopic, key: str) -> MemoryObjectReceiveStream[dict]:
        return await self.feed.subscribe(topic=topic, key=key)

    async def unsubscribe(
        self, *, topic: FeedTopic, key: str, stream: MemoryObjectReceiveStream[dict]
    ) -> None:
        await self.feed.unsubscribe(topic=topic, key=key, stream=stream)
