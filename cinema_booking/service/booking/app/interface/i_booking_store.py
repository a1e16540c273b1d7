from abc import ABC, abstractmethod
from typing import List, Optional, Set

from anyio.streams.memory import MemoryObjectReceiveStream

from cinema_booking.service.booking.domain.entity.booking_record_entity import BookingRecord
from cinema_booking.service.booking.domain.entity.review_entity import Review
from cinema_booking.service.booking.domain.entity.user_profile_entity import UserProfile
from cinema_booking.service.booking.domain.enum.feed_topic import FeedTopic
from cinema_booking.service.booking.domain.value_object.favorite_movie import FavoriteMovie


class IBookingStore(ABC):
    """Persistence and change feeds for bookings, user profiles, favorites and reviews"""

    @abstractmethod
    async def submit_booking(self, *, record: BookingRecord) -> str:
        """
        Persist a new booking and return its id.

        Raises:
            SeatConflictError: When any seat of the record is already booked for the show
        """
        pass

    @abstractmethod
    async def fetch_booked_seats(self, *, show_id: str) -> Set[str]:
        """Seat labels held by confirmed bookings of one screening"""
        pass

    @abstractmethod
    async def fetch_user_bookings(self, *, user_id: str) -> List[BookingRecord]:
        pass

    @abstractmethod
    async def get_booking(self, *, booking_id: str) -> Optional[BookingRecord]:
        pass

    @abstractmethod
    async def cancel_booking(self, *, booking_id: str) -> BookingRecord:
        """
        Mark the booking cancelled and release its seats.

        Repeat calls return the cancelled record without releasing or publishing again.

        Raises:
            NotFoundError: Unknown booking
        """
        pass

    @abstractmethod
    async def fetch_all_bookings(self) -> List[BookingRecord]:
        """Every booking, newest first"""
        pass

    @abstractmethod
    async def fetch_user_profile(self, *, user_id: str) -> Optional[UserProfile]:
        pass

    @abstractmethod
    async def save_user_profile(self, *, profile: UserProfile) -> None:
        pass

    @abstractmethod
    async def add_favorite(self, *, user_id: str, favorite: FavoriteMovie) -> bool:
        """
        Returns:
            False when the movie was already a favorite; its original added_at is kept
        """
        pass

    @abstractmethod
    async def remove_favorite(self, *, user_id: str, movie_id: str) -> bool:
        """
        Returns:
            False when the movie was not a favorite
        """
        pass

    @abstractmethod
    async def fetch_favorites(self, *, user_id: str) -> List[FavoriteMovie]:
        """Favorites in the order they were added"""
        pass

    @abstractmethod
    async def submit_review(self, *, review: Review) -> str:
        """Persist a review and return its id"""
        pass

    @abstractmethod
    async def fetch_movie_reviews(self, *, movie_id: str) -> List[Review]:
        """Reviews of one movie, newest first"""
        pass

    @abstractmethod
    async def subscribe(self, *, topic: FeedTopic, key: str) -> MemoryObjectReceiveStream[dict]:
        """
        Change feed of one topic: a user's bookings or favorites, or a movie's reviews
        """
        pass

    @abstractmethod
    async def unsubscribe(
        self, *, topic: FeedTopic, key: str, stream: MemoryObjectReceiveStream[dict]
    ) -> None:
        pass
