from enum import StrEnum


class FeedTopic(StrEnum):
    """Change feeds a client can follow; each is keyed by a user or movie id"""

    BOOKINGS = 'bookings'  # keyed by user id
    FAVORITES = 'favorites'  # keyed by user id
    REVIEWS = 'reviews'  # keyed by movie id

    def channel(self, key: str) -> str:
        return f'{self.value}:{key}'
