from enum import StrEnum


class BookingEventType(StrEnum):
    """Events pushed to change-feed streams"""

    INITIAL_LIST = 'initial_list'
    BOOKING_CREATED = 'booking_created'
    BOOKING_CANCELLED = 'booking_cancelled'
    FAVORITE_ADDED = 'favorite_added'
    FAVORITE_REMOVED = 'favorite_removed'
    REVIEW_ADDED = 'review_added'
