"""
Wire Modules Configuration

Modules whose @inject functions resolve Provide[Container.x] markers.
Shared between production and test environments.
"""

from types import ModuleType

from cinema_booking.service.booking.app.command import (
    add_favorite_use_case,
    cancel_booking_use_case,
    remove_favorite_use_case,
    start_booking_session_use_case,
    submit_review_use_case,
)
from cinema_booking.service.booking.app.query import (
    get_admin_stats_use_case,
    get_user_profile_use_case,
    list_favorites_use_case,
    list_movie_reviews_use_case,
    list_my_bookings_use_case,
)
from cinema_booking.service.booking.driving_adapter.http_controller import (
    booking_controller,
    booking_session_controller,
    catalog_controller,
    user_controller,
)
from cinema_booking.service.booking.driving_adapter.http_controller.auth import principal_auth


WIRE_MODULES: list[ModuleType] = [
    start_booking_session_use_case,
    cancel_booking_use_case,
    add_favorite_use_case,
    remove_favorite_use_case,
    submit_review_use_case,
    list_my_bookings_use_case,
    list_favorites_use_case,
    list_movie_reviews_use_case,
    get_admin_stats_use_case,
    get_user_profile_use_case,
    principal_auth,
    booking_session_controller,
    booking_controller,
    catalog_controller,
    user_controller,
]
