"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers

from cinema_booking.platform.config.core_setting import settings
from cinema_booking.platform.event.in_memory_broadcaster import InMemoryEventBroadcasterImpl
from cinema_booking.platform.state.redis_client import redis_client
from cinema_booking.service.booking.app.session.booking_session_registry import (
    BookingSessionRegistry,
)
from cinema_booking.service.booking.driven_adapter.catalog.static_movie_catalog import (
    StaticMovieCatalog,
)
from cinema_booking.service.booking.driven_adapter.store.in_memory_booking_store import (
    InMemoryBookingStore,
)
from cinema_booking.service.booking.driven_adapter.store.redis_booking_store import (
    RedisBookingStore,
)
from cinema_booking.service.booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Booking change feed for SSE (one per process)
    event_broadcaster = providers.Singleton(InMemoryEventBroadcasterImpl)

    movie_catalog = providers.Singleton(StaticMovieCatalog)

    booking_store = providers.Selector(
        providers.Object(settings.BOOKING_STORE_BACKEND),
        memory=providers.Singleton(InMemoryBookingStore, broadcaster=event_broadcaster),
        redis=providers.Singleton(
            RedisBookingStore,
            client=providers.Factory(redis_client.get_client),
            broadcaster=event_broadcaster,
        ),
    )

    session_registry = providers.Singleton(
        BookingSessionRegistry, ttl_minutes=settings.BOOKING_SESSION_TTL_MINUTES
    )

    jwt_auth = providers.Singleton(JwtAuth)


container = Container()
