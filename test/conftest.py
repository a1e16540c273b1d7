"""
Test Configuration and Fixtures

This module provides:
- Early environment setup (log dir, in-memory store backend)
- Shared domain builders: principals, screenings, booking records
- A FastAPI TestClient whose container points at a fresh in-memory store

Architecture:
- Unit tests (test/service/**/*_unit_test.py): build objects directly, no app
- Controller tests: use the `client` fixture; no Redis needed
- Redis integration tests: use `redis_test_client`; skipped when no server answers
"""

# =============================================================================
# Environment setup MUST happen before any application import, since
# settings and the loguru sinks are created at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['BOOKING_STORE_BACKEND'] = 'memory'
    os.environ['SEAT_ROWS'] = 'A,B,C,D,E,F,G,H'
    os.environ['SEATS_PER_ROW'] = '10'
    os.environ.setdefault('SECRET_KEY', 'test_secret_key_change_in_production')
    os.environ.setdefault('REDIS_TEST_KEY_PREFIX', 'test_cinema_')


_early_setup_test_environment()


from collections.abc import AsyncGenerator, Generator  # noqa: E402
from datetime import datetime, timezone  # noqa: E402
from typing import Any, Callable  # noqa: E402

from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from redis.asyncio import Redis as AsyncRedis  # noqa: E402
from redis.exceptions import ConnectionError as RedisConnectionError  # noqa: E402
from redis.exceptions import TimeoutError as RedisTimeoutError  # noqa: E402

from cinema_booking.platform.app_factory import create_app  # noqa: E402
from cinema_booking.platform.config.core_setting import settings  # noqa: E402
from cinema_booking.platform.config.di import container  # noqa: E402
from cinema_booking.platform.event.in_memory_broadcaster import (  # noqa: E402
    InMemoryEventBroadcasterImpl,
)
from cinema_booking.service.booking.app.session.booking_session_registry import (  # noqa: E402
    BookingSessionRegistry,
)
from cinema_booking.service.booking.domain.entity.booking_record_entity import (  # noqa: E402
    BookingRecord,
)
from cinema_booking.service.booking.domain.entity.movie_entity import Movie, Theatre  # noqa: E402
from cinema_booking.service.booking.domain.value_object.principal import Principal  # noqa: E402
from cinema_booking.service.booking.domain.value_object.show_context import (  # noqa: E402
    ShowContext,
)
from cinema_booking.service.booking.driven_adapter.store.in_memory_booking_store import (  # noqa: E402
    InMemoryBookingStore,
)
from cinema_booking.service.booking.driving_adapter.http_controller.auth.jwt_auth import (  # noqa: E402
    JwtAuth,
)


# =============================================================================
# Domain builders
# =============================================================================
@pytest.fixture
def principal() -> Principal:
    return Principal(id='user-1', display_name='Ada Lovelace', email='ada@example.com')


@pytest.fixture
def other_principal() -> Principal:
    return Principal(id='user-2', display_name='Alan Turing', email='alan@example.com')


@pytest.fixture
def movie() -> Movie:
    return Movie(
        id='movie_1',
        title='Inception',
        year=2010,
        rating=8.8,
        synopsis='Dreams within dreams.',
        duration=148,
        status='now_showing',
        image='https://example.com/inception.jpg',
        poster='https://example.com/inception-poster.jpg',
        genre=['Sci-Fi', 'Thriller'],
        languages=['English'],
    )


@pytest.fixture
def theatre() -> Theatre:
    return Theatre(id='theatre_1', name='Grand Cinema', location='Downtown')


@pytest.fixture
def show(movie: Movie, theatre: Theatre) -> ShowContext:
    return ShowContext(
        movie_id=movie.id,
        theatre_id=theatre.id,
        date='2099-01-10',
        time='18:45',
        movie=movie,
        theatre=theatre,
    )


@pytest.fixture
def make_record() -> Callable[..., BookingRecord]:
    """Factory for stored booking records with sensible defaults"""

    def _make(**overrides: Any) -> BookingRecord:
        fields: dict[str, Any] = {
            'movie_id': 'movie_1',
            'movie_title': 'Inception',
            'movie_poster': 'https://example.com/inception-poster.jpg',
            'theatre_id': 'theatre_1',
            'theatre_name': 'Grand Cinema',
            'date': '2099-01-10',
            'time': '18:45',
            'seats': ['A1', 'D3'],
            'seat_types': ['VIP', 'STANDARD'],
            'total_price': 400,
            'user_id': 'user-1',
            'user_email': 'ada@example.com',
            'user_name': 'Ada Lovelace',
            'user_phone': '+44 20 7946 0958',
            'created_at': datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return BookingRecord(**fields)

    return _make


# =============================================================================
# App fixtures
# =============================================================================
@pytest.fixture
def broadcaster() -> InMemoryEventBroadcasterImpl:
    return InMemoryEventBroadcasterImpl()


@pytest.fixture
def booking_store(broadcaster: InMemoryEventBroadcasterImpl) -> InMemoryBookingStore:
    return InMemoryBookingStore(broadcaster=broadcaster)


@pytest.fixture
def session_registry() -> BookingSessionRegistry:
    return BookingSessionRegistry(ttl_minutes=30)


@pytest.fixture
def client(
    booking_store: InMemoryBookingStore, session_registry: BookingSessionRegistry
) -> Generator[TestClient, None, None]:
    """TestClient over a fresh store and session registry; no lifespan, no Redis"""
    app = create_app(title_suffix=' (Test)')
    with (
        container.booking_store.override(providers.Object(booking_store)),
        container.session_registry.override(providers.Object(session_registry)),
    ):
        with TestClient(app) as test_client:
            yield test_client


@pytest.fixture
def auth_headers() -> Callable[[Principal], dict[str, str]]:
    jwt_auth = JwtAuth()

    def _headers(principal: Principal) -> dict[str, str]:
        return {'Authorization': f'Bearer {jwt_auth.create_jwt_token(principal)}'}

    return _headers


# =============================================================================
# Redis integration fixtures
# =============================================================================
REDIS_TEST_KEY_PREFIX = os.environ['REDIS_TEST_KEY_PREFIX']


async def _delete_test_keys(client: AsyncRedis) -> None:
    keys: list[str] = await client.keys(f'{REDIS_TEST_KEY_PREFIX}*')
    if keys:
        await client.delete(*keys)


@pytest_asyncio.fixture
async def redis_test_client() -> AsyncGenerator[AsyncRedis, None]:
    """
    Client bound to the current test's event loop, with the test key prefix
    wiped before and after. Skips the test when Redis is not reachable.
    """
    client = AsyncRedis.from_url(
        f'redis://{settings.REDIS_HOST}:{settings.REDIS_PORT}/{settings.REDIS_DB}',
        password=settings.REDIS_PASSWORD or None,
        decode_responses=True,
        socket_connect_timeout=2,
    )
    try:
        await client.ping()
    except (RedisConnectionError, RedisTimeoutError):
        await client.aclose()
        pytest.skip(f'Redis not reachable at {settings.REDIS_HOST}:{settings.REDIS_PORT}')

    await _delete_test_keys(client)
    yield client
    await _delete_test_keys(client)
    await client.aclose()
