from contextlib import asynccontextmanager

from fastapi import FastAPI

from cinema_booking.platform.app_factory import create_app
from cinema_booking.platform.config.core_setting import settings
from cinema_booking.platform.config.di import container
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.platform.observability.tracing import TracingConfig
from cinema_booking.platform.state.redis_client import redis_client


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifespan: startup and shutdown"""
    Logger.base.info('🚀 [Cinema Booking] Starting up...')

    tracing = TracingConfig(service_name='cinema-booking')
    tracing.setup()

    if settings.BOOKING_STORE_BACKEND == 'redis':
        await redis_client.initialize()
        tracing.instrument_redis()
    Logger.base.info(f'💾 [Cinema Booking] Booking store backend: {settings.BOOKING_STORE_BACKEND}')

    # Fail fast on a broken catalog file
    container.movie_catalog()

    yield

    Logger.base.info('🛑 [Cinema Booking] Shutting down...')
    await redis_client.disconnect()
    container.reset_singletons()
    tracing.shutdown()


app = create_app(lifespan=lifespan)
