"""
FastAPI App Factory

Common app setup shared by the production entrypoint and the test client.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cinema_booking.platform.config.core_setting import settings
from cinema_booking.platform.config.di import container
from cinema_booking.platform.config.wire_modules import WIRE_MODULES
from cinema_booking.platform.exception.exception_handlers import register_exception_handlers
from cinema_booking.platform.observability.tracing import TracingConfig
from cinema_booking.service.booking.driving_adapter.http_controller.admin_controller import (
    router as admin_router,
)
from cinema_booking.service.booking.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from cinema_booking.service.booking.driving_adapter.http_controller.booking_session_controller import (
    router as booking_session_router,
)
from cinema_booking.service.booking.driving_adapter.http_controller.catalog_controller import (
    router as catalog_router,
)
from cinema_booking.service.booking.driving_adapter.http_controller.user_controller import (
    router as user_router,
)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]] | None = None,
    title_suffix: str = '',
    service_name: str = 'cinema-booking',
) -> FastAPI:
    """
    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        title_suffix: Optional suffix for app title (e.g., " (Test)")
        service_name: Service name for tracing
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description='Movie ticket browsing and booking',
        version=settings.VERSION,
        lifespan=lifespan,
    )

    container.wire(modules=WIRE_MODULES)
    app.state.container = container

    # Auto-instrument FastAPI (must be done before mounting routes)
    TracingConfig(service_name=service_name).instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    app.include_router(catalog_router, prefix='/api/catalog', tags=['catalog'])
    app.include_router(booking_session_router, prefix='/api/booking/session', tags=['booking'])
    app.include_router(booking_router, prefix='/api/booking', tags=['booking'])
    app.include_router(admin_router, prefix='/api/admin', tags=['admin'])
    app.include_router(user_router, prefix='/api/user', tags=['user'])

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    @app.get('/health')
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {'status': 'healthy', 'service': settings.PROJECT_NAME}
