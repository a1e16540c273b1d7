from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.exception.exceptions import NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.interface.i_booking_store import IBookingStore
from cinema_booking.service.booking.app.interface.i_movie_catalog import IMovieCatalog
from cinema_booking.service.booking.domain.value_object.favorite_movie import FavoriteMovie
from cinema_booking.service.booking.domain.value_object.principal import Principal


class AddFavoriteUseCase:
    def __init__(self, *, booking_store: IBookingStore, movie_catalog: IMovieCatalog) -> None:
        self.booking_store = booking_store
        self.movie_catalog = movie_catalog
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_store: IBookingStore = Depends(Provide[Container.booking_store]),
        movie_catalog: IMovieCatalog = Depends(Provide[Container.movie_catalog]),
    ) -> Self:
        return cls(booking_store=booking_store, movie_catalog=movie_catalog)

    @Logger.io
    async def execute(
        self, *, principal: Principal, movie_id: str, now: Optional[datetime] = None
    ) -> bool:
        """
        Returns:
            False when the movie was already a favorite

        Raises:
            NotFoundError: Unknown movie
        """
        with self.tracer.start_as_current_span(
            'use_case.add_favorite', attributes={'movie.id': movie_id}
        ):
            if self.movie_catalog.get_movie(movie_id=movie_id) is None:
                raise NotFoundError('Movie not found')

            added = await self.booking_store.add_favorite(
                user_id=principal.id,
                favorite=FavoriteMovie(movie_id=movie_id, added_at=now or datetime.now(timezone.utc)),
            )
            if added:
                Logger.base.info(f'❤️ [FAVORITE] {principal.id} added movie {movie_id}')
            return added
