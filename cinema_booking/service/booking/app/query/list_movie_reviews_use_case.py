from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.exception.exceptions import NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.interface.i_booking_store import IBookingStore
from cinema_booking.service.booking.app.interface.i_movie_catalog import IMovieCatalog
from cinema_booking.service.booking.domain.entity.review_entity import Review


class ListMovieReviewsUseCase:
    def __init__(self, *, booking_store: IBookingStore, movie_catalog: IMovieCatalog) -> None:
        self.booking_store = booking_store
        self.movie_catalog = movie_catalog

    @classmethod
    @inject
    def depends(
        cls,
        booking_store: IBookingStore = Depends(Provide[Container.booking_store]),
        movie_catalog: IMovieCatalog = Depends(Provide[Container.movie_catalog]),
    ) -> Self:
        return cls(booking_store=booking_store, movie_catalog=movie_catalog)

    @Logger.io
    async def execute(self, *, movie_id: str) -> List[Review]:
        """Newest first"""
        if self.movie_catalog.get_movie(movie_id=movie_id) is None:
            raise NotFoundError('Movie not found')
        return await self.booking_store.fetch_movie_reviews(movie_id=movie_id)
