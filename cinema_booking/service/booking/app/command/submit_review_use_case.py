from datetime import datetime
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.exception.exceptions import NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.interface.i_booking_store import IBookingStore
from cinema_booking.service.booking.app.interface.i_movie_catalog import IMovieCatalog
from cinema_booking.service.booking.domain.entity.review_entity import Review
from cinema_booking.service.booking.domain.value_object.principal import Principal


class SubmitReviewUseCase:
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
        self,
        *,
        principal: Principal,
        movie_id: str,
        rating: int,
        review: str,
        now: Optional[datetime] = None,
    ) -> Review:
        """
        Raises:
            NotFoundError: Unknown movie
            ValidationError: Empty text or rating outside 1-5 stars
        """
        with self.tracer.start_as_current_span(
            'use_case.submit_review', attributes={'movie.id': movie_id}
        ):
            if self.movie_catalog.get_movie(movie_id=movie_id) is None:
                raise NotFoundError('Movie not found')

            new_review = Review.create(
                movie_id=movie_id,
                user_id=principal.id,
                user_name=principal.display_name,
                rating=rating,
                review=review,
                now=now,
            )
            new_review.id = await self.booking_store.submit_review(review=new_review)
            Logger.base.info(
                f'⭐ [REVIEW] {principal.id} rated movie {movie_id} {rating}/5 ({new_review.id})'
            )
            return new_review
