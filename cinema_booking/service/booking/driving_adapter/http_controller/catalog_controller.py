from typing import List, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status
from sse_starlette.sse import EventSourceResponse

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.exception.exceptions import NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.command.submit_review_use_case import (
    SubmitReviewUseCase,
)
from cinema_booking.service.booking.app.interface.i_booking_store import IBookingStore
from cinema_booking.service.booking.app.interface.i_movie_catalog import IMovieCatalog
from cinema_booking.service.booking.app.query.list_movie_reviews_use_case import (
    ListMovieReviewsUseCase,
)
from cinema_booking.service.booking.domain.enum.feed_topic import FeedTopic
from cinema_booking.service.booking.domain.value_object.principal import Principal
from cinema_booking.service.booking.driving_adapter.http_controller.auth.principal_auth import (
    require_principal,
)
from cinema_booking.service.booking.driving_adapter.http_controller.schema.catalog_schema import (
    MovieResponse,
    MovieReviewsResponse,
    MovieShowsResponse,
    ReviewResponse,
    SubmitReviewRequest,
    TheatreResponse,
    TheatreShowTimesResponse,
)
from cinema_booking.service.booking.driving_adapter.http_controller.sse_feed import snapshot_feed


router = APIRouter()


@router.get('/movies', response_model=List[MovieResponse])
@Logger.io
@inject
async def list_movies(
    movie_status: Optional[str] = None,
    catalog: IMovieCatalog = Depends(Provide[Container.movie_catalog]),
) -> List[MovieResponse]:
    return [MovieResponse.from_movie(m) for m in catalog.list_movies(status=movie_status)]


@router.get('/movies/{movie_id}', response_model=MovieResponse)
@Logger.io
@inject
async def get_movie(
    movie_id: str,
    catalog: IMovieCatalog = Depends(Provide[Container.movie_catalog]),
) -> MovieResponse:
    movie = catalog.get_movie(movie_id=movie_id)
    if movie is None:
        raise NotFoundError('Movie not found')
    return MovieResponse.from_movie(movie)


@router.get('/movies/{movie_id}/shows', response_model=MovieShowsResponse)
@Logger.io
@inject
async def list_movie_shows(
    movie_id: str,
    catalog: IMovieCatalog = Depends(Provide[Container.movie_catalog]),
) -> MovieShowsResponse:
    if catalog.get_movie(movie_id=movie_id) is None:
        raise NotFoundError('Movie not found')
    return MovieShowsResponse(
        movie_id=movie_id,
        dates=catalog.available_dates(),
        theatres=[
            TheatreShowTimesResponse(
                theatre=TheatreResponse.from_theatre(theatre),
                times=catalog.show_times(movie_id=movie_id, theatre_id=theatre.id),
            )
            for theatre in catalog.theatres_for_movie(movie_id=movie_id)
        ],
    )


@router.get('/theatres', response_model=List[TheatreResponse])
@Logger.io
@inject
async def list_theatres(
    catalog: IMovieCatalog = Depends(Provide[Container.movie_catalog]),
) -> List[TheatreResponse]:
    return [TheatreResponse.from_theatre(t) for t in catalog.list_theatres()]


@router.get('/movies/{movie_id}/reviews', response_model=MovieReviewsResponse)
@Logger.io
async def list_movie_reviews(
    movie_id: str,
    use_case: ListMovieReviewsUseCase = Depends(ListMovieReviewsUseCase.depends),
) -> MovieReviewsResponse:
    reviews = await use_case.execute(movie_id=movie_id)
    return MovieReviewsResponse(
        movie_id=movie_id, reviews=[ReviewResponse.from_review(r) for r in reviews]
    )


@router.post(
    '/movies/{movie_id}/reviews',
    status_code=status.HTTP_201_CREATED,
    response_model=ReviewResponse,
)
@Logger.io
async def submit_review(
    movie_id: str,
    request: SubmitReviewRequest,
    principal: Principal = Depends(require_principal),
    use_case: SubmitReviewUseCase = Depends(SubmitReviewUseCase.depends),
) -> ReviewResponse:
    review = await use_case.execute(
        principal=principal, movie_id=movie_id, rating=request.rating, review=request.review
    )
    return ReviewResponse.from_review(review)


@router.get('/movies/{movie_id}/reviews/sse', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def stream_movie_reviews(
    movie_id: str,
    use_case: ListMovieReviewsUseCase = Depends(ListMovieReviewsUseCase.depends),
    booking_store: IBookingStore = Depends(Provide[Container.booking_store]),
) -> EventSourceResponse:
    """Public feed; the movie is checked up front so unknown ids fail before streaming"""
    await use_case.execute(movie_id=movie_id)

    async def reviews_snapshot() -> dict:
        reviews = await use_case.execute(movie_id=movie_id)
        return MovieReviewsResponse(
            movie_id=movie_id, reviews=[ReviewResponse.from_review(r) for r in reviews]
        ).model_dump(mode='json')

    return snapshot_feed(
        booking_store=booking_store,
        topic=FeedTopic.REVIEWS,
        key=movie_id,
        snapshot=reviews_snapshot,
    )
