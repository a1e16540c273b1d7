from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status
from sse_starlette.sse import EventSourceResponse

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.command.add_favorite_use_case import AddFavoriteUseCase
from cinema_booking.service.booking.app.command.remove_favorite_use_case import (
    RemoveFavoriteUseCase,
)
from cinema_booking.service.booking.app.interface.i_booking_store import IBookingStore
from cinema_booking.service.booking.app.query.get_user_profile_use_case import (
    GetUserProfileUseCase,
)
from cinema_booking.service.booking.app.query.list_favorites_use_case import (
    ListFavoritesUseCase,
)
from cinema_booking.service.booking.domain.enum.feed_topic import FeedTopic
from cinema_booking.service.booking.domain.value_object.principal import Principal
from cinema_booking.service.booking.driving_adapter.http_controller.auth.principal_auth import (
    require_principal,
)
from cinema_booking.service.booking.driving_adapter.http_controller.schema.user_schema import (
    FavoritesResponse,
    UserProfileResponse,
)
from cinema_booking.service.booking.driving_adapter.http_controller.sse_feed import snapshot_feed


router = APIRouter()


@router.get('/me', response_model=UserProfileResponse)
@Logger.io
async def get_my_profile(
    principal: Principal = Depends(require_principal),
    use_case: GetUserProfileUseCase = Depends(GetUserProfileUseCase.depends),
) -> UserProfileResponse:
    profile = await use_case.execute(principal=principal)
    return UserProfileResponse(
        id=profile.id,
        name=profile.name,
        email=profile.email,
        role=profile.role.value,
        created_at=profile.created_at,
    )


@router.get('/me/favorites', response_model=FavoritesResponse)
@Logger.io
async def list_my_favorites(
    principal: Principal = Depends(require_principal),
    list_favorites: ListFavoritesUseCase = Depends(ListFavoritesUseCase.depends),
) -> FavoritesResponse:
    return FavoritesResponse.from_entries(await list_favorites.execute(principal=principal))


@router.get('/me/favorites/sse', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def stream_my_favorites(
    principal: Principal = Depends(require_principal),
    list_favorites: ListFavoritesUseCase = Depends(ListFavoritesUseCase.depends),
    booking_store: IBookingStore = Depends(Provide[Container.booking_store]),
) -> EventSourceResponse:
    async def favorites_snapshot() -> dict:
        entries = await list_favorites.execute(principal=principal)
        return FavoritesResponse.from_entries(entries).model_dump(mode='json')

    return snapshot_feed(
        booking_store=booking_store,
        topic=FeedTopic.FAVORITES,
        key=principal.id,
        snapshot=favorites_snapshot,
    )


@router.put('/me/favorites/{movie_id}', response_model=FavoritesResponse)
@Logger.io
async def add_favorite(
    movie_id: str,
    principal: Principal = Depends(require_principal),
    use_case: AddFavoriteUseCase = Depends(AddFavoriteUseCase.depends),
    list_favorites: ListFavoritesUseCase = Depends(ListFavoritesUseCase.depends),
) -> FavoritesResponse:
    """Idempotent; a movie already in favorites keeps its original position"""
    await use_case.execute(principal=principal, movie_id=movie_id)
    return FavoritesResponse.from_entries(await list_favorites.execute(principal=principal))


@router.delete('/me/favorites/{movie_id}', response_model=FavoritesResponse)
@Logger.io
async def remove_favorite(
    movie_id: str,
    principal: Principal = Depends(require_principal),
    use_case: RemoveFavoriteUseCase = Depends(RemoveFavoriteUseCase.depends),
    list_favorites: ListFavoritesUseCase = Depends(ListFavoritesUseCase.depends),
) -> FavoritesResponse:
    await use_case.execute(principal=principal, movie_id=movie_id)
    return FavoritesResponse.from_entries(await list_favorites.execute(principal=principal))
