from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.interface.i_booking_store import IBookingStore
from cinema_booking.service.booking.domain.value_object.principal import Principal


class RemoveFavoriteUseCase:
    """Removing a movie that is not a favorite is a no-op"""

    def __init__(self, *, booking_store: IBookingStore) -> None:
        self.booking_store = booking_store

    @classmethod
    @inject
    def depends(
        cls, booking_store: IBookingStore = Depends(Provide[Container.booking_store])
    ) -> Self:
        return cls(booking_store=booking_store)

    @Logger.io
    async def execute(self, *, principal: Principal, movie_id: str) -> bool:
        removed = await self.booking_store.remove_favorite(user_id=principal.id, movie_id=movie_id)
        if removed:
            Logger.base.info(f'💔 [FAVORITE] {principal.id} removed movie {movie_id}')
        return removed
