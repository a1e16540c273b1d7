from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.dto.favorite_entry import FavoriteEntry
from cinema_booking.service.booking.app.interface.i_booking_store import IBookingStore
from cinema_booking.service.booking.app.interface.i_movie_catalog import IMovieCatalog
from cinema_booking.service.booking.domain.value_object.principal import Principal


class ListFavoritesUseCase:
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
    async def execute(self, *, principal: Principal) -> List[FavoriteEntry]:
        favorites = await self.booking_store.fetch_favorites(user_id=principal.id)
        entries: List[FavoriteEntry] = []
        for favorite in favorites:
            movie = self.movie_catalog.get_movie(movie_id=favorite.movie_id)
            # Movies dropped from the catalog disappear from the list
            if movie is not None:
                entries.append(FavoriteEntry(movie=movie, added_at=favorite.added_at))
        return entries
