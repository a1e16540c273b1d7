from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.interface.i_booking_store import IBookingStore
from cinema_booking.service.booking.domain.entity.user_profile_entity import UserProfile
from cinema_booking.service.booking.domain.value_object.principal import Principal


class GetUserProfileUseCase:
    """Caller's profile; the first call creates it with the plain user role"""

    def __init__(self, *, booking_store: IBookingStore) -> None:
        self.booking_store = booking_store

    @classmethod
    @inject
    def depends(
        cls, booking_store: IBookingStore = Depends(Provide[Container.booking_store])
    ) -> Self:
        return cls(booking_store=booking_store)

    @Logger.io
    async def execute(self, *, principal: Principal) -> UserProfile:
        profile = await self.booking_store.fetch_user_profile(user_id=principal.id)
        if profile is not None:
            return profile

        profile = UserProfile.create(
            id=principal.id, name=principal.display_name, email=principal.email
        )
        await self.booking_store.save_user_profile(profile=profile)
        Logger.base.info(f'👤 [PROFILE] Created profile for user {principal.id}')
        return profile
