from fastapi import APIRouter, Depends

from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.query.get_admin_stats_use_case import GetAdminStatsUseCase
from cinema_booking.service.booking.domain.value_object.principal import Principal
from cinema_booking.service.booking.driving_adapter.http_controller.auth.principal_auth import (
    require_principal,
)
from cinema_booking.service.booking.driving_adapter.http_controller.schema.booking_schema import (
    AdminStatsResponse,
)


router = APIRouter()


@router.get('/stats', response_model=AdminStatsResponse)
@Logger.io
async def get_admin_stats(
    principal: Principal = Depends(require_principal),
    use_case: GetAdminStatsUseCase = Depends(GetAdminStatsUseCase.depends),
) -> AdminStatsResponse:
    stats = await use_case.execute(principal=principal)
    return AdminStatsResponse.from_stats(stats)
