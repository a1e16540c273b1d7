from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.exception.exceptions import AuthenticationRequiredError
from cinema_booking.service.booking.domain.value_object.principal import Principal
from cinema_booking.service.booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> Optional[Principal]:
    token = credentials.credentials if credentials else None
    return jwt_auth.get_principal_from_jwt(token)


async def require_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_principal', attributes={'user.id': principal.id if principal else ''}
    ):
        if principal is None:
            raise AuthenticationRequiredError('Not authenticated')
        return principal
