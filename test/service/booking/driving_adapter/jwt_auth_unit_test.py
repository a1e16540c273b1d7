"""
Unit tests for JwtAuth
"""

import jwt
import pytest

from cinema_booking.platform.config.core_setting import settings
from cinema_booking.platform.exception.exceptions import AuthenticationError
from cinema_booking.service.booking.domain.value_object.principal import Principal
from cinema_booking.service.booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


@pytest.fixture
def jwt_auth() -> JwtAuth:
    return JwtAuth()


@pytest.mark.unit
class TestJwtAuth:
    def test_token_round_trip(self, jwt_auth: JwtAuth, principal: Principal) -> None:
        token = jwt_auth.create_jwt_token(principal)

        assert jwt_auth.get_principal_from_jwt(token) == principal

    def test_no_token_is_anonymous(self, jwt_auth: JwtAuth) -> None:
        assert jwt_auth.get_principal_from_jwt(None) is None
        assert jwt_auth.get_principal_from_jwt('') is None

    def test_token_signed_with_other_key_is_rejected(self, jwt_auth: JwtAuth) -> None:
        token = jwt.encode({'sub': 'user-1'}, 'another-secret', algorithm=settings.ALGORITHM)

        with pytest.raises(AuthenticationError, match='Invalid token'):
            jwt_auth.get_principal_from_jwt(token)

    def test_token_without_subject_is_rejected(self, jwt_auth: JwtAuth) -> None:
        token = jwt.encode({'name': 'Nobody'}, jwt_auth.secret, algorithm=jwt_auth.algorithm)

        with pytest.raises(AuthenticationError):
            jwt_auth.get_principal_from_jwt(token)
