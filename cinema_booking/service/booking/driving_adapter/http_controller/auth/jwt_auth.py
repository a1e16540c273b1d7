"""
Bearer token authentication.

Tokens are minted by the identity provider with the shared SECRET_KEY; this
service only verifies them and rebuilds the Principal from the claims.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt

from cinema_booking.platform.config.core_setting import settings
from cinema_booking.platform.exception.exceptions import AuthenticationError
from cinema_booking.service.booking.domain.value_object.principal import Principal


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_days = settings.ACCESS_TOKEN_EXPIRE_DAYS

    def create_jwt_token(self, principal: Principal) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': principal.id,
            'exp': now + timedelta(days=self.token_expire_days),
            'iat': now,
            'name': principal.display_name,
            'email': principal.email,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError:
            raise AuthenticationError('Invalid token')

    def get_principal_from_jwt(self, token: Optional[str]) -> Optional[Principal]:
        """No token means an anonymous caller; a bad token is an error"""
        if not token:
            return None

        payload = self.decode_jwt_token(token)
        user_id = payload.get('sub')
        if not user_id:
            raise AuthenticationError('Invalid token')

        return Principal(id=str(user_id), display_name=payload.get('name'), email=payload.get('email'))
