"""
Bearer token handling for the HTTP boundary

The token carries the caller identity in its `user_id` claim; nothing else about the
user is looked up here.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import AuthenticationError


class JwtAuth:
    def __init__(self, *, config: Settings) -> None:
        self.secret = config.SECRET_KEY.get_secret_value()
        self.algorithm = config.ALGORITHM
        self.token_expire_minutes = config.ACCESS_TOKEN_EXPIRE_MINUTES

    def create_jwt_token(self, *, user_id: int, expires_in: Optional[timedelta] = None) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_id),
            'user_id': user_id,
            'iat': now,
            'exp': now + (expires_in or timedelta(minutes=self.token_expire_minutes)),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError('Token has expired')
        except jwt.PyJWTError:
            raise AuthenticationError('Invalid token')

    def get_user_id_from_jwt(self, token: Optional[str]) -> int:
        if not token:
            raise AuthenticationError('Not authenticated')

        user_id = self.decode_jwt_token(token).get('user_id')
        if not isinstance(user_id, int) or isinstance(user_id, bool) or user_id <= 0:
            raise AuthenticationError('Invalid token')
        return user_id
