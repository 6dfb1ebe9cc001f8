"""
Authentication service implementation.

Signs and validates HS256 JWT access tokens.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser
from modules.users.models import Account

from .interfaces import IAuthService
from .models import AuthTokenResult, TokenPayload
from .exceptions import (
    AuthConfigurationError,
    ExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Tokens are stateless: there is no session store and no revocation.
    A token is valid until it expires.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    def _secret(self) -> str:
        if not self._settings.jwt_secret:
            raise AuthConfigurationError()
        return self._settings.jwt_secret

    async def create_token(self, account: Account) -> AuthTokenResult:
        """Sign a token whose subject is the account ID."""
        secret = self._secret()
        now = datetime.now(timezone.utc)
        expires_in = self._settings.jwt_expiry_seconds

        payload = {
            "sub": account.id,
            "username": account.username,
            "aud": self._settings.jwt_audience,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
        }
        token = jwt.encode(payload, secret, algorithm=self._settings.jwt_algorithm)

        return AuthTokenResult(access_token=token, expires_in=expires_in)

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a token and return the authenticated caller.

        The signature, expiry and audience are all checked.
        """
        if not token:
            raise MissingTokenError()

        secret = self._secret()

        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self._settings.jwt_algorithm],
                audience=self._settings.jwt_audience,
                options={"require": ["sub", "exp", "iat"]},
            )
            claims = TokenPayload(**payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))
        except PydanticValidationError:
            raise InvalidTokenError("Token is missing required claims")

        return AuthenticatedUser(
            id=claims.sub,
            username=claims.username,
            issued_at=datetime.fromtimestamp(claims.iat, tz=timezone.utc),
        )
