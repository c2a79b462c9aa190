"""Issue and verify signed, time-limited identity tokens (JWT)."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import jwt

from accounts.core.config import Settings, get_settings
from accounts.core.errors import ConfigError


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenMalformed(TokenError):
    """Token cannot be parsed or lacks required claims."""


class TokenInvalid(TokenError):
    """Signature mismatch or otherwise unacceptable token."""


class TokenExpired(TokenError):
    """Token is past its expiry time."""


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    role: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """
    Signs and verifies HS256 access tokens with a process-wide secret.

    The secret and validity window are fixed at construction; there is no way
    to change them afterwards.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
    ) -> None:
        if not secret or not secret.strip():
            raise ConfigError("JWT signing secret is not set")
        self._secret = secret
        self._algorithm = algorithm
        self._lifetime = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, user_id: str, role: str, now: datetime | None = None) -> str:
        """Create a token with sub (user id), role, iat and exp = iat + lifetime."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "role": role,
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token.
        Raises TokenMalformed, TokenInvalid or TokenExpired.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired("Token has expired") from e
        except jwt.InvalidSignatureError as e:
            raise TokenInvalid("Token signature does not match") from e
        except (jwt.DecodeError, jwt.MissingRequiredClaimError) as e:
            raise TokenMalformed(f"Token could not be parsed: {e}") from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalid(f"Token rejected: {e}") from e

        role = payload.get("role")
        if not isinstance(role, str) or not role:
            raise TokenMalformed("Token has no role claim")
        return TokenClaims(
            user_id=payload["sub"],
            role=role,
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )


@lru_cache
def get_token_service() -> TokenService:
    """Return the process-wide token service built from settings."""
    return TokenService.from_settings(get_settings())
