"""Auth dependencies: bearer token verification and role gates (get_current_user, require_admin)."""

import enum
import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from accounts.core.database import get_db
from accounts.core.errors import AuthError, ForbiddenError
from accounts.core.tokens import (
    TokenExpired,
    TokenInvalid,
    TokenMalformed,
    TokenService,
    get_token_service,
)
from accounts.models.user import ADMIN_ROLES, User
from accounts.services import user_store

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


class AuthFailure(str, enum.Enum):
    """Why a request could not be authenticated. Logged, never sent to the client."""

    NO_TOKEN = "no_token"
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"
    USER_MISSING = "user_missing"


def authenticate(
    credentials: HTTPAuthorizationCredentials | None,
    db: Session,
    tokens: TokenService,
) -> User | AuthFailure:
    """Resolve bearer credentials to the stored user, or the reason they were rejected."""
    if credentials is None or not credentials.credentials:
        return AuthFailure.NO_TOKEN
    try:
        claims = tokens.verify(credentials.credentials)
    except TokenMalformed:
        return AuthFailure.MALFORMED
    except TokenExpired:
        return AuthFailure.EXPIRED
    except TokenInvalid:
        return AuthFailure.BAD_SIGNATURE
    user = user_store.find_by_id(db, claims.user_id)
    if user is None:
        return AuthFailure.USER_MISSING
    return user


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> User:
    """Dependency: require a valid Bearer JWT for an existing user. Any failure is the same 401."""
    result = authenticate(credentials, db, tokens)
    if isinstance(result, AuthFailure):
        logger.info("Authentication rejected", extra={"reason": result.value})
        raise AuthError()
    return result


def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Dependency: require the stored user's current role to be ADMIN or SUPERADMIN. 403 otherwise."""
    if current_user.role not in ADMIN_ROLES:
        logger.info(
            "Admin access denied",
            extra={"user_id": current_user.id, "role": current_user.role},
        )
        raise ForbiddenError("Access denied: Admins only")
    return current_user


def is_admin(user: User) -> bool:
    return user.role in ADMIN_ROLES
