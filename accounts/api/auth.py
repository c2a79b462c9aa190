"""Registration and login endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from accounts.core.config import settings
from accounts.core.database import get_db
from accounts.core.errors import AuthError, ConflictError, ValidationError
from accounts.core.rate_limit import limiter
from accounts.core.security import dummy_password_hash, verify_password
from accounts.core.tokens import TokenService, get_token_service
from accounts.models.user import Role
from accounts.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginUserView,
    SignupRequest,
    SignupResponse,
)
from accounts.schemas.user import UserOut
from accounts.services import user_store
from accounts.services.user_store import DuplicateKeyError, RecordValidationError

logger = logging.getLogger(__name__)

router = APIRouter()

ALLOWED_ROLES = frozenset(r.value for r in Role)
INVALID_CREDENTIALS = "Invalid email or password"


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> SignupResponse:
    """
    Register a new account and return it with an access token.

    The email pre-check only gives a friendlier 409; a concurrent signup that
    wins the race is still caught by the unique index and reported as 409.
    """
    if not body.email or not body.password or not body.role:
        raise ValidationError("Email, password, and role are required")
    if body.role not in ALLOWED_ROLES:
        raise ValidationError("Invalid role")
    if user_store.find_by_email(db, body.email) is not None:
        raise ConflictError("Email already in use")

    try:
        user = user_store.create_user(db, body.model_dump(exclude_none=True))
    except RecordValidationError as e:
        raise ValidationError("Invalid data", details=e.errors) from e
    except DuplicateKeyError as e:
        raise ConflictError("Duplicate key error", details=e.key_value) from e

    token = tokens.issue(user.id, user.role)
    return SignupResponse(user=UserOut.model_validate(user), token=token)


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(
    request: Request,
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Unknown email and wrong password produce the same 401.
    """
    if not body.email or not body.password:
        raise ValidationError("Email and password are required")

    user = user_store.find_by_email(db, body.email)
    stored_hash = user.password_hash if user is not None else dummy_password_hash()
    password_ok = verify_password(body.password, stored_hash)
    if user is None or not password_ok:
        logger.info("Login failed", extra={"client": request.client.host if request.client else None})
        raise AuthError(INVALID_CREDENTIALS)

    token = tokens.issue(user.id, user.role)
    return LoginResponse(user=LoginUserView.model_validate(user), token=token)
