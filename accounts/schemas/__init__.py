"""Pydantic request/response schemas."""

from accounts.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginUserView,
    SignupRequest,
    SignupResponse,
)
from accounts.schemas.health import HealthResponse
from accounts.schemas.user import (
    NewUserRecord,
    ProfileUpdate,
    RoleSelector,
    UploadedImage,
    UserChanges,
    UserOut,
)

__all__ = [
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "LoginUserView",
    "NewUserRecord",
    "ProfileUpdate",
    "RoleSelector",
    "SignupRequest",
    "SignupResponse",
    "UploadedImage",
    "UserChanges",
    "UserOut",
]
