"""Request/response schemas for signup and login."""

from pydantic import BaseModel, ConfigDict, Field

from accounts.models.user import Role
from accounts.schemas.user import UserOut


class SignupRequest(BaseModel):
    """Registration payload. Presence and role are checked by the handler."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: str | None = None
    password: str | None = None
    role: str | None = None
    name: str | None = None
    profile_picture: str | None = Field(default=None, alias="profilePicture")


class SignupResponse(BaseModel):
    user: UserOut
    token: str = Field(..., description="JWT access token")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, description="Account email")
    password: str | None = Field(default=None, description="Password")


class LoginUserView(BaseModel):
    """Redacted user returned after login."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    role: Role


class LoginResponse(BaseModel):
    """JWT access token and the authenticated user."""

    user: LoginUserView
    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")
