"""User record schemas: field rules enforced by the store and the public user view."""

import enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from accounts.core.security import PASSWORD_MIN_LEN
from accounts.models.user import DEFAULT_PROFILE_PICTURE, Role

EMAIL_PATTERN = r"^\S+@\S+\.\S+$"

EmailAddress = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, to_lower=True, max_length=255, pattern=EMAIL_PATTERN
    ),
]
Password = Annotated[str, StringConstraints(min_length=PASSWORD_MIN_LEN)]
Name = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=3, max_length=50)
]
ProfilePicture = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=512)
]


class NewUserRecord(BaseModel):
    """Validated and normalized fields of a user about to be inserted."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: EmailAddress
    password: Password
    name: Name
    role: Role = Role.USER
    profile_picture: ProfilePicture = Field(
        default=DEFAULT_PROFILE_PICTURE, alias="profilePicture"
    )


class UserChanges(BaseModel):
    """Partial update of a stored user; only whitelisted fields exist here."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: Name | None = None
    password: Password | None = None
    profile_picture: ProfilePicture | None = Field(default=None, alias="profilePicture")

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("must not be null")
        return v


class UploadedImage(BaseModel):
    """Picture received with a profile update, already type- and size-checked."""

    filename: str
    content_type: str
    content: bytes


class ProfileUpdate(BaseModel):
    """Fields of a PUT /users/{id} request plus the optional picture upload."""

    fields: dict[str, Any] = Field(default_factory=dict)
    picture: UploadedImage | None = None


class UserOut(BaseModel):
    """User as returned to clients (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    email: str
    name: str
    role: Role
    profile_picture: str = Field(alias="profilePicture")


class RoleSelector(str, enum.Enum):
    """Role filter chosen by the listing path segment."""

    ALL = "ALL"
    USER = "USER"
    CLIENT = "CLIENT"
    ADMIN = "ADMIN"

    @classmethod
    def from_path(cls, segment: str) -> "RoleSelector":
        """Map a path segment to a selector; unknown segments select every role."""
        if segment == "users":
            return cls.USER
        if segment == "client":
            return cls.CLIENT
        if segment == "admin":
            return cls.ADMIN
        return cls.ALL

    @property
    def role(self) -> Role | None:
        """Role to filter on, or None for no filter."""
        if self is RoleSelector.ALL:
            return None
        return Role(self.value)
