"""SQLAlchemy ORM models."""

from accounts.models.base import Base
from accounts.models.user import ADMIN_ROLES, DEFAULT_PROFILE_PICTURE, Role, User

__all__ = ["ADMIN_ROLES", "Base", "DEFAULT_PROFILE_PICTURE", "Role", "User"]
