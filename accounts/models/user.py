"""ORM model for user accounts (credentials and RBAC)."""

import enum
from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, String

from accounts.models.base import Base

DEFAULT_PROFILE_PICTURE = "default_profile_picture.png"


class Role(str, enum.Enum):
    SUPERADMIN = "SUPERADMIN"
    ADMIN = "ADMIN"
    USER = "USER"
    CLIENT = "CLIENT"


ADMIN_ROLES = frozenset({Role.ADMIN.value, Role.SUPERADMIN.value})


def _new_user_id() -> str:
    return str(uuid4())


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    email is stored trimmed and lower-cased and is unique across all users.
    role: one of SUPERADMIN, ADMIN, USER, CLIENT (checked by the database too).
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "role IN ({})".format(", ".join(f"'{r.value}'" for r in Role)),
            name="role",
        ),
    )

    id = Column(String(36), primary_key=True, default=_new_user_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(50), nullable=False)
    role = Column(String(16), nullable=False, default=Role.USER.value)
    profile_picture = Column(
        String(512), nullable=False, default=DEFAULT_PROFILE_PICTURE
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
