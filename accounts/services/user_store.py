"""Credential store: validated persistence of user records.

Validation and normalization happen here, before anything touches the
database, and passwords are hashed as part of persisting them. The unique
index on ``users.email`` is the final authority on uniqueness: callers may
pre-check, but a lost race still surfaces as ``DuplicateKeyError``.
"""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from accounts.core.security import hash_password
from accounts.models.user import Role, User
from accounts.schemas.user import NewUserRecord, UserChanges

logger = logging.getLogger(__name__)


class RecordValidationError(Exception):
    """A user record failed field validation; nothing was written."""

    def __init__(self, message: str, errors: list[dict[str, str]]) -> None:
        self.message = message
        self.errors = errors
        super().__init__(message)


class DuplicateKeyError(Exception):
    """Insert rejected by a unique index."""

    def __init__(self, key_value: dict[str, str]) -> None:
        self.key_value = key_value
        super().__init__(f"Duplicate key: {key_value}")


def _field_errors(exc: PydanticValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors to field/message pairs (input values are dropped)."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]) or "__root__",
            "message": err["msg"],
        }
        for err in exc.errors()
    ]


def normalize_email(email: str) -> str:
    return email.strip().lower()


def find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def find_by_id(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)


def list_users(db: Session, role: Role | None = None) -> list[User]:
    """All users, optionally restricted to one role, ordered by email."""
    query = db.query(User)
    if role is not None:
        query = query.filter(User.role == role.value)
    return query.order_by(User.email).all()


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def create_user(db: Session, fields: dict[str, Any]) -> User:
    """
    Validate, hash and insert a new user.

    Raises RecordValidationError on invalid fields and DuplicateKeyError when
    the email is already taken.
    """
    try:
        record = NewUserRecord.model_validate(fields)
    except PydanticValidationError as e:
        raise RecordValidationError("User validation failed", _field_errors(e)) from e

    user = User(
        email=record.email,
        password_hash=hash_password(record.password),
        name=record.name,
        role=record.role.value,
        profile_picture=record.profile_picture,
    )
    db.add(user)
    try:
        _commit(db)
    except IntegrityError as e:
        taken = db.query(User.id).filter(User.email == record.email).first()
        if taken is not None:
            raise DuplicateKeyError({"email": record.email}) from e
        raise
    db.refresh(user)
    logger.info("User created", extra={"user_id": user.id, "role": user.role})
    return user


def validate_changes(changes: dict[str, Any]) -> UserChanges:
    """Check a partial update without touching the database."""
    try:
        return UserChanges.model_validate(changes)
    except PydanticValidationError as e:
        raise RecordValidationError("User validation failed", _field_errors(e)) from e


def update_user(db: Session, user: User, changes: dict[str, Any]) -> User:
    """
    Apply whitelisted changes to a stored user and persist them.

    A new password is hashed before it is stored. Raises RecordValidationError
    when a field is not allowed or fails validation.
    """
    updates = validate_changes(changes).model_dump(exclude_unset=True)
    if "name" in updates:
        user.name = updates["name"]
    if "password" in updates:
        user.password_hash = hash_password(updates["password"])
    if "profile_picture" in updates:
        user.profile_picture = updates["profile_picture"]

    _commit(db)
    db.refresh(user)
    logger.info(
        "User updated",
        extra={"user_id": user.id, "fields": ",".join(sorted(updates))},
    )
    return user
