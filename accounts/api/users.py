"""User retrieval, role-filtered listing and profile update."""

import json
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from accounts.api.deps import get_current_user, is_admin, require_admin
from accounts.core.config import get_settings
from accounts.core.database import get_db
from accounts.core.errors import ForbiddenError, NotFoundError, ValidationError
from accounts.core.storage import ALLOWED_IMAGE_TYPES, LocalStorage, get_storage
from accounts.models.user import User
from accounts.schemas.user import ProfileUpdate, RoleSelector, UploadedImage, UserOut
from accounts.services import user_store
from accounts.services.user_store import RecordValidationError

logger = logging.getLogger(__name__)

router = APIRouter()

UPDATABLE_FIELDS = frozenset({"name", "password", "profilePicture"})
PICTURE_FIELD = "profilePicture"


async def _read_image(upload: UploadFile) -> UploadedImage:
    """Accept only JPEG/PNG up to MAX_UPLOAD_BYTES."""
    if upload.content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError("Please upload an image in JPG or PNG format")
    max_bytes = get_settings().MAX_UPLOAD_BYTES
    # One byte past the limit is enough to detect an oversized upload.
    content = await upload.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise ValidationError("File too large", details={"max_bytes": max_bytes})
    return UploadedImage(
        filename=upload.filename or "upload",
        content_type=upload.content_type,
        content=content,
    )


async def read_profile_update(request: Request) -> ProfileUpdate:
    """Parse a JSON or form body; a picture upload is validated before the handler runs."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "application/json":
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValidationError(f"Invalid JSON: {e!s}") from e
        if not isinstance(body, dict):
            raise ValidationError("JSON body must be an object")
        return ProfileUpdate(fields=body)
    if content_type in ("multipart/form-data", "application/x-www-form-urlencoded"):
        form = await request.form()
        update = ProfileUpdate()
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key != PICTURE_FIELD:
                    raise ValidationError(f"Unexpected file field '{key}'")
                update.picture = await _read_image(value)
            else:
                update.fields[key] = value
        return update
    if not content_type:
        return ProfileUpdate()
    raise ValidationError("Content-Type must be application/json or multipart/form-data")


@router.get("/users/{user_id}", response_model=UserOut)
def get_one_user(
    user_id: str,
    _user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    """Return one user (without password hash)."""
    user = user_store.find_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return UserOut.model_validate(user)


@router.put("/users/{user_id}", response_model=UserOut)
def update_user(
    user_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    update: Annotated[ProfileUpdate, Depends(read_profile_update)],
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[LocalStorage, Depends(get_storage)],
) -> UserOut:
    """
    Update name, password and/or profile picture.

    Callers may update themselves; ADMIN and SUPERADMIN may update anyone.
    Any field outside the whitelist rejects the whole request. Fields are
    validated before a picture is written, and a failed update removes it.
    """
    invalid = sorted(set(update.fields) - UPDATABLE_FIELDS)
    if invalid:
        raise ValidationError("Invalid updates", details={"fields": invalid})
    if current_user.id != user_id and not is_admin(current_user):
        raise ForbiddenError("Access denied: you can only update your own profile")

    user = user_store.find_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User not found")

    changes = dict(update.fields)
    try:
        user_store.validate_changes(changes)
    except RecordValidationError as e:
        raise ValidationError("Invalid data", details=e.errors) from e

    stored_path = None
    if update.picture is not None:
        stored_path = storage.save(update.picture.filename, update.picture.content)
        changes[PICTURE_FIELD] = stored_path
        logger.info(
            "Profile picture stored", extra={"user_id": user_id, "path": stored_path}
        )

    try:
        user = user_store.update_user(db, user, changes)
    except Exception as e:
        if stored_path is not None:
            storage.delete(stored_path)
        if isinstance(e, RecordValidationError):
            raise ValidationError("Invalid data", details=e.errors) from e
        raise
    return UserOut.model_validate(user)


@router.get("/{role}", response_model=list[UserOut])
def list_users(
    role: str,
    _admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserOut]:
    """
    List users filtered by the path segment (admin only).
    users -> USER, client -> CLIENT, admin -> ADMIN, anything else -> all roles.
    """
    selector = RoleSelector.from_path(role)
    users = user_store.list_users(db, selector.role)
    return [UserOut.model_validate(u) for u in users]
