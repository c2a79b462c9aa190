"""HTTP routes, mounted under API_PREFIX."""

from fastapi import APIRouter

from accounts.api import auth, users

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
# users last: GET /{role} matches any single path segment
router.include_router(users.router, tags=["users"])
