"""HTTP routes."""

from fastapi import APIRouter

from alliance.api import accounts, auth, health, users

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(users.router, tags=["users"])
router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
router.include_router(health.router, prefix="/health", tags=["health"])
