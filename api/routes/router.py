"""
API router.

Aggregates all endpoints under /api.
"""

from fastapi import APIRouter

from . import auth, user, tasks, system

router = APIRouter()

# Include all route modules
router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(user.router, prefix="/user", tags=["User"])
router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
router.include_router(system.router, prefix="/system", tags=["System"])
