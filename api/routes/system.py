"""
System endpoints.

Health checks and system status.
"""

from fastapi import APIRouter

from ..deps import ServicesDep

router = APIRouter()


@router.get("/status")
def get_status(services: ServicesDep):
    """
    Health check endpoint.

    Reports whether the data directory is present.
    """
    return {
        "success": True,
        "status": "healthy",
        "service": "taskdesk-api",
        "storage": "ok" if services.config.storage.data_dir.exists() else "missing",
    }
