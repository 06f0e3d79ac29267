"""Health routes - process liveness and readiness of the store and controller graph.

Invariants:
    - GET /health/ answers 200 while the process serves requests
    - GET /health/ready answers 503 until the lifespan has opened the store and wired
      a media item controller for every media type
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from media_tracker.api.dependencies import get_db_manager
from media_tracker.core.domain_types import MediaType
from media_tracker.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": "media-tracker-api"}


@router.get("/ready")
async def readiness_check(
    request: Request,
    db_manager: DatabaseSessionManager | None = Depends(get_db_manager),
):
    """Readiness: store reachable and media item controllers bound."""
    database_ok = await db_manager.health_check() if db_manager else False
    media_types = _wired_media_types(request)
    checks = {
        "database": "healthy" if database_ok else "unavailable",
        "media_types": [media_type.value for media_type in media_types],
    }
    if not database_ok or len(media_types) != len(MediaType):
        logger.warning("Readiness check failed", extra={"checks": checks})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}


def _wired_media_types(request: Request) -> list[MediaType]:
    controllers = getattr(request.app.state, "controllers", None)
    if controllers is None:
        return []
    return [
        controller.linked_media_type
        for controller in controllers.media_items.get_all_entity_controllers()
    ]
