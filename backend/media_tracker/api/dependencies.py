"""Request Dependencies - access to the per-process objects built in the lifespan."""

from fastapi import Request

from media_tracker.infrastructure.database import DatabaseSessionManager
from media_tracker.services.assembly import Controllers


def get_controllers(request: Request) -> Controllers:
    return request.app.state.controllers


def get_db_manager(request: Request) -> DatabaseSessionManager | None:
    return getattr(request.app.state, "db_manager", None)
