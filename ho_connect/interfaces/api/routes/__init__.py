from fastapi import FastAPI

from .activity import router as activity_router
from .assistant import router as assistant_router
from .employees import router as employees_router
from .notifications import router as notifications_router
from .presence import router as presence_router
from .sessions import router as sessions_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(sessions_router)
    app.include_router(employees_router)
    app.include_router(notifications_router)
    app.include_router(presence_router)
    app.include_router(activity_router)
    app.include_router(assistant_router)
