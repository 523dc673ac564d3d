"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status

from ho_connect.application.instance import ClientInstance, InstanceRegistry
from ho_connect.application.state import AppState, load_collections
from ho_connect.infrastructure.notifications import InstanceConnectionManager
from ho_connect.infrastructure.openai_client import (
    ContentGeneratorService,
    OpenAIConfigurationError,
)
from ho_connect.infrastructure.record_store import RecordStore


def get_registry(request: Request) -> InstanceRegistry:
    """Return the registry of open instances kept on the application."""

    return request.app.state.registry


def get_record_store(registry: InstanceRegistry = Depends(get_registry)) -> RecordStore:
    return registry.store


def get_connection_manager(request: Request) -> InstanceConnectionManager:
    return request.app.state.connection_manager


def get_instance(
    session_id: str, registry: InstanceRegistry = Depends(get_registry)
) -> ClientInstance:
    """Resolve the instance addressed by the ``session_id`` path parameter."""

    instance = registry.get(session_id)
    if instance is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found",
        )
    return instance


def get_logged_instance(instance: ClientInstance = Depends(get_instance)) -> ClientInstance:
    """Ensure the instance still has an employee logged in."""

    if instance.state.current_user is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No employee is logged in on this session",
        )
    return instance


def get_directory_state(store: RecordStore = Depends(get_record_store)) -> AppState:
    """Return a fresh snapshot of the shared collections, outside any session."""

    return load_collections(store, AppState())


def get_content_generator() -> ContentGeneratorService:
    """Return a configured instance of :class:`ContentGeneratorService`."""

    try:
        return ContentGeneratorService()
    except OpenAIConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        ) from exc


__all__ = [
    "get_connection_manager",
    "get_content_generator",
    "get_directory_state",
    "get_instance",
    "get_logged_instance",
    "get_record_store",
    "get_registry",
]
