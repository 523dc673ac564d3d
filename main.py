from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session, sessionmaker

from ho_connect.application.instance import InstanceRegistry
from ho_connect.config import Settings, get_settings
from ho_connect.infrastructure.database import SessionLocal, initialize_database
from ho_connect.infrastructure.notifications import (
    ChangeSignalBus,
    InstanceConnectionManager,
    ToastEventPublisher,
    instance_manager,
    signal_bus,
)
from ho_connect.infrastructure.record_store import RecordStore
from ho_connect.interfaces.api.routes import register_routes


def create_app(
    session_factory: sessionmaker[Session] | None = None,
    bus: ChangeSignalBus | None = None,
    connection_manager: InstanceConnectionManager | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Every session opened through the API becomes a client instance of the
    same process, sharing one record store and one signal bus.
    """

    session_factory = session_factory or SessionLocal
    connection_manager = connection_manager or instance_manager
    store = RecordStore(session_factory, bus or signal_bus)
    registry = InstanceRegistry(
        store,
        settings=settings or get_settings(),
        publisher=ToastEventPublisher(connection_manager),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the record table on startup and close every session on shutdown."""

        initialize_database(session_factory.kw.get("bind"))
        yield
        registry.close_all()

    app = FastAPI(title="HO Connect", lifespan=lifespan)
    app.state.registry = registry
    app.state.connection_manager = connection_manager

    # Local UI development server.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
