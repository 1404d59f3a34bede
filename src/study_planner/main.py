"""Entry point for the study planner FastAPI application."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routers import api_router, health_router
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .core.middleware import CorrelationIdMiddleware
from .db.store import DocumentStore
from .deps import SettingsDependency
from .errors import register_exception_handlers
from .schemas.system import ServiceMetadata


def _normalise_prefix(raw_prefix: str) -> str:
    router_prefix = raw_prefix.strip()
    if router_prefix and not router_prefix.startswith("/"):
        router_prefix = f"/{router_prefix}"
    router_prefix = router_prefix.rstrip("/")
    if router_prefix == "/":
        router_prefix = ""
    return router_prefix


def create_app(store: DocumentStore | None = None) -> FastAPI:
    """Instantiate and configure the FastAPI application.

    ``store`` lets callers supply an already constructed document store; when
    omitted one is built from settings. Either way it is opened on startup if
    it is not open yet and closed on shutdown.
    """

    settings = get_settings()
    configure_logging(settings)

    router_prefix = _normalise_prefix(settings.api_prefix)
    openapi_url = "/openapi.json" if not router_prefix else f"{router_prefix}/openapi.json"

    application = FastAPI(
        title=settings.project_name,
        version=settings.version,
        summary="Gamified study planner: tasks, XP and a leaderboard.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url=openapi_url,
    )

    application.state.settings = settings
    application.state.store = store if store is not None else DocumentStore.from_settings(settings)

    application.add_middleware(CorrelationIdMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    if router_prefix:
        application.include_router(api_router, prefix=router_prefix)
    else:
        application.include_router(api_router)

    application.include_router(health_router)

    @application.get(
        f"{router_prefix}/metadata",
        response_model=ServiceMetadata,
        tags=["system"],
        summary="Service metadata",
    )
    async def read_api_metadata(settings: SettingsDependency) -> ServiceMetadata:
        """Expose minimal service metadata for API clients."""

        return ServiceMetadata(
            name=settings.project_name,
            environment=settings.environment,
            version=settings.version,
            api_prefix=settings.api_prefix,
            leaderboard_size=settings.leaderboard_size,
        )

    register_exception_handlers(application)

    @application.on_event("startup")
    async def _open_document_store() -> None:
        await application.state.store.open()

    @application.on_event("shutdown")
    async def _close_document_store() -> None:
        await application.state.store.close()

    return application


app = create_app()


def run() -> None:
    """Console entry point declared in ``pyproject.toml``."""

    settings: Settings = get_settings()
    uvicorn.run(
        "study_planner.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.reload,
        log_config=None,
    )
