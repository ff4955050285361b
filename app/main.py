from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.logging import configure_logging
from app.api.interactions import router as api_router
from app.dependencies import build_session_manager
from session.manager import SessionManager

def create_app(manager_factory: Callable[[], SessionManager] = build_session_manager) -> FastAPI:
    """
    Build the API application.
    
    Args:
        manager_factory: Builds an uninitialized SessionManager. Called once
            per lifespan, so a restarted app never reuses a closed session.
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        manager = manager_factory()
        manager.init()
        app.state.session_manager = manager
        yield
        manager.teardown()

    app = FastAPI(
        title=settings.service_name,
        lifespan=lifespan
    )

    # CORS middleware - allow the dashboard frontend to call the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/v1")

    @app.get("/health")
    async def health():
        return {"status": "ok", "service": settings.service_name}

    return app

app = create_app()
