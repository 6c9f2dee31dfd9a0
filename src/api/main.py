"""
FastAPI Application Factory

Assembles the API app: CORS, exception handlers, routers and the health
endpoint. Kept as a factory so main_asyncio.py and the tests build the same
app.
"""

from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.middleware.error_handler import register_exception_handlers
from api.routes import clock, system
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)


def create_app(
    title: str = "Inertia Clock",
    description: str = "REST API for the inertial analogue clock",
    version: str = "1.0.0",
    docs_enabled: bool = True,
    cors_origins: Optional[List[str]] = None
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        title: API title (shown in docs)
        description: API description
        version: API version
        docs_enabled: Enable /docs and /redoc
        cors_origins: CORS allowed origins (default: local dev servers)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None
    )

    if cors_origins is None:
        cors_origins = [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(clock.router, prefix="/api/v1")
    app.include_router(system.router, prefix="/api/v1")

    log.debug("Routes registered: clock (/api/v1/clock), system (/api/v1/system)")

    @app.get(
        "/api/health",
        tags=["System"],
        summary="Health check",
        description="Check if API is running and responding"
    )
    async def health_check():
        return {
            "status": "healthy",
            "service": "inertia-clock-api",
            "version": version
        }

    @app.get("/", include_in_schema=False)
    async def root():
        return JSONResponse(
            {
                "message": "Inertia Clock API",
                "docs": "/docs",
                "health": "/api/health"
            }
        )

    log.info(f"FastAPI app created: {title} v{version}")
    return app
