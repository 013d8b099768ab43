import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.routes.applications import router as applications_router
from api.routes.content import router as content_router
from db.database import Database
from services.tracking_numbers import TrackingNumberGenerator

logger = logging.getLogger(__name__)


def create_app(
    database: Database,
    tracking_numbers: Optional[TrackingNumberGenerator] = None,
    cors_origins: Sequence[str] = ("*",),
) -> FastAPI:
    """
    Build the portal API around an explicitly constructed Database.
    Nothing here opens a connection; sessions are created per request by get_db.
    """
    app = FastAPI(title="Social Assistance Portal")
    app.state.database = database
    app.state.tracking_numbers = tracking_numbers or TrackingNumberGenerator()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Database error"})

    @app.get("/health-check/")
    async def health_check():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    app.include_router(applications_router)
    app.include_router(content_router)
    return app
