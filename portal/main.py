# portal/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from portal.api.annotations import router as annotations_router
from portal.api.auth import router as auth_router
from portal.api.deliverables import router as deliverables_router
from portal.api.health import router as health_router
from portal.api.timeline_comments import router as timeline_comments_router
from portal.api.versions import router as versions_router
from portal.core.config import settings
from portal.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        description=settings.api_description,
    )

    # Missing / malformed body fields are a client error the caller must fix: 400, not 422.
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    # Anything unexpected: log with traceback, tell the caller nothing.
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "unhandled error on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
            extra={"method": request.method, "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(deliverables_router)
    app.include_router(versions_router)
    app.include_router(annotations_router)
    app.include_router(timeline_comments_router)

    return app


app = create_app()
