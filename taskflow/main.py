import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from taskflow.config import get_settings
from taskflow.database import init_db
from taskflow.errors import AuthenticationError, TaskflowError
from taskflow.logging_setup import setup_logging
from taskflow.routers import auth, tasks, users
from taskflow.services.tokens import TokenService

logger = logging.getLogger(__name__)


def create_app(settings=None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    init_db()

    app = FastAPI(title="TaskFlow API")
    app.state.settings = settings
    app.state.tokens = TokenService.from_settings(settings)

    # API routers
    app.include_router(auth.router)
    app.include_router(tasks.router)
    app.include_router(users.router)

    @app.get("/health", tags=["meta"])
    def health():
        return {"status": "ok"}

    @app.exception_handler(TaskflowError)
    async def taskflow_error_handler(request: Request, exc: TaskflowError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)

    def _server_fault(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        content = {"detail": "Internal server error"}
        if settings.debug:
            content["error"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    @app.exception_handler(SQLAlchemyError)
    async def persistence_error_handler(request: Request, exc: SQLAlchemyError):
        return _server_fault(request, exc)

    # Generic error handler to return JSON errors for unexpected exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        return _server_fault(request, exc)

    return app


app = create_app()
