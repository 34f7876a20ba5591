"""
Job Board - Main Application

FastAPI backend with:
- MongoDB for jobs, applications and admin accounts
- Local blob storage for uploaded resumes
- JWT authentication for admins

Run: uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import api_router
from app.core.config import Settings, get_settings
from app.core.errors import BackendError, JobBoardError, ValidationError
from app.core.logging_config import setup_logging
from app.db.context import BackendContext
from app.services.auth_service import AuthEvent

logger = logging.getLogger(__name__)


def log_auth_event(event: AuthEvent):
    uid = event.user.uid if event.user else None
    logger.info(f"Auth state changed: {event.kind} (uid={uid})")


async def job_board_error_handler(request: Request, exc: JobBoardError) -> JSONResponse:
    """Convert any job board error into a short user-facing message."""
    if isinstance(exc, BackendError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.__cause__ or exc.message}")
    elif exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")

    body = {"title": exc.title, "detail": exc.message}
    if isinstance(exc, ValidationError):
        body["errors"] = [{"field": e.field, "message": e.message} for e in exc.errors]
    return JSONResponse(status_code=exc.status_code, content=body)


def create_app(context: Optional[BackendContext] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the app. Without an explicit context one is created from settings
    when the app starts and closed when it stops.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ctx = context or BackendContext.from_settings(settings)
        try:
            ctx.store.init_indexes()
            logger.info("MongoDB indexes initialized")
        except Exception as e:
            logger.warning(f"MongoDB index initialization failed: {e}")
        unsubscribe = ctx.auth.on_auth_state_changed(log_auth_event)
        app.state.context = ctx
        try:
            yield
        finally:
            unsubscribe()
            if context is None:
                ctx.close()

    app = FastAPI(
        title="Job Board",
        description="""
        A job board where admins post jobs and applicants apply.

        ## Features
        - **Authentication**: JWT-based auth for admins
        - **Jobs**: Search, sort and live-stream job postings
        - **Applications**: Apply with a resume file or link, one application per email per job
        - **Review**: Admins list and delete applications per job
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(JobBoardError, job_board_error_handler)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """Detailed health check."""
        ctx = request.app.state.context
        return {
            "status": "healthy",
            "mongodb": "connected" if ctx.store.ping() else "disconnected",
        }

    return app


app = create_app()
