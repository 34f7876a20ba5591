"""
Backend Context - the store, auth and blob clients as one object.

Created once when the app starts (see app.main lifespan), closed on shutdown,
and handed to routes through the get_context dependency instead of module
level globals.
"""

import logging
from dataclasses import dataclass, field

from fastapi import Request

from app.core.config import Settings
from app.db.blob_store import LocalBlobStore
from app.db.mongodb import DocumentStore
from app.services.application_service import ApplicationService
from app.services.auth_service import AuthProvider
from app.services.job_service import JobService

logger = logging.getLogger(__name__)


@dataclass
class BackendContext:
    store: DocumentStore
    blobs: LocalBlobStore
    max_resume_bytes: int = 5 * 1024 * 1024
    auth: AuthProvider = field(init=False)
    jobs: JobService = field(init=False)
    applications: ApplicationService = field(init=False)

    def __post_init__(self):
        self.auth = AuthProvider(self.store)
        self.jobs = JobService(self.store)
        self.applications = ApplicationService(self.store, self.blobs, self.max_resume_bytes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "BackendContext":
        store = DocumentStore.connect(settings.mongodb_uri, settings.mongodb_db)
        blobs = LocalBlobStore(settings.upload_dir, settings.public_base_url)
        logger.info(f"Backend context ready (db={settings.mongodb_db}, uploads={blobs.root})")
        return cls(store=store, blobs=blobs, max_resume_bytes=settings.max_resume_size_bytes)

    def close(self):
        self.store.close()
        logger.info("Backend context closed")


def get_context(request: Request) -> BackendContext:
    """
    Dependency for FastAPI route injection.
    Usage:
        @router.get("/jobs")
        async def list_jobs(ctx: BackendContext = Depends(get_context)):
            ...
    """
    return request.app.state.context
