"""
Pytest fixtures for the job board.

The document store runs on mongomock and resumes are written to a temp dir,
so no MongoDB server is needed.
"""

import os

# Set before anything imports app.core.config (get_settings is cached)
os.environ["JWT_SECRET_KEY"] = "test-secret-key-1234"
os.environ["MONGODB_DB"] = "job_board_test"
os.environ["PUBLIC_BASE_URL"] = "http://testserver"
os.environ["JOB_STREAM_INTERVAL_SECONDS"] = "0"

from datetime import datetime, timedelta

import mongomock
import pytest
from fastapi.testclient import TestClient

from app.db.blob_store import LocalBlobStore
from app.db.context import BackendContext
from app.db.mongodb import DocumentStore


class FakeClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    client = mongomock.MongoClient()
    return DocumentStore(client["job_board_test"], client=client, clock=clock)


@pytest.fixture
def blobs(tmp_path):
    return LocalBlobStore(str(tmp_path / "uploads"), "http://testserver")


@pytest.fixture
def context(store, blobs):
    return BackendContext(store=store, blobs=blobs)


@pytest.fixture
def client(context):
    """FastAPI test client running against the mongomock context."""
    from app.main import create_app
    with TestClient(create_app(context=context)) as test_client:
        yield test_client


@pytest.fixture
def admin_token(context):
    context.auth.sign_up("Ada Admin", "ada@example.com", "secret-pass")
    token, _ = context.auth.sign_in("ada@example.com", "secret-pass")
    return token


@pytest.fixture
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def job(context):
    return context.jobs.create_job("Backend Engineer", "Build APIs in Python", "ACME", "Remote")
