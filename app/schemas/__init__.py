"""
Schemas module - entity structs and request/response schemas.

Difference from plain dicts:
- Entities (Job, Application, User): decoded from MongoDB documents
- Request/response schemas: API contract (what client sends/receives)
"""

from app.schemas.schemas import (
    Job, Application, User, StoredUser, JobSort, SubmissionState,
    decode_job, decode_application, decode_user,
)

__all__ = [
    "Job", "Application", "User", "StoredUser", "JobSort", "SubmissionState",
    "decode_job", "decode_application", "decode_user",
]
