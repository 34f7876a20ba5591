"""
Job Service - job postings.

create_job / delete_job are admin operations (the routes enforce that).
Deleting a job does NOT remove its applications; those records are left
orphaned in the applications collection.
"""

import logging
from typing import List, Optional

from app.core.errors import JobValidationError, NotFoundError
from app.db.mongodb import DocumentStore
from app.schemas.schemas import Job, JobSort, decode_job
from app.services.validation import validate_job_form

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("title", "description", "company", "location")


def matches_search(job: Job, search: Optional[str]) -> bool:
    """Case-insensitive substring match against title/description/company/location."""
    term = (search or "").strip().lower()
    if not term:
        return True
    return any(term in (getattr(job, field) or "").lower() for field in SEARCH_FIELDS)


class JobService:

    def __init__(self, store: DocumentStore):
        self.store = store

    def create_job(
        self,
        title: str,
        description: str,
        company: Optional[str] = None,
        location: Optional[str] = None,
    ) -> Job:
        errors = validate_job_form(title, description)
        if errors:
            raise JobValidationError(errors)

        doc = {
            "title": title.strip(),
            "description": description.strip(),
            "company": (company or "").strip() or None,
            "location": (location or "").strip() or None,
            "created_at": self.store.server_timestamp(),
        }
        job_id = self.store.insert("jobs", doc)
        logger.info(f"Created job {job_id}: {doc['title']}")
        return Job(id=job_id, **doc)

    def get_job(self, job_id: str) -> Job:
        job = decode_job(self.store.get("jobs", job_id))
        if job is None:
            raise NotFoundError("Job not found")
        return job

    def list_jobs(self, search: Optional[str] = None, sort: JobSort = JobSort.newest) -> List[Job]:
        direction = "desc" if JobSort(sort) == JobSort.newest else "asc"
        docs = self.store.query("jobs", order_by=("created_at", direction))
        jobs = [decode_job(doc) for doc in docs]
        return [job for job in jobs if matches_search(job, search)]

    def delete_job(self, job_id: str) -> None:
        if not self.store.delete("jobs", job_id):
            raise NotFoundError("Job not found")
        # Applications for this job are not removed
        logger.info(f"Deleted job {job_id}")
