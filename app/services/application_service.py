"""
Application Service - submissions against a job.

Submission workflow (ApplicationSubmission):

    validating -> checking-duplicate -> (uploading-resume)? -> persisting -> done
                                                                          \\-> failed

The duplicate check is a plain query followed by a separate insert, so two
concurrent submissions for the same (job_id, email) can both get through.
"""

import logging
from typing import List

from app.core.errors import (
    ApplicationValidationError, DuplicateApplicationError, JobBoardError, NotFoundError,
)
from app.db.blob_store import LocalBlobStore, safe_filename
from app.db.mongodb import DocumentStore
from app.schemas.schemas import Application, SubmissionState, decode_application
from app.services.job_service import JobService
from app.services.validation import (
    MAX_RESUME_SIZE_BYTES, ApplicationForm, ResumeFile, validate_application_form,
)

logger = logging.getLogger(__name__)


class ApplicationService:

    def __init__(
        self,
        store: DocumentStore,
        blobs: LocalBlobStore,
        max_resume_bytes: int = MAX_RESUME_SIZE_BYTES,
    ):
        self.store = store
        self.blobs = blobs
        self.jobs = JobService(store)
        self.max_resume_bytes = max_resume_bytes

    def check_duplicate(self, job_id: str, email: str) -> bool:
        """True if an application for (job_id, email) already exists."""
        return self.store.exists("applications", {"job_id": job_id, "email": email})

    def upload_resume(self, resume: ResumeFile, job_id: str) -> str:
        """Store the file under resumes/<job_id>/<ms>-<name> and return its public URL."""
        stamp = int(self.store.clock().timestamp() * 1000)
        key = f"resumes/{job_id}/{stamp}-{safe_filename(resume.filename)}"
        self.blobs.upload(key, resume.data, resume.content_type)
        return self.blobs.public_url(key)

    def submit(self, job_id: str, form: ApplicationForm) -> Application:
        return ApplicationSubmission(self, job_id, form).run()

    def list_applications(self, job_id: str) -> List[Application]:
        """All applications for a job, newest submission first."""
        if not job_id:
            return []
        docs = self.store.query(
            "applications", {"job_id": job_id}, order_by=("submitted_at", "desc")
        )
        logger.debug(f"Found {len(docs)} applications for job {job_id}")
        return [decode_application(doc) for doc in docs]

    def delete_application(self, application_id: str) -> None:
        if not self.store.delete("applications", application_id):
            raise NotFoundError("Application not found")
        logger.info(f"Deleted application {application_id}")


class ApplicationSubmission:
    """
    One run of the submission workflow.

    `state` is the current step and `history` every step entered, in order.
    Errors leave the submission in the failed state and propagate to the
    caller unchanged.
    """

    def __init__(self, service: ApplicationService, job_id: str, form: ApplicationForm):
        self.service = service
        self.job_id = job_id
        self.form = form
        self.history: List[SubmissionState] = []
        self.state = None
        self.application = None

    def _enter(self, state: SubmissionState):
        self.state = state
        self.history.append(state)
        logger.debug(f"Submission for job {self.job_id}: {state.value}")

    def run(self) -> Application:
        try:
            self.application = self._run()
        except JobBoardError as e:
            self._enter(SubmissionState.failed)
            logger.info(f"Submission for job {self.job_id} failed: {e.message}")
            raise
        self._enter(SubmissionState.done)
        return self.application

    def _run(self) -> Application:
        service, form = self.service, self.form

        self._enter(SubmissionState.validating)
        errors = validate_application_form(form, service.max_resume_bytes)
        if errors:
            raise ApplicationValidationError(errors)

        job = service.jobs.get_job(self.job_id)
        email = form.email.strip()

        self._enter(SubmissionState.checking_duplicate)
        if service.check_duplicate(job.id, email):
            raise DuplicateApplicationError(job.id, email)

        if form.resume_file is not None:
            self._enter(SubmissionState.uploading_resume)
            resume_url = service.upload_resume(form.resume_file, job.id)
        else:
            resume_url = form.resume_url.strip()

        self._enter(SubmissionState.persisting)
        doc = {
            "job_id": job.id,
            "job_title": job.title,
            "full_name": form.full_name.strip(),
            "email": email,
            "resume_url": resume_url,
            "phone": (form.phone or "").strip() or None,
            "cover_letter": (form.cover_letter or "").strip() or None,
            "submitted_at": service.store.server_timestamp(),
        }
        application_id = service.store.insert("applications", doc)
        logger.info(f"Application {application_id} submitted for job {job.id}")
        return Application(id=application_id, **doc)
