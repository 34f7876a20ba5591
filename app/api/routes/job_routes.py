"""
Job Routes

GET /jobs - List jobs (search + sort)
GET /jobs/stream - Live job list (server-sent events)
GET /jobs/{job_id} - Get job details
POST /jobs - Create job posting (admin only)
DELETE /jobs/{job_id} - Delete job (admin only, applications are kept)
POST /jobs/{job_id}/apply - Apply to job (multipart form, no account needed)
GET /jobs/{job_id}/applications - Applications for a job (admin only)
"""

import json
import logging
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from fastapi.responses import StreamingResponse

from app.core.auth import get_current_admin
from app.core.config import get_settings
from app.core.errors import JobBoardError
from app.db.context import BackendContext, get_context
from app.schemas.schemas import (
    Job, JobCreate, JobListResponse, JobSort, User, ApplicationListResponse,
    SubmissionResponse, SubmissionState, MessageResponse
)
from app.services.subscription import JobSubscription
from app.services.validation import ApplicationForm, ResumeFile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.get("", response_model=JobListResponse)
async def list_jobs(
    search: Optional[str] = Query(None, description="Search in title, description, company and location"),
    sort: JobSort = Query(JobSort.newest),
    ctx: BackendContext = Depends(get_context),
):
    """List all jobs, optionally filtered by a search term."""
    jobs = ctx.jobs.list_jobs(search=search, sort=sort)
    return JobListResponse(jobs=jobs, total=len(jobs))


@router.get("/stream")
async def stream_jobs(
    request: Request,
    search: Optional[str] = Query(None),
    sort: JobSort = Query(JobSort.newest),
    ctx: BackendContext = Depends(get_context),
) -> StreamingResponse:
    """Stream the job list as SSE events; a new event whenever the list changes."""
    subscription = JobSubscription(
        ctx.jobs,
        interval=get_settings().job_stream_interval_seconds,
        search=search,
        sort=sort,
        is_detached=request.is_disconnected,
    )

    async def event_generator() -> AsyncIterator[str]:
        try:
            async for jobs in subscription:
                payload = JobListResponse(jobs=jobs, total=len(jobs)).model_dump_json()
                yield f"event: jobs\ndata: {payload}\n\n"
        except JobBoardError as e:
            # Headers are already sent; report the failure in-band and end the stream
            logger.error(f"Job stream failed: {e.__cause__ or e.message}")
            error = {"title": e.title, "detail": e.message}
            yield f"event: error\ndata: {json.dumps(error)}\n\n"
        finally:
            subscription.close()
            logger.debug("Job stream subscriber detached")

    return StreamingResponse(event_generator(), media_type="text/event-stream")


@router.get("/{job_id}", response_model=Job)
async def get_job(job_id: str, ctx: BackendContext = Depends(get_context)):
    """Get details of a specific job."""
    return ctx.jobs.get_job(job_id)


@router.post("", response_model=Job, status_code=201)
async def create_job(
    job: JobCreate,
    admin: User = Depends(get_current_admin),
    ctx: BackendContext = Depends(get_context),
):
    """Create a new job posting. Admins only."""
    created = ctx.jobs.create_job(job.title, job.description, job.company, job.location)
    logger.info(f"Job {created.id} created by {admin.uid}")
    return created


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(
    job_id: str,
    admin: User = Depends(get_current_admin),
    ctx: BackendContext = Depends(get_context),
):
    """Delete a job posting. Its applications are not deleted."""
    ctx.jobs.delete_job(job_id)
    return MessageResponse(message="Job deleted successfully")


@router.post("/{job_id}/apply", response_model=SubmissionResponse, status_code=201)
async def apply_to_job(
    job_id: str,
    full_name: str = Form(""),
    email: str = Form(""),
    resume_url: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    cover_letter: Optional[str] = Form(None),
    resume_file: Optional[UploadFile] = File(None),
    ctx: BackendContext = Depends(get_context),
):
    """
    Apply to a job with either a resume file (PDF/DOC/DOCX, max 5MB) or a
    resume URL. One application per email per job.
    """
    resume = None
    if resume_file is not None and resume_file.filename:
        resume = ResumeFile(
            filename=resume_file.filename,
            content_type=resume_file.content_type or "",
            data=await resume_file.read(ctx.applications.max_resume_bytes + 1),
        )

    form = ApplicationForm(
        full_name=full_name,
        email=email,
        resume_url=resume_url,
        resume_file=resume,
        phone=phone,
        cover_letter=cover_letter,
    )
    application = ctx.applications.submit(job_id, form)
    return SubmissionResponse(
        state=SubmissionState.done,
        message=f"Thank you for applying to {application.job_title}",
        application=application,
    )


@router.get("/{job_id}/applications", response_model=ApplicationListResponse)
async def get_applications(
    job_id: str,
    admin: User = Depends(get_current_admin),
    ctx: BackendContext = Depends(get_context),
):
    """Get all applications for a job, newest first."""
    applications = ctx.applications.list_applications(job_id)
    return ApplicationListResponse(job_id=job_id, applications=applications, total=len(applications))
