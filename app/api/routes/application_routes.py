"""
Application and File Routes

DELETE /applications/{application_id} - Delete an application (admin only)
GET /files/{key} - Download an uploaded resume
"""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from app.core.auth import get_current_admin
from app.core.errors import NotFoundError
from app.db.context import BackendContext, get_context
from app.schemas.schemas import User, MessageResponse

router = APIRouter(tags=["Applications"])


@router.delete("/applications/{application_id}", response_model=MessageResponse)
async def delete_application(
    application_id: str,
    admin: User = Depends(get_current_admin),
    ctx: BackendContext = Depends(get_context),
):
    """Delete a single application."""
    ctx.applications.delete_application(application_id)
    return MessageResponse(message="Application deleted")


@router.get("/files/{key:path}")
async def download_file(key: str, ctx: BackendContext = Depends(get_context)):
    """Serve a stored resume by its storage key."""
    path = ctx.blobs.path_for(key)
    if not path.is_file():
        raise NotFoundError("File not found")
    return FileResponse(path, filename=path.name)
