import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import FileResponse

from jobportal.core.schemas import ApiResponse
from jobportal.dependencies import get_resume_service
from jobportal.models.user import User
from jobportal.routers.auth_deps import get_current_user
from jobportal.schemas.resume import ResumeResponse
from jobportal.services.resume_service import ResumeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", tags=["Resumes"])


@router.post("/upload", response_model=ApiResponse[ResumeResponse])
def upload_resume(
    resume: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    """
    Upload a résumé (PDF, DOC, DOCX; 5MB max). Replaces the caller's current résumé.
    """
    content = b""
    mimetype = None
    original_name = None
    if resume is not None:
        # One byte past the limit is enough to know the upload is too large
        content = resume.file.read(service.max_bytes + 1)
        mimetype = resume.content_type
        original_name = resume.filename

    stored = service.upload(current_user, content, mimetype, original_name)
    return ApiResponse.ok(
        data=ResumeResponse.model_validate(stored),
        message="Resume uploaded successfully",
    )


@router.get("/my-resume", response_model=ApiResponse[ResumeResponse])
def get_my_resume(
    current_user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    resume = service.get_mine(current_user)
    return ApiResponse.ok(data=ResumeResponse.model_validate(resume))


@router.get("/download/{filename}")
def download_resume(
    filename: str,
    current_user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    path = service.resolve_download(filename)
    logger.info("Resume download", extra={"user_id": current_user.id, "stored_name": path.name})
    return FileResponse(path, filename=path.name)


@router.delete("/delete", response_model=ApiResponse[None])
def delete_resume(
    current_user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    service.delete(current_user)
    return ApiResponse.ok(message="Resume deleted successfully")
