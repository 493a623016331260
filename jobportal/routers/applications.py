from typing import List

from fastapi import APIRouter, Depends, status

from jobportal.core.schemas import ApiResponse
from jobportal.dependencies import get_application_service
from jobportal.models.user import User
from jobportal.routers.auth_deps import get_current_user
from jobportal.schemas.application import (
    ApplicationCreate, ApplicationResponse, ApplicationStatusUpdate
)
from jobportal.services.application_service import ApplicationService

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.post("", response_model=ApiResponse[ApplicationResponse], status_code=status.HTTP_201_CREATED)
def apply_for_job(
    application_in: ApplicationCreate,
    current_user: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    """
    Apply for a job. The applicant's current résumé is snapshotted onto the application.
    """
    application = service.apply(
        application_in.job_id,
        current_user,
        cover_letter=application_in.cover_letter,
    )
    return ApiResponse.ok(data=ApplicationResponse.model_validate(application))


@router.get("/my-applications", response_model=ApiResponse[List[ApplicationResponse]])
def get_my_applications(
    current_user: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    applications = service.list_mine(current_user)
    return ApiResponse.ok(
        data=[ApplicationResponse.model_validate(a) for a in applications],
        count=len(applications),
    )


@router.get("/job/{job_id}", response_model=ApiResponse[List[ApplicationResponse]])
def get_job_applications(
    job_id: int,
    current_user: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    """Applicants for one job. Only the job's employer may look."""
    applications = service.list_for_job(job_id, current_user)
    return ApiResponse.ok(
        data=[ApplicationResponse.model_validate(a) for a in applications],
        count=len(applications),
    )


@router.put("/{application_id}/status", response_model=ApiResponse[ApplicationResponse])
def update_application_status(
    application_id: int,
    update: ApplicationStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    application = service.set_status(application_id, current_user, update.status)
    return ApiResponse.ok(data=ApplicationResponse.model_validate(application))
