from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from jobportal.core.schemas import ApiResponse, Pagination
from jobportal.dependencies import get_job_service
from jobportal.models.user import User
from jobportal.routers.auth_deps import get_current_user, require_employer
from jobportal.schemas.job import JobCreate, JobUpdate, JobResponse
from jobportal.services.job_service import JobFilters, JobService, PageRequest

router = APIRouter(
    prefix="/jobs",
    tags=["Jobs"],
)


@router.get("", response_model=ApiResponse[List[JobResponse]])
def list_jobs(
    keyword: Optional[str] = None,
    category: Optional[str] = None,
    location: Optional[str] = None,
    type: Optional[str] = None,
    experience: Optional[str] = None,
    sort: Optional[str] = None,
    page: Optional[str] = Query(None, description="1-indexed page, defaults to 1"),
    limit: Optional[str] = Query(None, description="Page size, defaults to 10"),
    service: JobService = Depends(get_job_service),
):
    """
    Public listing of active jobs with optional filters, sorting and pagination.
    """
    filters = JobFilters(
        keyword=keyword,
        category=category,
        location=location,
        type=type,
        experience=experience,
    )
    page_request = PageRequest.parse(page=page, limit=limit, sort=sort)
    jobs, total = service.list_jobs(filters, page_request)

    return ApiResponse.ok(
        data=[JobResponse.model_validate(job) for job in jobs],
        count=len(jobs),
        total=total,
        pagination=Pagination(
            page=page_request.page,
            limit=page_request.limit,
            pages=page_request.pages_for(total),
        ),
    )


@router.get("/employer/my-jobs", response_model=ApiResponse[List[JobResponse]])
def get_my_jobs(
    current_user: User = Depends(require_employer),
    service: JobService = Depends(get_job_service),
):
    """Every job posted by the calling employer, active or not."""
    jobs = service.list_for_employer(current_user)
    return ApiResponse.ok(
        data=[JobResponse.model_validate(job) for job in jobs],
        count=len(jobs),
    )


@router.get("/{job_id}", response_model=ApiResponse[JobResponse])
def get_job(job_id: int, service: JobService = Depends(get_job_service)):
    job = service.get_job(job_id)
    return ApiResponse.ok(data=JobResponse.model_validate(job))


@router.post("", response_model=ApiResponse[JobResponse], status_code=status.HTTP_201_CREATED)
def create_job(
    job_in: JobCreate,
    current_user: User = Depends(require_employer),
    service: JobService = Depends(get_job_service),
):
    """
    Create a new job posting owned by the calling employer.
    """
    job = service.create_job(current_user, job_in)
    return ApiResponse.ok(data=JobResponse.model_validate(job))


@router.put("/{job_id}", response_model=ApiResponse[JobResponse])
def update_job(
    job_id: int,
    job_in: JobUpdate,
    current_user: User = Depends(get_current_user),
    service: JobService = Depends(get_job_service),
):
    """
    Update a job posting. Owner or admin only; omitted fields are left untouched.
    """
    job = service.update_job(job_id, job_in, current_user)
    return ApiResponse.ok(data=JobResponse.model_validate(job))


@router.delete("/{job_id}", response_model=ApiResponse[None])
def delete_job(
    job_id: int,
    current_user: User = Depends(get_current_user),
    service: JobService = Depends(get_job_service),
):
    service.delete_job(job_id, current_user)
    return ApiResponse.ok(message="Job deleted successfully")
