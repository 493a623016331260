from typing import Optional
from datetime import datetime
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from jobportal.models.application import ApplicationStatus
from jobportal.schemas.job import JobSummary, UserSummary


class ApplicationCreate(BaseModel):
    job_id: int = Field(validation_alias=AliasChoices("jobId", "job_id"))
    cover_letter: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("coverLetter", "cover_letter"),
        max_length=1000,
        description="Cover letter cannot be more than 1000 characters",
    )


class ApplicationStatusUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    status: ApplicationStatus


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    # None once the job has been deleted
    job_id: Optional[int] = None
    applicant_id: int
    resume_filename: Optional[str] = None
    resume_original_name: Optional[str] = None
    resume_path: Optional[str] = None
    cover_letter: Optional[str] = None
    status: str
    applied_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    job: Optional[JobSummary] = None
    applicant: Optional[UserSummary] = None
