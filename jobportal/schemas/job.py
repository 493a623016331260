from typing import List, Optional
from datetime import datetime
from pydantic import AliasChoices, BaseModel, Field, ConfigDict, model_validator

from jobportal.models.job import JobType, ExperienceLevel, JobCategory


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class JobBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True, str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=200)
    company: str = Field(min_length=1)
    location: str = Field(min_length=1)
    type: JobType
    experience: ExperienceLevel
    category: JobCategory
    salary_min: Optional[float] = Field(default=None, ge=0)
    salary_max: Optional[float] = Field(default=None, ge=0)
    salary_currency: str = "USD"
    salary_range: str = Field(min_length=1)
    description: str = Field(min_length=1)
    requirements: str = Field(min_length=1)
    skills: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    application_deadline: Optional[datetime] = None
    is_active: bool = True
    is_featured: bool = False


class JobCreate(JobBase):
    @model_validator(mode="after")
    def check_salary_bounds(self):
        if self.salary_min is not None and self.salary_max is not None and self.salary_min > self.salary_max:
            raise ValueError("salary_min cannot be greater than salary_max")
        return self


# Columns that may be omitted from an update but never cleared by one
_NON_NULLABLE = {
    "title", "company", "location", "type", "experience", "category",
    "salary_currency", "salary_range", "description", "requirements",
    "skills", "benefits", "is_active", "is_featured",
}


class JobUpdate(BaseModel):
    """Partial update: only the fields present in the request body are applied."""
    model_config = ConfigDict(use_enum_values=True, str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    company: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = Field(default=None, min_length=1)
    type: Optional[JobType] = None
    experience: Optional[ExperienceLevel] = None
    category: Optional[JobCategory] = None
    salary_min: Optional[float] = Field(default=None, ge=0)
    salary_max: Optional[float] = Field(default=None, ge=0)
    salary_currency: Optional[str] = None
    salary_range: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    requirements: Optional[str] = Field(default=None, min_length=1)
    skills: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    application_deadline: Optional[datetime] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None

    @model_validator(mode="after")
    def reject_cleared_required_fields(self):
        cleared = sorted(f for f in self.model_fields_set & _NON_NULLABLE if getattr(self, f) is None)
        if cleared:
            raise ValueError(f"Fields cannot be null: {', '.join(cleared)}")
        return self


class JobResponse(JobBase):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: int
    employer_id: int
    employer: Optional[UserSummary] = None
    applications: List[int] = Field(
        default_factory=list,
        validation_alias=AliasChoices("application_ids", "applications"),
    )
    applications_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JobSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    company: str
    location: str
    type: str
    salary_range: str
