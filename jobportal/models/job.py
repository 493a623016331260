from datetime import datetime, timezone
import enum
from sqlalchemy import Column, Integer, String, Text, Float, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from jobportal.database import Base


class JobType(str, enum.Enum):
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    INTERNSHIP = "Internship"
    REMOTE = "Remote"


class ExperienceLevel(str, enum.Enum):
    ENTRY = "Entry Level"
    MID = "Mid Level"
    SENIOR = "Senior Level"


class JobCategory(str, enum.Enum):
    TECHNOLOGY = "Technology"
    MARKETING = "Marketing"
    FINANCE = "Finance"
    HEALTHCARE = "Healthcare"
    DESIGN = "Design"
    SALES = "Sales"
    OTHER = "Other"


def _utcnow():
    return datetime.now(timezone.utc)


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    company = Column(String, nullable=False)
    location = Column(String, nullable=False)
    type = Column(String, nullable=False)
    experience = Column(String, nullable=False)
    category = Column(String, index=True, nullable=False)

    salary_min = Column(Float, nullable=True)
    salary_max = Column(Float, nullable=True)
    salary_currency = Column(String, default="USD", nullable=False)
    salary_range = Column(String, nullable=False)

    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=False)
    skills = Column(JSON, default=list, nullable=False)
    benefits = Column(JSON, default=list, nullable=False)
    application_deadline = Column(DateTime(timezone=True), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False, index=True)
    is_featured = Column(Boolean, default=False, nullable=False)

    employer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    employer = relationship("User", back_populates="jobs")
    # Derived from applications.job_id; no redundant id list is stored on the job.
    # Deleting a job keeps its applications with job_id set to NULL.
    applications = relationship(
        "Application",
        back_populates="job",
        order_by="Application.id",
    )

    @property
    def application_ids(self):
        return [a.id for a in self.applications]

    @property
    def applications_count(self) -> int:
        return len(self.applications)
