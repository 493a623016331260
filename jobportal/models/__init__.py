# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import user, job, application, resume

# Explicit class exports for cleaner imports
from .user import User, UserRole
from .job import Job, JobType, ExperienceLevel, JobCategory
from .application import Application, ApplicationStatus
from .resume import Resume

__all__ = [
    "User",
    "UserRole",
    "Job",
    "JobType",
    "ExperienceLevel",
    "JobCategory",
    "Application",
    "ApplicationStatus",
    "Resume",
]
