"""
Request-scoped service providers.

Every service is built from the request's session (and, for résumés, the
configured file store) so tests can swap either through dependency_overrides.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from jobportal.core.config import settings
from jobportal.database import get_db
from jobportal.services.application_service import ApplicationService
from jobportal.services.file_storage import FileStorage
from jobportal.services.job_service import JobService
from jobportal.services.resume_service import ResumeService


def get_file_storage() -> FileStorage:
    return FileStorage(settings.upload_dir, max_bytes=settings.max_resume_bytes)


def get_job_service(db: Session = Depends(get_db)) -> JobService:
    return JobService(db)


def get_application_service(db: Session = Depends(get_db)) -> ApplicationService:
    return ApplicationService(db)


def get_resume_service(
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
) -> ResumeService:
    return ResumeService(db, storage)
