from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from jobportal.core.exceptions import DuplicateApplicationError, InvalidInputError, NotFoundError
from jobportal.core.policy import Action, ensure_allowed
from jobportal.models.application import Application, ApplicationStatus
from jobportal.models.job import Job
from jobportal.models.user import User
from jobportal.services.base import BaseService

VALID_STATUSES = {s.value for s in ApplicationStatus}


class ApplicationService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)

    def _get_job(self, job_id: int) -> Job:
        job = self.db.get(Job, job_id)
        if not job:
            raise NotFoundError("Job not found")
        return job

    def _find_existing(self, job_id: int, applicant_id: int) -> Optional[int]:
        row = self.db.query(Application.id).filter(
            Application.job_id == job_id,
            Application.applicant_id == applicant_id,
        ).first()
        return row[0] if row else None

    def apply(self, job_id: int, applicant: User, cover_letter: Optional[str] = None) -> Application:
        """
        Create the single application allowed for (job, applicant).

        The pre-check only gives a friendly message; the UNIQUE constraint on
        (job_id, applicant_id) is what decides concurrent submissions.
        """
        job = self._get_job(job_id)

        if self._find_existing(job.id, applicant.id) is not None:
            self.log_warning("Duplicate application rejected", job_id=job.id, applicant_id=applicant.id)
            raise DuplicateApplicationError()

        resume = applicant.resume
        application = Application(
            job_id=job.id,
            applicant_id=applicant.id,
            cover_letter=cover_letter,
            resume_filename=resume.filename if resume else None,
            resume_original_name=resume.original_name if resume else None,
            resume_path=resume.path if resume else None,
        )
        self.db.add(application)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            self.log_warning("Duplicate application lost the insert race", job_id=job.id, applicant_id=applicant.id)
            raise DuplicateApplicationError()

        self.db.refresh(application)
        self.log_info("Application created", application_id=application.id, job_id=job.id)
        return application

    def list_mine(self, applicant: User) -> List[Application]:
        return (
            self.db.query(Application)
            .options(selectinload(Application.job))
            .filter(Application.applicant_id == applicant.id)
            .order_by(Application.applied_at.desc(), Application.id.desc())
            .all()
        )

    def list_for_job(self, job_id: int, requester: User) -> List[Application]:
        job = self._get_job(job_id)
        ensure_allowed(requester, Action.VIEW_JOB_APPLICATIONS, job)

        return (
            self.db.query(Application)
            .options(selectinload(Application.applicant))
            .filter(Application.job_id == job.id)
            .order_by(Application.applied_at.desc(), Application.id.desc())
            .all()
        )

    def set_status(self, application_id: int, requester: User, status: str) -> Application:
        application = self.db.get(Application, application_id)
        if not application:
            raise NotFoundError("Application not found")

        ensure_allowed(requester, Action.SET_APPLICATION_STATUS, application)

        status = status.value if isinstance(status, ApplicationStatus) else status
        if status not in VALID_STATUSES:
            raise InvalidInputError(
                f"Invalid status '{status}'. Allowed: {', '.join(sorted(VALID_STATUSES))}"
            )

        previous = application.status
        application.status = status
        self.db.commit()
        self.db.refresh(application)
        self.log_info(
            "Application status changed",
            application_id=application.id,
            from_status=previous,
            to_status=status,
        )
        return application
