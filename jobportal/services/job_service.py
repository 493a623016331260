"""
Job store and public listing query builder.
"""
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from jobportal.core.exceptions import InvalidInputError, NotFoundError
from jobportal.core.policy import Action, ensure_allowed
from jobportal.models.job import Job
from jobportal.models.user import User
from jobportal.schemas.job import JobCreate, JobUpdate
from jobportal.services.base import BaseService

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_SORT = "newest"
MAX_LIMIT = 100

SORT_FIELDS = {
    "newest": (Job.created_at.desc(), Job.id.desc()),
    "oldest": (Job.created_at.asc(), Job.id.asc()),
    "salary-high": (Job.salary_max.desc(), Job.id.desc()),
    "salary-low": (Job.salary_min.asc(), Job.id.asc()),
}

# Fields covered by keyword search
SEARCH_FIELDS = (Job.title, Job.description, Job.company)


def _positive_int(raw, default: int, maximum: Optional[int] = None) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    if value < 1:
        return default
    return min(value, maximum) if maximum else value


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


@dataclass
class JobFilters:
    keyword: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    experience: Optional[str] = None


@dataclass
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort: str = DEFAULT_SORT

    @classmethod
    def parse(cls, page=None, limit=None, sort=None) -> "PageRequest":
        """Lenient parsing: bad or missing values fall back to the defaults."""
        return cls(
            page=_positive_int(page, DEFAULT_PAGE),
            limit=_positive_int(limit, DEFAULT_LIMIT, MAX_LIMIT),
            sort=sort if sort in SORT_FIELDS else DEFAULT_SORT,
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def pages_for(self, total: int) -> int:
        return math.ceil(total / self.limit)


class JobService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)

    def _base_query(self):
        return self.db.query(Job).options(
            selectinload(Job.employer),
            selectinload(Job.applications),
        )

    def build_listing_query(self, filters: JobFilters):
        """Public listing: active jobs only, every supplied filter ANDed."""
        query = self._base_query().filter(Job.is_active.is_(True))

        if filters.keyword and filters.keyword.strip():
            terms = filters.keyword.split()
            query = query.filter(or_(*[
                field.ilike(_like_pattern(term), escape="\\")
                for term in terms
                for field in SEARCH_FIELDS
            ]))

        if filters.category:
            query = query.filter(Job.category == filters.category)

        if filters.location:
            query = query.filter(Job.location.ilike(_like_pattern(filters.location), escape="\\"))

        if filters.type:
            query = query.filter(Job.type == filters.type)

        if filters.experience:
            query = query.filter(Job.experience == filters.experience)

        return query

    def list_jobs(self, filters: JobFilters, page: PageRequest) -> Tuple[List[Job], int]:
        query = self.build_listing_query(filters)
        total = query.order_by(None).count()
        if page.offset >= total:
            # Past the last page; also keeps huge offsets away from the driver
            return [], total
        items = (
            query.order_by(*SORT_FIELDS[page.sort])
            .offset(page.offset)
            .limit(page.limit)
            .all()
        )
        return items, total

    def get_job(self, job_id: int) -> Job:
        job = self._base_query().filter(Job.id == job_id).first()
        if not job:
            raise NotFoundError("Job not found")
        return job

    def create_job(self, owner: User, job_in: JobCreate) -> Job:
        job = Job(**job_in.model_dump(), employer_id=owner.id)
        self.db.add(job)
        self.db.commit()
        self.db.refresh(job)
        self.log_info("Job created", job_id=job.id, employer_id=owner.id)
        return job

    def update_job(self, job_id: int, job_in: JobUpdate, requester: User) -> Job:
        job = self.get_job(job_id)
        ensure_allowed(requester, Action.UPDATE_JOB, job)

        update_data = job_in.model_dump(exclude_unset=True)

        salary_min = update_data.get("salary_min", job.salary_min)
        salary_max = update_data.get("salary_max", job.salary_max)
        if salary_min is not None and salary_max is not None and salary_min > salary_max:
            raise InvalidInputError("salary_min cannot be greater than salary_max")

        for field, value in update_data.items():
            setattr(job, field, value)

        self.db.commit()
        self.db.refresh(job)
        self.log_info("Job updated", job_id=job.id, fields=sorted(update_data))
        return job

    def delete_job(self, job_id: int, requester: User) -> None:
        job = self.get_job(job_id)
        ensure_allowed(requester, Action.DELETE_JOB, job)

        self.db.delete(job)
        self.db.commit()
        self.log_info("Job deleted", job_id=job_id, requester_id=requester.id)

    def list_for_employer(self, owner: User) -> List[Job]:
        return (
            self._base_query()
            .filter(Job.employer_id == owner.id)
            .order_by(Job.created_at.desc(), Job.id.desc())
            .all()
        )

    def count_jobs(self) -> int:
        return self.db.query(Job).count()
