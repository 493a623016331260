"""
Ownership policy.

All "may this user do X to that resource" decisions go through `authorize`.
The admin bypass, where one exists, is declared in `_RULES`.
"""
from enum import Enum
from typing import Callable, Dict

from jobportal.core.exceptions import AccessDeniedError
from jobportal.models.user import User, UserRole


class Action(str, Enum):
    UPDATE_JOB = "job:update"
    DELETE_JOB = "job:delete"
    VIEW_JOB_APPLICATIONS = "job:view_applications"
    SET_APPLICATION_STATUS = "application:set_status"


def _owns_job(subject: User, job) -> bool:
    return job.employer_id == subject.id


def _owns_job_or_admin(subject: User, job) -> bool:
    return _owns_job(subject, job) or subject.role == UserRole.ADMIN


def _owns_parent_job(subject: User, application) -> bool:
    if application.job is None:
        return False
    return _owns_job(subject, application.job)


_RULES: Dict[Action, Callable] = {
    Action.UPDATE_JOB: _owns_job_or_admin,
    Action.DELETE_JOB: _owns_job_or_admin,
    Action.VIEW_JOB_APPLICATIONS: _owns_job,
    Action.SET_APPLICATION_STATUS: _owns_parent_job,
}

_DENIED_MESSAGES: Dict[Action, str] = {
    Action.UPDATE_JOB: "Not authorized to update this job",
    Action.DELETE_JOB: "Not authorized to delete this job",
    Action.VIEW_JOB_APPLICATIONS: "Not authorized to view applications for this job",
    Action.SET_APPLICATION_STATUS: "Not authorized to update this application",
}


def authorize(subject: User, action: Action, resource) -> bool:
    """Return True when `subject` may perform `action` on `resource`."""
    rule = _RULES.get(Action(action))
    if rule is None:
        return False
    return bool(rule(subject, resource))


def ensure_allowed(subject: User, action: Action, resource) -> None:
    if not authorize(subject, action, resource):
        raise AccessDeniedError(_DENIED_MESSAGES[Action(action)])
