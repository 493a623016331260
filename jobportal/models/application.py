from datetime import datetime, timezone
import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from jobportal.database import Base


class ApplicationStatus(str, enum.Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


def _utcnow():
    return datetime.now(timezone.utc)


class Application(Base):
    __tablename__ = "applications"
    # At most one application per user per job
    __table_args__ = (UniqueConstraint("job_id", "applicant_id", name="uq_application_job_applicant"),)

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="SET NULL"), nullable=True, index=True)
    applicant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Résumé snapshot taken at apply time
    resume_filename = Column(String, nullable=True)
    resume_original_name = Column(String, nullable=True)
    resume_path = Column(String, nullable=True)

    cover_letter = Column(Text, nullable=True)
    status = Column(String(20), default=ApplicationStatus.PENDING.value, nullable=False)
    applied_at = Column(DateTime(timezone=True), default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    job = relationship("Job", back_populates="applications")
    applicant = relationship("User", back_populates="applications")
