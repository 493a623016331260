"""
User Model.
Roles are fixed at registration; the current résumé is a nullable pointer
into the resumes table.
"""
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Enum, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
import enum
from jobportal.database import Base


class UserRole(str, enum.Enum):
    """
    - JOB_SEEKER: applies to jobs, owns one active résumé
    - EMPLOYER: posts jobs and reviews their applicants
    - ADMIN: may update/delete any job
    """
    JOB_SEEKER = "job_seeker"
    EMPLOYER = "employer"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)

    role = Column(Enum(UserRole), default=UserRole.JOB_SEEKER, nullable=False)

    # Circular with resumes.user_id, hence use_alter
    resume_id = Column(Integer, ForeignKey("resumes.id", use_alter=True, name="fk_user_resume_id"), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # Relationships
    resume = relationship("Resume", foreign_keys=[resume_id], post_update=True)
    resumes = relationship("Resume", foreign_keys="Resume.user_id", back_populates="user")
    jobs = relationship("Job", back_populates="employer", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="applicant")

    def __repr__(self):
        return f"<User {self.email} ({self.role.value})>"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
