from pathlib import Path
from typing import Optional

from sqlalchemy.orm import Session

from jobportal.core.exceptions import NotFoundError
from jobportal.models.application import Application
from jobportal.models.resume import Resume
from jobportal.models.user import User
from jobportal.services.base import BaseService
from jobportal.services.file_storage import FileStorage


class ResumeService(BaseService):
    """
    Keeps the résumé file on disk and its metadata row in step.

    A replaced or deleted file is removed only after the metadata change is
    committed, and only when no application snapshot still points at it.
    Replaced files are therefore cleaned up instead of being left on disk.
    """
    def __init__(self, db: Session, storage: FileStorage):
        super().__init__(db)
        self.storage = storage

    @property
    def max_bytes(self) -> int:
        return self.storage.max_bytes

    def upload(self, user: User, content: bytes, mimetype: Optional[str], original_name: Optional[str]) -> Resume:
        self.storage.validate(content, mimetype)
        stored = self.storage.save(content, original_name)

        previous = user.resume
        try:
            resume = Resume(
                user_id=user.id,
                filename=stored.filename,
                original_name=original_name or stored.filename,
                path=stored.path,
                size=stored.size,
                mimetype=mimetype,
            )
            self.db.add(resume)
            if previous is not None:
                previous.is_active = False
            user.resume = resume
            self.db.commit()
        except Exception:
            self.db.rollback()
            self.storage.remove(stored.filename)
            raise

        self.db.refresh(resume)
        self.log_info("Resume uploaded", resume_id=resume.id, user_id=user.id, size=stored.size)

        if previous is not None:
            self._discard_file(previous)
        return resume

    def get_mine(self, user: User) -> Resume:
        if user.resume is None:
            raise NotFoundError("No resume found")
        return user.resume

    def delete(self, user: User) -> Optional[Resume]:
        resume = user.resume
        if resume is None:
            return None

        resume.is_active = False
        user.resume = None
        self.db.commit()
        self.log_info("Resume unlinked", resume_id=resume.id, user_id=user.id)

        self._discard_file(resume)
        return resume

    def resolve_download(self, filename: str) -> Path:
        return self.storage.resolve(filename)

    def _discard_file(self, resume: Resume) -> None:
        still_referenced = self.db.query(Application.id).filter(
            Application.resume_filename == resume.filename
        ).first()
        if still_referenced:
            self.log_info("Keeping resume file referenced by an application", resume_id=resume.id)
            return
        self.storage.remove(resume.filename)
