"""
Disk-backed storage for uploaded résumé files.
"""
import logging
import os
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from jobportal.core.exceptions import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

ALLOWED_MIMETYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

_FORBIDDEN_NAME_PARTS = ("/", "\\", "..", "\x00")


@dataclass
class StoredFile:
    filename: str
    path: str
    size: int


class FileStorage:
    def __init__(self, directory: str, max_bytes: int, prefix: str = "resume"):
        self.directory = Path(directory)
        self.max_bytes = max_bytes
        self.prefix = prefix

    def validate(self, content: Optional[bytes], mimetype: Optional[str]) -> None:
        """Reject an upload before anything touches the disk."""
        if not content:
            raise InvalidInputError("Please upload a file")
        if mimetype not in ALLOWED_MIMETYPES:
            raise InvalidInputError("Only PDF, DOC, and DOCX files are allowed")
        if len(content) > self.max_bytes:
            raise InvalidInputError(
                f"File too large. Maximum size is {self.max_bytes // (1024 * 1024)}MB"
            )

    def generate_filename(self, original_name: Optional[str]) -> str:
        ext = os.path.splitext(original_name or "")[1].lower()
        unique_suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
        return f"{self.prefix}-{unique_suffix}{ext}"

    def save(self, content: bytes, original_name: Optional[str]) -> StoredFile:
        self.directory.mkdir(parents=True, exist_ok=True)
        while True:
            filename = self.generate_filename(original_name)
            path = self.directory / filename
            try:
                # "xb" refuses to overwrite, so a name collision just draws again
                with open(path, "xb") as out:
                    out.write(content)
                break
            except FileExistsError:
                continue
        logger.info("Stored uploaded file", extra={"stored_name": filename, "size": len(content)})
        return StoredFile(filename=filename, path=str(path), size=len(content))

    def resolve(self, filename: str) -> Path:
        if not filename or any(part in filename for part in _FORBIDDEN_NAME_PARTS):
            raise InvalidInputError("Invalid filename")
        root = self.directory.resolve()
        path = (root / filename).resolve()
        if path.parent != root:
            raise InvalidInputError("Invalid filename")
        if not path.is_file():
            raise NotFoundError("File not found")
        return path

    def remove(self, filename: str) -> bool:
        path = self.directory / filename
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("File already gone", extra={"stored_name": filename})
            return False
        logger.info("Removed stored file", extra={"stored_name": filename})
        return True
