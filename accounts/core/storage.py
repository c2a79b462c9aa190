"""Local disk storage for uploaded profile pictures."""

import os
import secrets
import time
from pathlib import Path

from accounts.core.config import get_settings

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png"})


class StorageError(Exception):
    """Raised when an upload cannot be written."""


class LocalStorage:
    """Stores files flat under base_path, each under a generated unique name."""

    def __init__(self, base_path: str | Path) -> None:
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _sanitize_filename(filename: str) -> str:
        """Strip directory components, separators and null bytes; cap length."""
        filename = os.path.basename(filename)
        filename = filename.replace("/", "_").replace("\\", "_").replace("\x00", "")
        if len(filename) > 200:
            name, ext = os.path.splitext(filename)
            filename = name[: 200 - len(ext)] + ext
        return filename or "upload"

    @classmethod
    def unique_name(cls, filename: str) -> str:
        """<epoch ms>-<random>-<original name>, e.g. 1700000000000-482913-me.png"""
        suffix = secrets.randbelow(10**9)
        return f"{int(time.time() * 1000)}-{suffix}-{cls._sanitize_filename(filename)}"

    def save(self, filename: str, content: bytes) -> str:
        """
        Write content under a new unique name.

        Returns the stored path (base_path joined with the generated name).
        Raises StorageError if the file cannot be written.
        """
        file_path = self.base_path / self.unique_name(filename)
        try:
            file_path.write_bytes(content)
        except OSError as e:
            raise StorageError(f"Failed to save file: {e}") from e
        return file_path.as_posix()

    def delete(self, stored_path: str) -> None:
        """Remove a file previously returned by save(); missing files are ignored."""
        file_path = Path(stored_path)
        if file_path.parent.resolve() != self.base_path.resolve():
            raise StorageError(f"Not a stored file: {stored_path}")
        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete file: {e}") from e


def get_storage() -> LocalStorage:
    """Dependency: storage rooted at UPLOAD_DIR."""
    return LocalStorage(get_settings().UPLOAD_DIR)
