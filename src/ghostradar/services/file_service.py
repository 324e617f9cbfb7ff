"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Cross-platform file removal: move to the system trash (default) or unlink permanently.
"""
import os
from pathlib import Path
from typing import Callable
from send2trash import send2trash

from ghostradar.core.models import DeletionMethod


class FileService:
    """
    File removal backends used by the retention engine.
    Missing files raise FileNotFoundError, backend failures are wrapped in RuntimeError.
    """

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e

    @staticmethod
    def delete_permanently(file_path: str):
        """Unlinks a file. This cannot be undone."""
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            os.remove(path)
        except OSError as e:
            raise RuntimeError(f"Failed to delete file: {e}") from e

    @classmethod
    def remover_for(cls, method: DeletionMethod) -> Callable[[str], None]:
        """Returns the removal function for a deletion method."""
        if method == DeletionMethod.PERMANENT:
            return cls.delete_permanently
        return cls.move_to_trash
