"""
Filesystem storage provider implementation.

This module contains the FilesystemStorageProvider that implements storage
operations for a single flat directory on the local filesystem.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import BinaryIO, List, Optional

from .base import (
    StorageProvider,
    StagedUpload,
    StorageIOError,
    PayloadTooLargeError,
)
from ..root import StorageRoot
from ...models.stored_file import StoredFile

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
STORED_FILE_MODE = 0o644


class FilesystemStorageProvider(StorageProvider):
    """
    Filesystem implementation of StorageProvider.

    Uploads are streamed into a staging directory inside the root and
    moved into place with os.replace, so readers only ever observe
    complete files.
    """

    def __init__(self, root: StorageRoot):
        """
        Initialize filesystem storage provider.

        Args:
            root: Storage root holding the stored files
        """
        self.root = root

    @property
    def storage_path(self) -> Path:
        return self.root.path

    def _ensure_staging(self) -> Path:
        """Create the storage root and staging directory if absent."""
        staging = self.root.staging_path
        try:
            staging.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create staging directory {staging}: {e}")
            raise StorageIOError(f"Failed to prepare storage directory: {e}") from e
        return staging

    def list_files(self) -> List[StoredFile]:
        """
        Enumerate regular files directly under the storage root.

        Returns:
            StoredFile objects in filesystem enumeration order

        Raises:
            StorageIOError: If the storage root cannot be read
        """
        try:
            entries = list(os.scandir(self.storage_path))
        except OSError as e:
            logger.error(f"Error reading storage directory {self.storage_path}: {e}")
            raise StorageIOError(f"Failed to read storage directory: {e}") from e

        files = []
        for entry in entries:
            try:
                if not entry.is_file():
                    logger.debug(f"Skipping non-file entry: {entry.name}")
                    continue
                stats = entry.stat()
            except FileNotFoundError:
                # Renamed away between scandir and stat
                continue
            except OSError as e:
                raise StorageIOError(f"Failed to inspect {entry.name}: {e}") from e

            files.append(StoredFile.from_stat(Path(entry.path), stats))

        logger.debug(f"Listed {len(files)} files in {self.storage_path}")
        return files

    def get_file(self, name: str) -> Optional[StoredFile]:
        """
        Get a stored file by name.

        Args:
            name: File name under the storage root

        Returns:
            StoredFile if a regular file with that name exists, None otherwise

        Raises:
            StorageIOError: If the file cannot be inspected
        """
        path = self.root.resolve(name)
        try:
            stats = path.stat()
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as e:
            logger.error(f"Error inspecting {path}: {e}")
            raise StorageIOError(f"Failed to inspect {name}: {e}") from e

        if not path.is_file():
            return None
        return StoredFile.from_stat(path, stats)

    def entry_exists(self, name: str) -> bool:
        return os.path.lexists(self.root.resolve(name))

    def stage_upload(self, stream: BinaryIO, max_bytes: int) -> StagedUpload:
        """
        Stream an upload into a temporary file in the staging directory.

        Args:
            stream: Readable binary stream with the upload content
            max_bytes: Size ceiling for the upload

        Returns:
            StagedUpload describing the staged content

        Raises:
            PayloadTooLargeError: If the stream exceeds max_bytes
            StorageIOError: If the staged file cannot be written
        """
        staging = self._ensure_staging()
        try:
            fd, temp_name = tempfile.mkstemp(dir=staging, suffix=".part")
        except OSError as e:
            raise StorageIOError(f"Failed to create staging file: {e}") from e

        temp_path = Path(temp_name)
        written = 0
        try:
            with os.fdopen(fd, "wb") as f:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > max_bytes:
                        raise PayloadTooLargeError(
                            f"File too large. Max size: {max_bytes} bytes"
                        )
                    f.write(chunk)
            # mkstemp creates owner-only files
            os.chmod(temp_path, STORED_FILE_MODE)
        except PayloadTooLargeError:
            temp_path.unlink(missing_ok=True)
            raise
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            logger.error(f"Error writing staging file {temp_path}: {e}")
            raise StorageIOError(f"Failed to write upload: {e}") from e

        return StagedUpload(temp_path=temp_path, size_bytes=written)

    def commit_upload(self, staged: StagedUpload, name: str) -> Path:
        target = self.root.resolve(name)
        try:
            os.replace(staged.temp_path, target)
        except OSError as e:
            logger.error(f"Error committing {staged.temp_path} to {target}: {e}")
            raise StorageIOError(f"Failed to store {name}: {e}") from e
        return target

    def discard_upload(self, staged: StagedUpload) -> None:
        try:
            staged.temp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove staging file {staged.temp_path}: {e}")

    def rename_file(self, old_name: str, new_name: str) -> None:
        """
        Move a stored file to a new name within the storage root.

        Raises:
            StorageIOError: If the filesystem refuses the rename
        """
        old_path = self.root.resolve(old_name)
        new_path = self.root.resolve(new_name)
        try:
            os.rename(old_path, new_path)
        except OSError as e:
            logger.error(f"Error renaming {old_path} to {new_path}: {e}")
            raise StorageIOError(f"Failed to rename {old_name}: {e}") from e
