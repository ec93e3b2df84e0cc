"""
Abstract base class for storage providers.

This module defines the StorageProvider interface that all storage
implementations must follow, together with the storage error taxonomy.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Optional

from ...models.stored_file import StoredFile


@dataclass
class StagedUpload:
    """An upload fully written to the staging area but not yet visible."""
    temp_path: Path
    size_bytes: int


class StorageProvider(ABC):
    """
    Abstract base class for storage providers.

    Storage providers handle the backend-specific logic for writing,
    enumerating and moving stored files. Naming policy and request
    validation live in StorageService.
    """

    @abstractmethod
    def list_files(self) -> List[StoredFile]:
        """
        Enumerate the files directly under the storage root.

        Returns:
            StoredFile objects in enumeration order

        Raises:
            StorageIOError: If the storage root cannot be read
        """
        pass

    @abstractmethod
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
        pass

    @abstractmethod
    def entry_exists(self, name: str) -> bool:
        """
        Check whether any entry with the given name exists.

        Args:
            name: Entry name under the storage root

        Returns:
            True if a file, directory or link occupies the name
        """
        pass

    @abstractmethod
    def stage_upload(self, stream: BinaryIO, max_bytes: int) -> StagedUpload:
        """
        Write an upload stream to the staging area.

        Args:
            stream: Readable binary stream with the upload content
            max_bytes: Size ceiling for the upload

        Returns:
            StagedUpload describing the staged content

        Raises:
            PayloadTooLargeError: If the stream exceeds max_bytes
            StorageIOError: If the staged file cannot be written
        """
        pass

    @abstractmethod
    def commit_upload(self, staged: StagedUpload, name: str) -> Path:
        """
        Atomically move a staged upload into place, replacing any existing file.

        Args:
            staged: Upload returned by stage_upload
            name: Final file name under the storage root

        Returns:
            Path of the committed file
        """
        pass

    @abstractmethod
    def discard_upload(self, staged: StagedUpload) -> None:
        """Remove a staged upload that will not be committed."""
        pass

    @abstractmethod
    def rename_file(self, old_name: str, new_name: str) -> None:
        """
        Move a stored file to a new name within the storage root.

        Raises:
            StorageIOError: If the filesystem refuses the rename
        """
        pass


class StorageError(Exception):
    """Exception raised for storage-related errors."""
    status_code = 500
    title = "Storage Error"


class StorageValidationError(StorageError):
    """Exception raised for missing or malformed input."""
    status_code = 400
    title = "Validation Error"


class StoredFileNotFoundError(StorageError):
    """Exception raised when a name does not resolve to a stored file."""
    status_code = 404
    title = "Not Found"


class StorageConflictError(StorageError):
    """Exception raised when a target name is already occupied."""
    status_code = 400
    title = "Conflict"


class PayloadTooLargeError(StorageError):
    """Exception raised when an upload exceeds the size ceiling."""
    status_code = 413
    title = "Payload Too Large"


class UnsupportedMediaTypeError(StorageError):
    """Exception raised when a non-image file is requested as an image."""
    status_code = 400
    title = "Unsupported Media Type"


class StorageIOError(StorageError):
    """Exception raised for unexpected filesystem failures."""
    status_code = 500
    title = "I/O Error"
