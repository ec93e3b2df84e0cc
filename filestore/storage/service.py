"""
Storage service layer for the file storage operations.

This module provides the StorageService class that acts as the main interface
between the API and storage providers. It owns the naming policy, input
validation and the translation of failures into storage errors.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Sequence, Tuple

from ..models.stored_file import StoredFile, UploadedFile, RetrievedFile
from .naming import InvalidNameError, build_stored_name, validate_entry_name
from .providers.base import (
    StorageProvider,
    StagedUpload,
    StorageError,
    StorageValidationError,
    StoredFileNotFoundError,
    StorageConflictError,
    StorageIOError,
    UnsupportedMediaTypeError,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class UploadItem:
    """A single file of an upload batch."""
    stream: BinaryIO
    original_name: str
    content_type: Optional[str] = None
    suggested_name: Optional[str] = None


class StorageService:
    """
    File storage operations over a single flat storage root.

    The service keeps no state between calls; every operation reads the
    filesystem through the provider, which is the only source of truth.
    """

    def __init__(self, provider: StorageProvider, max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES):
        """
        Initialize storage service.

        Args:
            provider: Storage provider implementation
            max_upload_bytes: Per-file size ceiling for uploads
        """
        if max_upload_bytes <= 0:
            raise ValueError("max_upload_bytes must be positive")
        self.provider = provider
        self.max_upload_bytes = max_upload_bytes

    @staticmethod
    def _validate_name(name: Optional[str]) -> str:
        try:
            return validate_entry_name(name)
        except InvalidNameError as e:
            raise StorageValidationError(str(e)) from e

    def store(self, items: Sequence[UploadItem]) -> List[UploadedFile]:
        """
        Store a batch of uploaded files.

        Every file is staged before any of them is committed, so a batch
        that fails part way leaves no new entries behind. Files whose
        resolved name already exists are overwritten.

        Args:
            items: Uploaded files in request order

        Returns:
            UploadedFile descriptors in the same order

        Raises:
            StorageValidationError: If the batch is empty or a resolved name is unsafe
            PayloadTooLargeError: If a file exceeds the size ceiling
            StorageIOError: If the filesystem write fails
        """
        if not items:
            raise StorageValidationError("No files uploaded")

        staged: List[Tuple[UploadItem, str, StagedUpload]] = []
        try:
            for item in items:
                stored_name = self._validate_name(
                    build_stored_name(item.original_name, item.suggested_name)
                )
                upload = self.provider.stage_upload(item.stream, self.max_upload_bytes)
                staged.append((item, stored_name, upload))

            results = []
            for item, stored_name, upload in staged:
                path = self.provider.commit_upload(upload, stored_name)
                results.append(UploadedFile(
                    original_name=item.original_name,
                    stored_name=stored_name,
                    path=str(path),
                    size_bytes=upload.size_bytes,
                    content_type=item.content_type
                ))

        except StorageError as e:
            logger.warning(f"Upload batch rejected: {e}")
            self._discard(staged)
            raise
        except Exception as e:
            logger.error(f"Unexpected error storing upload batch: {e}", exc_info=True)
            self._discard(staged)
            raise StorageIOError(f"Error uploading files: {e}") from e

        logger.info(f"Stored {len(results)} file(s): {', '.join(r.stored_name for r in results)}")
        return results

    def _discard(self, staged: List[Tuple[UploadItem, str, StagedUpload]]) -> None:
        for _, _, upload in staged:
            self.provider.discard_upload(upload)

    def list_files(self) -> List[StoredFile]:
        """
        List the files in the storage root.

        The order is whatever the filesystem enumerates and may differ
        between calls.

        Raises:
            StorageIOError: If the storage root cannot be read
        """
        try:
            return self.provider.list_files()
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Error listing files: {e}", exc_info=True)
            raise StorageIOError(f"Error reading files: {e}") from e

    def _get_stored_file(self, name: str) -> StoredFile:
        self._validate_name(name)
        try:
            stored = self.provider.get_file(name)
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Error retrieving {name}: {e}", exc_info=True)
            raise StorageIOError(f"Error reading file: {e}") from e

        if stored is None:
            raise StoredFileNotFoundError("File not found")
        return stored

    @staticmethod
    def _as_retrieved(stored: StoredFile) -> RetrievedFile:
        return RetrievedFile(
            name=stored.name,
            path=Path(stored.path),
            size_bytes=stored.size_bytes,
            content_type=stored.content_type or DEFAULT_CONTENT_TYPE
        )

    def retrieve(self, name: str) -> RetrievedFile:
        """
        Resolve a stored file for download.

        Args:
            name: Name of the stored file

        Returns:
            RetrievedFile pointing at the file content

        Raises:
            StorageValidationError: If the name is unsafe
            StoredFileNotFoundError: If no file with that name exists
        """
        return self._as_retrieved(self._get_stored_file(name))

    def retrieve_image(self, name: str) -> RetrievedFile:
        """
        Resolve a stored file that must be an image.

        Raises:
            StorageValidationError: If the name is unsafe
            StoredFileNotFoundError: If no file with that name exists
            UnsupportedMediaTypeError: If the file's content type is not image/*
        """
        stored = self._get_stored_file(name)
        if not stored.is_image:
            raise UnsupportedMediaTypeError("Requested file is not an image")
        return self._as_retrieved(stored)

    def rename(self, old_name: Optional[str], new_name: Optional[str]) -> Dict[str, str]:
        """
        Rename a stored file within the storage root.

        A failed rename leaves both names exactly as they were.

        Args:
            old_name: Current name of the file
            new_name: Name to move the file to

        Returns:
            Dictionary with old_name and new_name

        Raises:
            StorageValidationError: If either name is missing or unsafe
            StoredFileNotFoundError: If old_name does not exist
            StorageConflictError: If new_name is already taken
            StorageIOError: If the filesystem rename fails
        """
        if not old_name or not new_name:
            raise StorageValidationError("Both oldName and newName are required")
        self._validate_name(old_name)
        self._validate_name(new_name)

        try:
            if self.provider.get_file(old_name) is None:
                raise StoredFileNotFoundError("File not found")
            if self.provider.entry_exists(new_name):
                raise StorageConflictError("A file with that name already exists")

            self.provider.rename_file(old_name, new_name)

        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Error renaming {old_name} to {new_name}: {e}", exc_info=True)
            raise StorageIOError(f"Error renaming file: {e}") from e

        logger.info(f"Renamed {old_name} -> {new_name}")
        return {"old_name": old_name, "new_name": new_name}
