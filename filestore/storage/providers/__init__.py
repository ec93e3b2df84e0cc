"""
Storage providers package for the Filestore service.

This package contains the storage provider implementations for different
storage backends.
"""

from .base import (
    StorageProvider,
    StagedUpload,
    StorageError,
    StorageValidationError,
    StoredFileNotFoundError,
    StorageConflictError,
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
    StorageIOError,
)
from .filesystem import FilesystemStorageProvider

__all__ = [
    "StorageProvider",
    "StagedUpload",
    "StorageError",
    "StorageValidationError",
    "StoredFileNotFoundError",
    "StorageConflictError",
    "PayloadTooLargeError",
    "UnsupportedMediaTypeError",
    "StorageIOError",
    "FilesystemStorageProvider",
]
