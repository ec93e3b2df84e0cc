"""
Storage module for the Filestore service

This module provides the storage architecture with providers,
service layer, naming policy and configuration system.
"""

from .root import StorageRoot
from .service import StorageService, UploadItem
from .factory import create_default_storage_service, create_storage_service, create_storage_provider
from .providers.base import StorageProvider
from .providers.filesystem import FilesystemStorageProvider

__all__ = [
    "StorageRoot",
    "StorageService",
    "UploadItem",
    "create_default_storage_service",
    "create_storage_service",
    "create_storage_provider",
    "StorageProvider",
    "FilesystemStorageProvider"
]
