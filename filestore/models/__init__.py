"""
Pydantic models for the Filestore service

This module provides type-safe data models for API requests/responses,
data validation, and automatic OpenAPI documentation generation.
"""

from .stored_file import StoredFile, UploadedFile, RetrievedFile, guess_content_type
from .responses import ErrorResponse, UploadResponse, RenameRequest, RenameResponse, HealthResponse

__all__ = [
    "StoredFile",
    "UploadedFile",
    "RetrievedFile",
    "guess_content_type",
    "ErrorResponse",
    "UploadResponse",
    "RenameRequest",
    "RenameResponse",
    "HealthResponse"
]
