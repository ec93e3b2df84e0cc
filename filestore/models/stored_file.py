"""
Models describing files held in the storage root.
"""

import mimetypes
from datetime import datetime, timezone
from os import stat_result
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


def guess_content_type(name: str) -> Optional[str]:
    """Content type derived from a file name's extension, if known."""
    content_type, _ = mimetypes.guess_type(name, strict=False)
    return content_type


class StoredFile(BaseModel):
    """
    A named entry under the storage root.

    Size and timestamps are read live from the filesystem whenever the
    model is built; nothing here is cached between requests.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "my_report_.pdf",
                "path": "uploads/my_report_.pdf",
                "size": 52311,
                "createdAt": "2024-03-15T14:30:22",
                "modifiedAt": "2024-03-15T14:30:22"
            }
        }
    )

    name: str = Field(
        ...,
        description="File name as it exists in the storage directory",
        min_length=1
    )

    path: str = Field(
        ...,
        description="Path of the file in storage"
    )

    size_bytes: int = Field(
        ...,
        alias="size",
        description="File size in bytes",
        ge=0
    )

    created_at: datetime = Field(
        ...,
        alias="createdAt",
        description="Creation time reported by the filesystem"
    )

    modified_at: datetime = Field(
        ...,
        alias="modifiedAt",
        description="Last modification time reported by the filesystem"
    )

    @property
    def content_type(self) -> Optional[str]:
        return guess_content_type(self.name)

    @property
    def is_image(self) -> bool:
        return bool(self.content_type and self.content_type.startswith("image/"))

    @classmethod
    def from_stat(cls, path: Path, stats: stat_result) -> 'StoredFile':
        """
        Build a StoredFile from a path and its stat result.

        The birth time is used as creation time where the platform reports
        one, the inode change time otherwise.
        """
        created = getattr(stats, "st_birthtime", None) or stats.st_ctime
        return cls(
            name=path.name,
            path=str(path),
            size_bytes=stats.st_size,
            created_at=datetime.fromtimestamp(created, tz=timezone.utc),
            modified_at=datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc)
        )


class UploadedFile(BaseModel):
    """Result of storing a single uploaded file."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "originalName": "My Report!.pdf",
                "storedName": "my_report_.pdf",
                "path": "uploads/my_report_.pdf",
                "size": 52311,
                "type": "application/pdf"
            }
        }
    )

    original_name: str = Field(
        ...,
        alias="originalName",
        description="File name supplied by the client"
    )

    stored_name: str = Field(
        ...,
        alias="storedName",
        description="File name on disk"
    )

    path: str = Field(
        ...,
        description="Path of the stored file"
    )

    size_bytes: int = Field(
        ...,
        alias="size",
        ge=0
    )

    content_type: Optional[str] = Field(
        None,
        alias="type",
        description="Content type declared by the upload"
    )


class RetrievedFile(BaseModel):
    """A stored file resolved for reading."""

    name: str
    path: Path
    size_bytes: int = Field(..., ge=0)
    content_type: Optional[str] = None
