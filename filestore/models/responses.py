"""
API request and response models for consistent response formatting.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from .stored_file import UploadedFile


class ErrorResponse(BaseModel):
    """Standard error response format."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "error": "Not Found",
                "message": "File not found"
            }
        }
    )

    success: bool = Field(
        False,
        description="Always false for error responses"
    )

    error: str = Field(
        ...,
        description="Brief error description"
    )

    message: str = Field(
        ...,
        description="Detailed error message"
    )


class UploadResponse(BaseModel):
    """Response for a completed upload batch."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Files uploaded successfully",
                "files": [
                    {
                        "originalName": "photo.png",
                        "storedName": "1710513022123456789.png",
                        "path": "uploads/1710513022123456789.png",
                        "size": 1048576,
                        "type": "image/png"
                    }
                ]
            }
        }
    )

    message: str = Field(
        "Files uploaded successfully",
        description="Success message"
    )

    files: List[UploadedFile] = Field(
        ...,
        description="Stored files in upload order"
    )


class RenameRequest(BaseModel):
    """Body of a rename request."""
    model_config = ConfigDict(populate_by_name=True)

    # Both fields are optional here so missing values reach the storage
    # layer and come back as a 400 rather than a 422
    old_name: Optional[str] = Field(
        None,
        alias="oldName",
        description="Current name of the stored file"
    )

    new_name: Optional[str] = Field(
        None,
        alias="newName",
        description="Name the file should be stored under"
    )

    @field_validator('old_name', 'new_name', mode='before')
    @classmethod
    def coerce_name(cls, v):
        """Accept numeric names as text; any other non-string counts as missing."""
        if isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return str(v)
        if v is not None and not isinstance(v, str):
            return None
        return v


class RenameResponse(BaseModel):
    """Confirmation of a completed rename."""
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(
        "File renamed successfully",
        description="Success message"
    )

    old_name: str = Field(..., alias="oldName")

    new_name: str = Field(..., alias="newName")


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str = "healthy"
    service: str
    version: str
