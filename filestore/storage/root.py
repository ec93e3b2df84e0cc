"""
StorageRoot value object for the flat storage directory.
"""

from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .naming import STAGING_DIR_NAME, validate_entry_name


class StorageRoot(BaseModel):
    """
    The single flat directory holding all stored files.

    Every operation that turns a file name into a path goes through
    resolve(), so client-supplied names can never escape the root.
    """

    model_config = ConfigDict(frozen=True)

    path: Path = Field(
        ...,
        description="Directory holding the stored files"
    )

    @field_validator('path', mode='before')
    @classmethod
    def validate_path(cls, v):
        """Reject empty root paths."""
        if isinstance(v, str) and not v.strip():
            raise ValueError('storage root path must not be empty')
        return v

    @property
    def staging_path(self) -> Path:
        """Directory where uploads are written before they are committed."""
        return self.path / STAGING_DIR_NAME

    def resolve(self, name: str) -> Path:
        """
        Join a file name to the root.

        Args:
            name: Name of an entry directly under the root

        Returns:
            Path of the entry

        Raises:
            InvalidNameError: If the name is unsafe
        """
        validate_entry_name(name)
        return self.path / name
