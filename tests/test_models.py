"""
Unit tests for Pydantic models and the storage root value object.
"""

import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from filestore.models.stored_file import StoredFile, UploadedFile, guess_content_type
from filestore.models.responses import ErrorResponse, UploadResponse, RenameRequest, RenameResponse
from filestore.storage.naming import InvalidNameError
from filestore.storage.root import StorageRoot


class TestStoredFile:
    """Test cases for StoredFile model."""

    def test_from_stat(self):
        """Test building a StoredFile from live filesystem metadata."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "photo.png"
            path.write_bytes(b"fake image data")

            stored = StoredFile.from_stat(path, path.stat())

            assert stored.name == "photo.png"
            assert stored.path == str(path)
            assert stored.size_bytes == len(b"fake image data")
            assert isinstance(stored.created_at, datetime)
            assert stored.modified_at == datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)

    def test_timestamps_carry_utc_offset(self):
        """Serialized timestamps are unambiguous instants, not server-local wall time."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "notes.txt"
            path.write_bytes(b"hello")

            stored = StoredFile.from_stat(path, path.stat())
            data = stored.model_dump(by_alias=True, mode="json")

            assert stored.created_at.tzinfo is not None
            assert stored.modified_at.utcoffset().total_seconds() == 0
            for key in ("createdAt", "modifiedAt"):
                assert data[key].endswith("Z") or data[key].endswith("+00:00")

    def test_serializes_with_api_field_names(self):
        stored = StoredFile(
            name="notes.txt",
            path="uploads/notes.txt",
            size_bytes=12,
            created_at=datetime(2024, 3, 15, 14, 30, 22),
            modified_at=datetime(2024, 3, 15, 14, 31, 0)
        )

        data = stored.model_dump(by_alias=True, mode="json")

        assert set(data) == {"name", "path", "size", "createdAt", "modifiedAt"}
        assert data["size"] == 12
        assert data["createdAt"] == "2024-03-15T14:30:22"

    def test_content_type_derived_from_name(self):
        image = StoredFile(name="photo.PNG", path="p", size=1,
                           createdAt=datetime.now(), modifiedAt=datetime.now())
        text = StoredFile(name="notes.txt", path="p", size=1,
                          createdAt=datetime.now(), modifiedAt=datetime.now())
        unknown = StoredFile(name="blob", path="p", size=1,
                             createdAt=datetime.now(), modifiedAt=datetime.now())

        assert image.content_type == "image/png"
        assert image.is_image is True
        assert text.content_type == "text/plain"
        assert text.is_image is False
        assert unknown.content_type is None
        assert unknown.is_image is False

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            StoredFile(name="a", path="a", size=-1,
                       createdAt=datetime.now(), modifiedAt=datetime.now())

    def test_guess_content_type(self):
        assert guess_content_type("a.jpg") == "image/jpeg"
        assert guess_content_type("a.pdf") == "application/pdf"


class TestUploadedFile:
    """Test cases for UploadedFile model."""

    def test_serializes_with_api_field_names(self):
        uploaded = UploadedFile(
            original_name="My Report!.pdf",
            stored_name="my_report_.pdf",
            path="uploads/my_report_.pdf",
            size_bytes=2048,
            content_type="application/pdf"
        )

        assert uploaded.model_dump(by_alias=True) == {
            "originalName": "My Report!.pdf",
            "storedName": "my_report_.pdf",
            "path": "uploads/my_report_.pdf",
            "size": 2048,
            "type": "application/pdf"
        }

    def test_content_type_optional(self):
        uploaded = UploadedFile(originalName="a", storedName="a", path="a", size=0)
        assert uploaded.content_type is None


class TestStorageRoot:
    """Test cases for StorageRoot value object."""

    def test_resolve_direct_child(self):
        root = StorageRoot(path=Path("/srv/uploads"))
        assert root.resolve("a.txt") == Path("/srv/uploads/a.txt")

    def test_resolve_rejects_traversal(self):
        root = StorageRoot(path=Path("/srv/uploads"))
        with pytest.raises(InvalidNameError):
            root.resolve("../a.txt")
        with pytest.raises(InvalidNameError):
            root.resolve("/etc/passwd")

    def test_staging_path(self):
        root = StorageRoot(path=Path("/srv/uploads"))
        assert root.staging_path == Path("/srv/uploads/.incoming")

    def test_immutable(self):
        root = StorageRoot(path=Path("/srv/uploads"))
        with pytest.raises(ValidationError):
            root.path = Path("/tmp")

    def test_empty_path_rejected(self):
        with pytest.raises(ValidationError):
            StorageRoot(path="  ")


class TestResponses:
    """Test cases for API envelopes."""

    def test_error_response(self):
        error = ErrorResponse(error="Not Found", message="File not found")
        assert error.model_dump() == {"success": False, "error": "Not Found", "message": "File not found"}

    def test_upload_response_default_message(self):
        response = UploadResponse(files=[])
        assert response.message == "Files uploaded successfully"

    def test_rename_request_accepts_camel_case(self):
        request = RenameRequest.model_validate({"oldName": "a.txt", "newName": "b.txt"})
        assert request.old_name == "a.txt"
        assert request.new_name == "b.txt"

    def test_rename_request_fields_optional(self):
        request = RenameRequest.model_validate({})
        assert request.old_name is None
        assert request.new_name is None

    def test_rename_request_numeric_names_become_text(self):
        request = RenameRequest.model_validate({"oldName": 123, "newName": 4.5})
        assert request.old_name == "123"
        assert request.new_name == "4.5"

    def test_rename_request_other_types_count_as_missing(self):
        request = RenameRequest.model_validate({"oldName": ["a.txt"], "newName": {"x": 1}})
        assert request.old_name is None
        assert request.new_name is None
        assert RenameRequest.model_validate({"oldName": True}).old_name is None

    def test_rename_response(self):
        response = RenameResponse(old_name="a.txt", new_name="b.txt")
        assert response.model_dump(by_alias=True) == {
            "message": "File renamed successfully",
            "oldName": "a.txt",
            "newName": "b.txt"
        }
