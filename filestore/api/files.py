"""
Files API endpoint implementation.

This module provides the upload, list, download, image and rename endpoints.
Endpoints are plain functions so FastAPI runs the blocking filesystem calls
on its thread pool.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.responses import FileResponse

from ..models.stored_file import StoredFile
from ..models.responses import ErrorResponse, UploadResponse, RenameRequest, RenameResponse
from ..storage.service import StorageService, UploadItem
from ..storage.providers.base import StorageError, StorageIOError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Files"])


def get_storage_service(request: Request) -> StorageService:
    return request.app.state.storage_service


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={
        400: {"model": ErrorResponse, "description": "No files uploaded or invalid file name"},
        413: {"model": ErrorResponse, "description": "File exceeds the upload size ceiling"},
        500: {"model": ErrorResponse, "description": "Error uploading files"}
    },
    summary="Upload files",
    description="Store one or more files, optionally under custom names"
)
def upload_files(
    request: Request,
    files: Optional[List[UploadFile]] = File(None, description="Files to store"),
    custom_names: Optional[List[str]] = Form(
        None,
        alias="customNames",
        description="Custom names matched to files by position; empty means none"
    )
):
    """
    Store uploaded files.

    Custom names are sanitized and lower-cased; files without one get a
    generated name. The original extension is always kept.
    """
    storage_service = get_storage_service(request)
    custom_names = custom_names or []

    items = [
        UploadItem(
            stream=upload.file,
            original_name=upload.filename or "",
            content_type=upload.content_type,
            suggested_name=custom_names[index] if index < len(custom_names) else None
        )
        for index, upload in enumerate(files or [])
    ]
    logger.info(f"Upload request with {len(items)} file(s)")

    try:
        stored = storage_service.store(items)
    except StorageError:
        raise
    except Exception as e:
        logger.error(f"Error uploading files: {e}", exc_info=True)
        raise StorageIOError("Error uploading files") from e

    return UploadResponse(files=stored)


@router.get(
    "/files",
    response_model=List[StoredFile],
    responses={500: {"model": ErrorResponse, "description": "Error reading files"}},
    summary="List stored files"
)
def list_files(request: Request):
    """List the stored files with live sizes and timestamps."""
    return get_storage_service(request).list_files()


@router.get(
    "/files/image/{filename}",
    response_class=FileResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Requested file is not an image"},
        404: {"model": ErrorResponse, "description": "File not found"}
    },
    summary="Fetch an image"
)
def get_image(filename: str, request: Request):
    """Serve a stored image inline with its content type."""
    image = get_storage_service(request).retrieve_image(filename)
    return FileResponse(image.path, media_type=image.content_type)


@router.get(
    "/files/{filename}",
    response_class=FileResponse,
    responses={404: {"model": ErrorResponse, "description": "File not found"}},
    summary="Download a file"
)
def download_file(filename: str, request: Request):
    """Serve a stored file as an attachment."""
    stored = get_storage_service(request).retrieve(filename)
    return FileResponse(stored.path, media_type=stored.content_type, filename=stored.name)


@router.put(
    "/files/rename",
    response_model=RenameResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing names or name already taken"},
        404: {"model": ErrorResponse, "description": "File not found"},
        500: {"model": ErrorResponse, "description": "Error renaming file"}
    },
    summary="Rename a file"
)
def rename_file(request: Request, body: Optional[RenameRequest] = None):
    """Rename a stored file; the target name must be free."""
    body = body or RenameRequest()
    try:
        result = get_storage_service(request).rename(body.old_name, body.new_name)
    except StorageError:
        raise
    except Exception as e:
        logger.error(f"Error renaming file: {e}", exc_info=True)
        raise StorageIOError("Error renaming file") from e

    return RenameResponse(**result)
