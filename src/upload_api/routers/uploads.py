import json
import logging
import os
from typing import (
    List,
    Optional,
)

from fastapi import (
    APIRouter,
    File,
    Request,
    UploadFile,
)
from fastapi.concurrency import run_in_threadpool

from upload_api.config.settings import Settings
from upload_api.errors import MalformedRequestError
from upload_api.schemas import (
    ErrorResponse,
    SharePointUploadRequest,
    StorageBackend,
    StorageResult,
    UploadResponse,
    UploadUnit,
)
from upload_api.services.batch import (
    process_direct_uploads,
    process_sharepoint_references,
)
from upload_api.sharepoint.resolver import SharePointResolver
from upload_api.storage.naming import DEFAULT_FILE_NAME
from upload_api.storage.router import StorageConfig

logger = logging.getLogger(__name__)

router = APIRouter()

MOCK_FILE_NAME = "mock-file.txt"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "The request contained no files."},
    500: {"model": ErrorResponse, "description": "Unexpected internal error."},
}


@router.post(
    "/uploads",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def upload_files(
    request: Request,
    files: Optional[List[UploadFile]] = File(None, description="One or more files to store"),
) -> UploadResponse:
    """
    Store one or more files sent as a multipart form.

    Each file goes to S3 when a bucket is configured, falling back to the local
    upload directory otherwise. Files are processed independently: a failure is
    reported in that file's result and does not affect the others.
    """
    settings: Settings = request.app.state.settings

    units = []
    for upload in files or []:
        content = await upload.read()
        # zero-length parts are what browsers send for an empty file input
        if not content:
            continue
        units.append(
            UploadUnit(
                file_name=upload.filename or DEFAULT_FILE_NAME,
                content=content,
                content_type=upload.content_type,
            )
        )

    if not units:
        raise MalformedRequestError("No files were uploaded", "Request must include at least one file")

    logger.info(f"Processing {len(units)} uploaded file(s)")
    results = await run_in_threadpool(
        process_direct_uploads,
        units,
        StorageConfig.from_settings(settings),
        settings.max_file_size,
    )
    return UploadResponse(message="Files processed successfully", results=results)


def mock_sharepoint_response(settings: Settings) -> UploadResponse:
    """Placeholder answer returned while SharePoint credentials are not configured."""
    return UploadResponse(
        message="SharePoint integration not configured. Using mock data.",
        mock_mode=True,
        results=[
            StorageResult(
                file_name=MOCK_FILE_NAME,
                success=True,
                storage=StorageBackend.LOCAL,
                location=os.path.join(settings.local_upload_path, MOCK_FILE_NAME),
                generated_name=MOCK_FILE_NAME,
            )
        ],
    )


@router.post(
    "/sharepoint/uploads",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": SharePointUploadRequest.model_json_schema()}},
        }
    },
)
async def upload_sharepoint_files(request: Request) -> UploadResponse:
    """
    Copy files from a SharePoint document library into storage.

    The body is ``{"files": [{"siteId", "driveId", "itemId", "fileName"}, ...]}``.
    References with missing fields, and files that cannot be fetched or stored,
    are reported as failed results; the response is still 200.

    Without SharePoint credentials the endpoint runs in mock mode and returns a
    placeholder result flagged with ``mockMode: true``.
    """
    settings: Settings = request.app.state.settings

    if not settings.sharepoint_configured:
        logger.warning("SharePoint credentials not configured, using mock data")
        return mock_sharepoint_response(settings)

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise MalformedRequestError("Invalid request body", "Request body must be a JSON object")

    files = body.get("files") if isinstance(body, dict) else None
    if not isinstance(files, list) or not files:
        raise MalformedRequestError("No files provided", "Request must include an array of SharePoint files")

    logger.info(f"Processing {len(files)} SharePoint file(s)")
    resolver = SharePointResolver(settings)
    results = await run_in_threadpool(
        process_sharepoint_references,
        files,
        resolver,
        StorageConfig.from_settings(settings),
        settings.max_file_size,
    )
    return UploadResponse(message="SharePoint files processed", results=results)
