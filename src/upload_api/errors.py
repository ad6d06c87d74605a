"""Exception types for the Upload API and the FastAPI handlers that render them."""
import logging

from fastapi import (
    Request,
    status,
)
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class UploadApiError(Exception):
    """Base class for errors raised by the upload core."""


class SharePointNotConfiguredError(UploadApiError):
    """SharePoint credentials are missing, so no Graph call can be made."""


class SharePointFetchError(UploadApiError):
    """Downloading a file from SharePoint failed."""


class LocalStorageError(UploadApiError):
    """Writing a file to the local upload directory failed."""


class MalformedRequestError(UploadApiError):
    """The request is structurally invalid and was rejected before processing."""

    def __init__(self, error: str, details: str):
        super().__init__(f"{error}: {details}")
        self.error = error
        self.details = details


async def handle_malformed_request(request: Request, exc: MalformedRequestError) -> JSONResponse:
    """Render a structural request error as a 400 response."""
    logger.warning(f"Rejected request to {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.error, "details": exc.details},
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception as e:  # pylint: disable=broad-except
        logger.exception(f"Unhandled error processing {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "details": str(e)},
        )
