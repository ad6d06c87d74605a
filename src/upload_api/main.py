from textwrap import dedent
import logging
from fastapi import FastAPI
from fastapi.routing import APIRoute

from upload_api.errors import (
    MalformedRequestError,
    handle_broad_exceptions,
    handle_malformed_request,
)
from upload_api.logging_config import configure_logging
from upload_api.routers.uploads import router as uploads_router
from upload_api.routers.health import router as health_router
from upload_api.config.settings import Settings

# Set up logging
logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or Settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Upload API",
        summary="Store uploaded and SharePoint files in S3, with a local fallback",
        version="v1",
        description=dedent(
            """\
        Files are written to S3 when `S3_BUCKET_NAME` is set. If it is not set, or the
        S3 write fails, they are written to `LOCAL_UPLOAD_PATH` instead.

        | Endpoint | Input |
        | --- | --- |
        | `POST /v1/uploads` | multipart form, one part per file |
        | `POST /v1/sharepoint/uploads` | JSON `{"files": [{"siteId", "driveId", "itemId", "fileName"}]}` |
        """
        ),
        docs_url="/",  # its easier to find the docs when they live on the base url
        generate_unique_id_function=custom_generate_unique_id,
    )
    app.state.settings = settings

    storage_mode = "S3 with local fallback" if settings.remote_storage_configured else "local only"
    logger.info(f"Storage mode: {storage_mode}")
    if not settings.sharepoint_configured:
        logger.info("SharePoint credentials not configured, SharePoint uploads run in mock mode")

    app.include_router(uploads_router, prefix="/v1", tags=["uploads"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(
        exc_class_or_status_code=MalformedRequestError,
        handler=handle_malformed_request,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)
