from fastapi import (
    APIRouter,
    Request,
)

from upload_api.config.settings import Settings

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint reporting which storage and SharePoint integrations are active.
    """
    settings: Settings = request.app.state.settings

    return {
        "status": "ok",
        "storage": {
            "remote": "configured" if settings.remote_storage_configured else "not-configured",
            "local_upload_path": settings.local_upload_path,
        },
        "sharepoint": "configured" if settings.sharepoint_configured else "not-configured",
    }
