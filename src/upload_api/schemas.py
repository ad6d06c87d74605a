from dataclasses import dataclass
from enum import Enum
from typing import (
    List,
    Optional,
)

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


class StorageBackend(str, Enum):
    """Where a stored file ended up."""
    BLOB = "blob"
    LOCAL = "local"


@dataclass(frozen=True)
class UploadUnit:
    """One file taken from a multipart request, processed independently of the others."""
    file_name: str
    content: bytes
    content_type: Optional[str] = None


class StorageResult(BaseModel):
    """Outcome of storing a single file."""
    file_name: str = Field(
        alias="fileName",
        description="The file name supplied by the caller.",
    )
    success: bool = Field(description="Whether the file was stored.")
    storage: Optional[StorageBackend] = Field(
        default=None,
        description="`blob` when written to S3, `local` when written to the fallback directory.",
    )
    location: Optional[str] = Field(
        default=None,
        description="Object URL for S3, filesystem path for local storage.",
    )
    generated_name: Optional[str] = Field(
        default=None,
        alias="generatedName",
        description="Unique name the file was stored under.",
    )
    error: Optional[str] = Field(default=None, description="Why the file could not be stored.")

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "fileName": "invoice.pdf",
                "success": True,
                "storage": "blob",
                "location": "https://uploads.s3.us-east-1.amazonaws.com/3f0c2a9e4b6d4c1e8f7a5b3c2d1e0f9a-invoice.pdf",
                "generatedName": "3f0c2a9e4b6d4c1e8f7a5b3c2d1e0f9a-invoice.pdf",
            }
        },
    )

    @classmethod
    def failure(cls, file_name: Optional[str], error: str) -> "StorageResult":
        return cls(file_name=file_name or "unknown", success=False, error=error)


class ExternalFileReference(BaseModel):
    """
    A file in a SharePoint document library.

    Every field is required for a fetch, but missing fields are reported per file
    rather than rejecting the whole request, so they are optional here.
    """
    site_id: Optional[str] = Field(default=None, alias="siteId")
    drive_id: Optional[str] = Field(default=None, alias="driveId")
    item_id: Optional[str] = Field(default=None, alias="itemId")
    file_name: Optional[str] = Field(default=None, alias="fileName")

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    def missing_fields(self) -> List[str]:
        """Aliases of the fields that are absent or empty."""
        return [
            field.alias
            for name, field in type(self).model_fields.items()
            if not getattr(self, name)
        ]


class SharePointUploadRequest(BaseModel):
    """Request body for `POST /v1/sharepoint/uploads` (documentation only)."""
    files: List[ExternalFileReference] = Field(description="SharePoint files to import.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "files": [
                    {
                        "siteId": "contoso.sharepoint.com,2C712604-1370-44E7-A1F5-426573FDA80A,2D2244C3-251A-49EA-93A8-39E1C3A060FE",
                        "driveId": "b!BCZxLHATp0ShhdZl",
                        "itemId": "01BYE5RZ6QN3ZWBTUFOFD3GSPGOHDJD36K",
                        "fileName": "report.docx",
                    }
                ]
            }
        }
    )


class UploadResponse(BaseModel):
    """Response model for both upload endpoints."""
    message: str = Field(description="A message about the operation.")
    results: List[StorageResult] = Field(description="One result per file, in request order.")
    mock_mode: Optional[bool] = Field(
        default=None,
        alias="mockMode",
        description="Set when SharePoint is not configured and a placeholder result is returned.",
    )

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    """Body of 4xx and 5xx responses."""
    error: str
    details: Optional[str] = None
