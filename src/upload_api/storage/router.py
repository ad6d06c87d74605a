"""
Storage router: S3 first when configured, local directory otherwise.

``store`` never raises. A failed S3 write falls back to local storage; a failed
local write is the only terminal error and is reported as an unsuccessful
``StorageResult``.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import (
    Optional,
    Union,
)

from upload_api.config.settings import Settings
from upload_api.errors import LocalStorageError
from upload_api.s3.write_objects import (
    build_object_url,
    create_s3_client,
    ensure_bucket,
    upload_s3_object,
)
from upload_api.schemas import (
    StorageBackend,
    StorageResult,
)
from upload_api.storage.local import save_local_file
from upload_api.storage.naming import generate_unique_name

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageConfig:
    """Per-request storage configuration. An empty bucket name means S3 is not configured."""
    bucket_name: str
    local_upload_path: Path
    region_name: Optional[str] = None
    endpoint_url: Optional[str] = None
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageConfig":
        return cls(
            bucket_name=settings.s3_bucket_name,
            local_upload_path=Path(settings.local_upload_path),
            region_name=settings.aws_region,
            endpoint_url=settings.aws_endpoint_url,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
        )

    @property
    def remote_configured(self) -> bool:
        return bool(self.bucket_name)

    def create_s3_client(self) -> "S3Client":
        return create_s3_client(
            region_name=self.region_name,
            endpoint_url=self.endpoint_url,
            aws_access_key_id=self.aws_access_key_id,
            aws_secret_access_key=self.aws_secret_access_key,
        )


@dataclass(frozen=True)
class RemoteStored:
    """The S3 write succeeded."""
    url: str
    generated_name: str


@dataclass(frozen=True)
class Fallback:
    """The S3 write failed and local storage should be used instead."""
    reason: str


RemoteOutcome = Union[RemoteStored, Fallback]


def put_remote(
    content: bytes,
    file_name: str,
    config: StorageConfig,
    s3_client: Optional["S3Client"] = None,
    content_type: Optional[str] = None,
) -> RemoteOutcome:
    """Try to write the file to S3. Failures are returned as ``Fallback``, never raised."""
    object_key = generate_unique_name(file_name)
    try:
        s3_client = s3_client or config.create_s3_client()
        ensure_bucket(config.bucket_name, s3_client)
        upload_s3_object(
            bucket_name=config.bucket_name,
            object_key=object_key,
            file_content=content,
            s3_client=s3_client,
            content_type=content_type,
        )
    except Exception as e:  # pylint: disable=broad-except
        logger.warning(f"S3 upload of {file_name} to bucket '{config.bucket_name}' failed, falling back to local storage: {e}")
        return Fallback(reason=str(e))

    url = build_object_url(
        bucket_name=config.bucket_name,
        object_key=object_key,
        region_name=config.region_name,
        endpoint_url=config.endpoint_url,
    )
    logger.info(f"Uploaded {file_name} to S3 as {object_key}")
    return RemoteStored(url=url, generated_name=object_key)


def store(
    content: bytes,
    file_name: str,
    config: StorageConfig,
    s3_client: Optional["S3Client"] = None,
    content_type: Optional[str] = None,
) -> StorageResult:
    """
    Store one file and describe where it went.

    Args:
        content: Full file content
        file_name: Name supplied by the caller
        config: Storage configuration for this request
        s3_client: Optional boto3 S3 client; one is created from ``config`` when needed
        content_type: MIME type recorded on the S3 object

    Returns:
        StorageResult with ``storage`` set to ``blob`` or ``local`` on success,
        or ``success=False`` when even the local write failed
    """
    if config.remote_configured:
        outcome = put_remote(content, file_name, config, s3_client=s3_client, content_type=content_type)
        if isinstance(outcome, RemoteStored):
            return StorageResult(
                file_name=file_name,
                success=True,
                storage=StorageBackend.BLOB,
                location=outcome.url,
                generated_name=outcome.generated_name,
            )
    else:
        logger.info(f"No S3 bucket configured, storing {file_name} locally")

    try:
        path = save_local_file(content, file_name, config.local_upload_path)
    except LocalStorageError as e:
        logger.error(f"Could not store {file_name}: {e}")
        return StorageResult.failure(file_name, str(e))

    return StorageResult(
        file_name=file_name,
        success=True,
        storage=StorageBackend.LOCAL,
        location=str(path),
        generated_name=path.name,
    )
