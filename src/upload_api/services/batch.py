"""
Batch processing for both upload endpoints.

Each file is handled on its own: whatever goes wrong with one file becomes a
failed ``StorageResult`` in its slot, and the remaining files are still processed.
The returned list always has one entry per input, in input order.
"""

import logging
from typing import (
    Any,
    List,
    Optional,
    Sequence,
)

from upload_api.schemas import (
    ExternalFileReference,
    StorageResult,
    UploadUnit,
)
from upload_api.sharepoint.resolver import SharePointResolver
from upload_api.storage.router import (
    StorageConfig,
    store,
)

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

logger = logging.getLogger(__name__)

MISSING_REFERENCE_FIELDS = "Missing required SharePoint file information"


def _check_size(content: bytes, max_file_size: Optional[int]) -> None:
    if max_file_size is not None and len(content) > max_file_size:
        raise ValueError(f"File exceeds the maximum size of {max_file_size} bytes")


def process_direct_uploads(
    units: Sequence[UploadUnit],
    config: StorageConfig,
    max_file_size: Optional[int] = None,
    s3_client: Optional["S3Client"] = None,
) -> List[StorageResult]:
    """Store every uploaded file."""
    results = []
    for unit in units:
        try:
            _check_size(unit.content, max_file_size)
            result = store(unit.content, unit.file_name, config, s3_client=s3_client, content_type=unit.content_type)
        except Exception as e:  # pylint: disable=broad-except
            logger.error(f"Failed to process uploaded file {unit.file_name}: {e}")
            result = StorageResult.failure(unit.file_name, str(e))
        results.append(result)
    return results


def _resolve_and_store(
    item: Any,
    resolver: SharePointResolver,
    config: StorageConfig,
    max_file_size: Optional[int],
    s3_client: Optional["S3Client"],
) -> StorageResult:
    if not isinstance(item, (dict, ExternalFileReference)):
        return StorageResult.failure(None, "Invalid SharePoint file reference")

    reference = ExternalFileReference.model_validate(item)
    missing = reference.missing_fields()
    if missing:
        logger.warning(f"SharePoint reference for {reference.file_name or 'unknown'} is missing {', '.join(missing)}")
        return StorageResult.failure(reference.file_name, MISSING_REFERENCE_FIELDS)

    content = resolver.fetch_file(reference.site_id, reference.drive_id, reference.item_id)
    _check_size(content, max_file_size)
    return store(content, reference.file_name, config, s3_client=s3_client)


def _reference_name(item: Any) -> Optional[str]:
    if isinstance(item, ExternalFileReference):
        return item.file_name
    if isinstance(item, dict):
        name = item.get("fileName")
        return name if isinstance(name, str) else None
    return None


def process_sharepoint_references(
    items: Sequence[Any],
    resolver: SharePointResolver,
    config: StorageConfig,
    max_file_size: Optional[int] = None,
    s3_client: Optional["S3Client"] = None,
) -> List[StorageResult]:
    """
    Fetch every referenced SharePoint file and store it.

    ``items`` are ``ExternalFileReference`` objects or the raw dicts from the
    request body; malformed entries fail individually.
    """
    results = []
    for item in items:
        try:
            result = _resolve_and_store(item, resolver, config, max_file_size, s3_client)
        except Exception as e:  # pylint: disable=broad-except
            name = _reference_name(item)
            logger.error(f"Failed to process SharePoint file {name or 'unknown'}: {e}")
            result = StorageResult.failure(name, str(e))
        results.append(result)
    return results
