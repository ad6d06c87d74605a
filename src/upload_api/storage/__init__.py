"""
Storage layer for the Upload API.

Routes each file to S3 when a bucket is configured and falls back to the
local upload directory when it is not, or when the S3 write fails.
"""

from .router import (
    Fallback,
    RemoteStored,
    StorageConfig,
    store,
)

__all__ = ['Fallback', 'RemoteStored', 'StorageConfig', 'store']
