"""Local filesystem fallback storage."""
import logging
from pathlib import Path

from upload_api.errors import LocalStorageError
from upload_api.storage.naming import generate_unique_name

logger = logging.getLogger(__name__)


def ensure_directory(base_path: Path) -> None:
    """Create the upload directory and its parents if missing."""
    base_path.mkdir(parents=True, exist_ok=True)


def save_local_file(content: bytes, file_name: str, base_path: Path) -> Path:
    """
    Write content to a uniquely named file under ``base_path``.

    Args:
        content: Bytes to write
        file_name: Original file name, used as the suffix of the stored name
        base_path: Upload directory

    Returns:
        Path of the written file

    Raises:
        LocalStorageError: if the directory cannot be created or the file cannot be written
    """
    target = base_path / generate_unique_name(file_name)
    try:
        ensure_directory(base_path)
        target.write_bytes(content)
    except (OSError, ValueError) as e:
        raise LocalStorageError(f"Failed to save file locally: {e}") from e

    logger.info(f"Saved {file_name} to {target}")
    return target
