"""Collision-free names for stored files."""
import uuid
from pathlib import PurePath

DEFAULT_FILE_NAME = "unnamed-file"


def safe_file_name(file_name: str) -> str:
    """Strip any directory part so a client-supplied name stays inside the target directory."""
    # handle Windows separators too, PurePath only splits on the host's
    name = PurePath(file_name.replace("\\", "/")).name
    # NUL and other control characters are rejected by the filesystem
    name = "".join(ch for ch in name if ch.isprintable())
    if name in ("", ".", ".."):
        return DEFAULT_FILE_NAME
    return name


def generate_unique_name(file_name: str) -> str:
    """Prefix the file name with a random UUID."""
    return f"{uuid.uuid4().hex}-{safe_file_name(file_name)}"
