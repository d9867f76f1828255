"""File operation utilities."""

import re
from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Ensure directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists

    Returns:
        The path object
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def sanitize_filename(filename: str, replacement: str = "_") -> str:
    """Sanitize filename by removing/replacing invalid characters.

    Capture identifiers are normally safe already; this only guards against
    path separators or control characters sneaking in from the API.

    Args:
        filename: Original filename
        replacement: Character to use for replacing invalid chars

    Returns:
        Sanitized filename safe for filesystem use
    """
    invalid_chars = r'[<>:"/\\|?*\x00-\x1f]'
    sanitized = re.sub(invalid_chars, replacement, filename)

    # Remove leading/trailing spaces and dots
    sanitized = sanitized.strip('. ')

    # Common filesystem limit, leaving room for the extension
    if len(sanitized) > 240:
        sanitized = sanitized[:240]

    return sanitized or "unnamed"
