"""File utilities for feedsmith."""

from pathlib import Path
from utils.logger import get_logger

logger = get_logger(__name__)


def write_text_file(content: str, output_path: Path) -> Path:
    """
    Write a rendered document to disk as UTF-8.

    Args:
        content: Text to write
        output_path: Path to output file

    Returns:
        The path written

    Raises:
        OSError: If the directory cannot be created or the file cannot be written
    """
    output_path = Path(output_path)
    ensure_directory(output_path.parent)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(content)

    logger.info(f"Wrote {len(content)} chars to {output_path}")
    return output_path


def ensure_directory(path: Path) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        The path (for chaining)
    """
    path.mkdir(parents=True, exist_ok=True)
    return path
