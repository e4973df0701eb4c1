"""
File operation utilities

This module handles atomic cache writes and temporary file cleanup.
"""
import asyncio
import logging
from pathlib import Path
from uuid import uuid4

import aiofiles
import aiofiles.os


logger = logging.getLogger(__name__)


async def atomic_write_text(path: Path, text: str, encoding: str = "utf-8") -> Path:
    """
    Write text to ``path`` so readers never observe a partial file

    The payload goes to a sibling temporary file that is then moved over the
    target with ``os.replace``. If writing fails or the task is cancelled, the
    temporary file is removed and the target is left untouched.

    Args:
        path: Destination file
        text: Payload to store
        encoding: Text encoding

    Returns:
        The destination path
    """
    await aiofiles.os.makedirs(path.parent, exist_ok=True)
    temp_file = path.with_name(f".{path.name}.{uuid4().hex}.tmp")

    try:
        async with aiofiles.open(temp_file, "w", encoding=encoding, newline="") as f:
            await f.write(text)
        await aiofiles.os.replace(temp_file, path)
    except (OSError, asyncio.CancelledError):
        await cleanup_temp_file(temp_file)
        raise

    logger.debug(f"Wrote {len(text)} characters to {path}")
    return path


async def cleanup_temp_file(file_path: Path) -> bool:
    """
    Safely delete a temporary file

    Args:
        file_path: Path to file to delete

    Returns:
        True if deleted successfully, False otherwise
    """
    if not file_path or not await aiofiles.os.path.exists(file_path):
        return False

    try:
        await aiofiles.os.remove(file_path)
        logger.debug(f"Cleaned up temporary file: {file_path}")
        return True
    except (OSError, PermissionError) as e:
        logger.warning(f"Failed to delete temporary file {file_path}: {e}")
        return False
