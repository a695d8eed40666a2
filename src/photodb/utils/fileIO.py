import logging
from pathlib import Path

import aiofiles

logger = logging.getLogger(__name__)


async def read_bytes(filepath: str) -> bytes:
    file_path_obj = Path(filepath)
    if not file_path_obj.is_file():
        raise FileNotFoundError(f"File not found: {filepath}")

    async with aiofiles.open(file_path_obj, "rb") as f:
        content = await f.read()
    logger.debug(f"Read {len(content)} bytes from {filepath}")
    return content
