from __future__ import annotations

import asyncio
import logging
import sys

from core.config import configs
from core.logger import setup_logging
from photodb.db.database import AsyncSessionLocal, engine, init_db
from photodb.repositories.photo import PhotoRepository
from photodb.services.photo_service import PhotoService

setup_logging()
logger = logging.getLogger("photodb.main")


async def import_images(paths: list[str]) -> int:
    await init_db(engine)

    if not paths:
        logger.info("No image given, nothing to import.")
        return 0

    async with AsyncSessionLocal() as session:
        service = PhotoService(PhotoRepository(session))
        try:
            photos = await service.import_files(paths)
        except FileNotFoundError as e:
            logger.error(str(e))
            return 1

    for photo in photos:
        logger.info(f"✅ Stored {photo!r} {photo.width}x{photo.height} {photo.camera_model}")
    return 0


async def main(paths: list[str]) -> int:
    logger.info(f"🔧 Opening {configs.PROJECT_NAME} database at {configs.DATABASE_URL}")
    try:
        return await import_images(paths)
    finally:
        await engine.dispose()
        logger.info("🛑 Database closed.")


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
