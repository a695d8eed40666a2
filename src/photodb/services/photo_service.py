import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from photodb.models.photo import Photo
from photodb.models.utils import generate_uid
from photodb.repositories.photo import PhotoRepository
from photodb.schemas.photo import PhotoCreate, PhotoUpdate
from photodb.services.metadata_extractor import MetadataExtractor

logger = logging.getLogger(__name__)


class PhotoService:
    """
    Imports image files into the photo table and applies updates.

    Every public method is one unit of work and commits on success.
    """

    def __init__(self, repository: PhotoRepository, extractor: Optional[MetadataExtractor] = None):
        self._repository = repository
        self._extractor = extractor or MetadataExtractor()

    async def import_files(self, paths: Iterable[str]) -> List[Photo]:
        paths = [str(p) for p in paths]
        missing = [p for p in paths if not Path(p).is_file()]
        if missing:
            raise FileNotFoundError(f"Files not found: {', '.join(missing)}")

        taken = set(await self._repository.existing_uids())
        records: List[PhotoCreate] = []
        for path in paths:
            record = await self._extractor.extract(path)
            record.uid = self._new_uid(taken)
            records.append(record)
            logger.debug(f"Extracted metadata for {path}: uid={record.uid}")

        photos = await self._repository.add_many(records)
        await self._repository.commit()
        logger.info(f"Imported {len(photos)} photos.")
        return photos

    async def update_photo(self, photo_id: int, changes: PhotoUpdate) -> Photo:
        photo = await self._repository.update(photo_id, changes)
        await self._repository.commit()
        return photo

    async def rename_photos(self, pairs: Iterable[Tuple[str, str]]) -> int:
        renamed = await self._repository.rename(pairs)
        await self._repository.commit()
        return renamed

    async def remove_photos(self, uids: Iterable[str]) -> int:
        removed = await self._repository.remove_by_uids(uids)
        await self._repository.commit()
        return removed

    def _new_uid(self, taken: set) -> str:
        uid = generate_uid()
        while uid in taken:
            uid = generate_uid()
        taken.add(uid)
        return uid
