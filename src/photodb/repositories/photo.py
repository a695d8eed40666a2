import logging
from contextlib import asynccontextmanager
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from photodb.exceptions import (
    ConstraintViolationError,
    DatabaseError,
    InvalidSortColumnError,
    PhotoNotFoundError,
)
from photodb.models.photo import PHOTO_COLUMNS, Photo
from photodb.schemas.photo import PhotoCreate, PhotoUpdate

logger = logging.getLogger(__name__)


class PhotoRepository:
    """
    Row-level access to the photo table.

    The repository flushes but never commits; the caller owns the
    transaction and calls commit() once its unit of work is done.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def _translate_errors(self, action: str):
        try:
            yield
        except IntegrityError as e:
            await self.session.rollback()
            logger.error(f"Constraint violated while trying to {action}: {e.orig}")
            raise ConstraintViolationError(f"Unable to {action}: {e.orig}") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Database error while trying to {action}: {e}")
            raise DatabaseError(f"Unable to {action}: {e}") from e

    async def _flush(self, action: str) -> None:
        async with self._translate_errors(action):
            await self.session.flush()

    async def _execute(self, statement, action: str):
        async with self._translate_errors(action):
            return await self.session.execute(statement)

    async def add(self, data: PhotoCreate) -> Photo:
        photo = Photo(**data.model_dump())
        self.session.add(photo)
        await self._flush("insert photo")
        logger.debug(f"Inserted {photo!r}")
        return photo

    async def add_many(self, items: Iterable[PhotoCreate]) -> List[Photo]:
        photos = [Photo(**item.model_dump()) for item in items]
        # Flush one by one so ids follow input order
        for photo in photos:
            self.session.add(photo)
            await self._flush("insert photos")
        logger.info(f"Inserted {len(photos)} photos.")
        return photos

    async def get(self, photo_id: int) -> Optional[Photo]:
        result = await self._execute(select(Photo).where(Photo.id == photo_id), "get photo")
        return result.scalar_one_or_none()

    async def get_by_uid(self, uid: str) -> Optional[Photo]:
        result = await self._execute(select(Photo).where(Photo.uid == uid), "get photo by uid")
        return result.scalars().first()

    async def list(self, sort_columns: Sequence[str] = ("id",), reverse: bool = False) -> List[Photo]:
        order_by = []
        for name in sort_columns:
            if name not in PHOTO_COLUMNS:
                raise InvalidSortColumnError(name)
            column = getattr(Photo, name)
            order_by.append(column.desc() if reverse else column.asc())

        result = await self._execute(select(Photo).order_by(*order_by), "list photos")
        return list(result.scalars().all())

    async def existing_uids(self) -> List[str]:
        statement = select(Photo.uid).where(Photo.uid.is_not(None)).order_by(Photo.id)
        result = await self._execute(statement, "list uids")
        return list(result.scalars().all())

    async def update(self, photo_id: int, changes: PhotoUpdate) -> Photo:
        photo = await self.get(photo_id)
        if photo is None:
            raise PhotoNotFoundError(photo_id)

        values = changes.changes()
        for name, value in values.items():
            setattr(photo, name, value)
        await self._flush("update photo")
        logger.debug(f"Updated {photo!r}: {sorted(values)}")
        return photo

    async def rename(self, pairs: Iterable[Tuple[str, str]]) -> int:
        """Set the filename of the photos identified by UID."""
        renamed = 0
        for uid, filename in pairs:
            statement = (
                update(Photo)
                .where(Photo.uid == uid)
                .values(filename=filename)
                .execution_options(synchronize_session="evaluate")
            )
            result = await self._execute(statement, "rename photo")
            renamed += result.rowcount
        logger.info(f"Renamed {renamed} photos.")
        return renamed

    async def remove_by_uids(self, uids: Iterable[str]) -> int:
        uids = list(uids)
        if not uids:
            return 0
        statement = (
            delete(Photo)
            .where(Photo.uid.in_(uids))
            .execution_options(synchronize_session="evaluate")
        )
        result = await self._execute(statement, "remove photos")
        logger.info(f"Removed {result.rowcount} photos.")
        return result.rowcount

    async def delete(self, photo_id: int) -> bool:
        photo = await self.get(photo_id)
        if photo is None:
            return False
        await self.session.delete(photo)
        await self._flush("delete photo")
        return True

    async def commit(self) -> None:
        async with self._translate_errors("commit"):
            await self.session.commit()
