import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError

from photodb.models.photo import PHOTO_COLUMNS, Photo

DEFAULTED = {
    "color": "000000",
    "title": "",
    "date_taken": "",
    "camera_model": "",
    "lens_model": "",
    "focal_length": "",
    "aperture": "",
    "exposure_time": "",
    "sensitivity": "",
}


async def _fetch(session_factory, photo_id):
    async with session_factory() as session:
        result = await session.execute(select(Photo).where(Photo.id == photo_id))
        return result.scalar_one()


@pytest.mark.asyncio
async def test_orm_insert_uses_declared_defaults(session, session_factory):
    photo = Photo(filename="a.jpg")
    session.add(photo)
    await session.commit()

    stored = await _fetch(session_factory, photo.id)
    for name, default in DEFAULTED.items():
        assert getattr(stored, name) == default


@pytest.mark.asyncio
async def test_raw_insert_uses_server_defaults(session, session_factory):
    await session.execute(text("INSERT INTO photo (filename) VALUES ('raw.jpg')"))
    await session.commit()

    result = await session.execute(text("SELECT id FROM photo WHERE filename = 'raw.jpg'"))
    stored = await _fetch(session_factory, result.scalar_one())
    for name, default in DEFAULTED.items():
        assert getattr(stored, name) == default


@pytest.mark.asyncio
async def test_explicit_null_in_not_null_column_fails(session):
    with pytest.raises(IntegrityError):
        await session.execute(text("INSERT INTO photo (title) VALUES (NULL)"))


@pytest.mark.asyncio
async def test_orm_none_falls_back_to_default(session, session_factory):
    photo = Photo(color=None, title=None)
    session.add(photo)
    await session.commit()

    stored = await _fetch(session_factory, photo.id)
    assert stored.color == "000000"
    assert stored.title == ""


@pytest.mark.asyncio
async def test_nullable_columns_accept_null(session, session_factory):
    photo = Photo(filename=None, uid=None, width=None, height=None)
    session.add(photo)
    await session.commit()

    stored = await _fetch(session_factory, photo.id)
    assert stored.filename is None
    assert stored.uid is None
    assert stored.width is None
    assert stored.height is None


@pytest.mark.asyncio
async def test_ids_increase_and_are_not_reused(session):
    photos = [Photo(filename=f"{i}.jpg") for i in range(3)]
    for photo in photos:
        session.add(photo)
        await session.flush()
    ids = [photo.id for photo in photos]
    assert ids == sorted(ids)
    assert len(set(ids)) == 3

    await session.delete(photos[-1])
    await session.commit()

    newcomer = Photo(filename="new.jpg")
    session.add(newcomer)
    await session.commit()
    assert newcomer.id > ids[-1]


@pytest.mark.asyncio
async def test_round_trip_keeps_every_attribute(session, session_factory):
    values = {
        "filename": "DSCF0042.JPG",
        "uid": "aZ09bY18cX27dW36",
        "width": 6000,
        "height": 4000,
        "color": "3a5f7c",
        "title": "Harbour at dusk",
        "date_taken": "2021-06-15 18:42",
        "camera_model": "X-T3",
        "lens_model": "XF35mmF1.4 R",
        "focal_length": "35mm",
        "aperture": "f/1.4",
        "exposure_time": "1/250",
        "sensitivity": "400",
    }
    photo = Photo(**values)
    session.add(photo)
    await session.commit()

    stored = await _fetch(session_factory, photo.id)
    assert stored.to_dict() == {"id": photo.id, **values}
    assert tuple(stored.to_dict()) == PHOTO_COLUMNS
