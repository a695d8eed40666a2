import io
import os
import sys

import piexif
import pytest
import pytest_asyncio
from PIL import Image

# Add src to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), "../src"))

from photodb.db.database import build_engine, build_sessionmaker, init_db
from photodb.repositories.photo import PhotoRepository


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'photos.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return build_sessionmaker(db_engine)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def repository(session):
    return PhotoRepository(session)


def make_exif_dict(**overrides) -> dict:
    exif_dict = {
        "0th": {
            piexif.ImageIFD.Model: b"X-T3",
            piexif.ImageIFD.DateTime: b"2020:01:01 00:00:00",
        },
        "Exif": {
            piexif.ExifIFD.DateTimeOriginal: b"2021:06:15 18:42:07",
            piexif.ExifIFD.LensModel: b"XF35mmF1.4 R",
            piexif.ExifIFD.FocalLength: (35, 1),
            piexif.ExifIFD.FNumber: (14, 10),
            piexif.ExifIFD.ExposureTime: (1, 250),
            piexif.ExifIFD.ISOSpeedRatings: 400,
        },
        "GPS": {},
        "1st": {},
        "thumbnail": None,
    }
    for ifd, values in overrides.items():
        exif_dict[ifd].update(values)
    return exif_dict


def make_exif(**overrides) -> bytes:
    return piexif.dump(make_exif_dict(**overrides))


def make_jpeg(size=(64, 48), color=(200, 10, 10), exif: bytes = None) -> bytes:
    buffer = io.BytesIO()
    image = Image.new("RGB", size, color)
    if exif is None:
        image.save(buffer, format="JPEG")
    else:
        image.save(buffer, format="JPEG", exif=exif)
    return buffer.getvalue()


def make_png(size=(20, 10), color=(200, 10, 10)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def jpeg_file(tmp_path):
    path = tmp_path / "DSCF0001.JPG"
    path.write_bytes(make_jpeg(exif=make_exif()))
    return path
