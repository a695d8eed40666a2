from sqlalchemy import Column, Integer, String

from photodb.db.database import PHOTO_TABLE, Base

DEFAULT_COLOR = "000000"

# Column lengths of the text columns
FILENAME_LENGTH = 255
UID_LENGTH = 16
SHORT_TEXT_LENGTH = 16
LONG_TEXT_LENGTH = 255

PHOTO_COLUMNS = (
    "id",
    "filename",
    "uid",
    "width",
    "height",
    "color",
    "title",
    "date_taken",
    "camera_model",
    "lens_model",
    "focal_length",
    "aperture",
    "exposure_time",
    "sensitivity",
)


def _text(length: int, default: str = "") -> Column:
    # Client-side default for ORM inserts, server-side default for raw SQL
    return Column(String(length), nullable=False, default=default, server_default=default)


class Photo(Base):
    __tablename__ = PHOTO_TABLE
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    filename = Column(String(FILENAME_LENGTH), nullable=True)
    uid = Column(String(UID_LENGTH), nullable=True)

    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    color = _text(SHORT_TEXT_LENGTH, DEFAULT_COLOR)
    title = _text(LONG_TEXT_LENGTH)

    # EXIF, stored as display strings
    date_taken = _text(SHORT_TEXT_LENGTH)
    camera_model = _text(LONG_TEXT_LENGTH)
    lens_model = _text(LONG_TEXT_LENGTH)
    focal_length = _text(SHORT_TEXT_LENGTH)
    aperture = _text(SHORT_TEXT_LENGTH)
    exposure_time = _text(SHORT_TEXT_LENGTH)
    sensitivity = _text(SHORT_TEXT_LENGTH)

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in PHOTO_COLUMNS}

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, uid={self.uid}, filename={self.filename})>"
