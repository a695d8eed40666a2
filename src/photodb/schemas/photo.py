from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from photodb.models.photo import (
    DEFAULT_COLOR,
    FILENAME_LENGTH,
    LONG_TEXT_LENGTH,
    SHORT_TEXT_LENGTH,
    UID_LENGTH,
)

NOT_NULL_FIELDS = (
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


class PhotoCreate(BaseModel):
    filename: Optional[str] = Field(None, max_length=FILENAME_LENGTH, description="Original file name")
    uid: Optional[str] = Field(None, max_length=UID_LENGTH, description="Opaque identifier")
    width: Optional[int] = Field(None, ge=0, description="Width in pixels")
    height: Optional[int] = Field(None, ge=0, description="Height in pixels")
    color: str = Field(DEFAULT_COLOR, max_length=SHORT_TEXT_LENGTH, description="Average color, hex")
    title: str = Field("", max_length=LONG_TEXT_LENGTH)
    date_taken: str = Field("", max_length=SHORT_TEXT_LENGTH)
    camera_model: str = Field("", max_length=LONG_TEXT_LENGTH)
    lens_model: str = Field("", max_length=LONG_TEXT_LENGTH)
    focal_length: str = Field("", max_length=SHORT_TEXT_LENGTH)
    aperture: str = Field("", max_length=SHORT_TEXT_LENGTH)
    exposure_time: str = Field("", max_length=SHORT_TEXT_LENGTH)
    sensitivity: str = Field("", max_length=SHORT_TEXT_LENGTH)


class PhotoUpdate(BaseModel):
    """Partial update. Only explicitly set fields are written."""

    filename: Optional[str] = Field(None, max_length=FILENAME_LENGTH)
    uid: Optional[str] = Field(None, max_length=UID_LENGTH)
    width: Optional[int] = Field(None, ge=0)
    height: Optional[int] = Field(None, ge=0)
    color: Optional[str] = Field(None, max_length=SHORT_TEXT_LENGTH)
    title: Optional[str] = Field(None, max_length=LONG_TEXT_LENGTH)
    date_taken: Optional[str] = Field(None, max_length=SHORT_TEXT_LENGTH)
    camera_model: Optional[str] = Field(None, max_length=LONG_TEXT_LENGTH)
    lens_model: Optional[str] = Field(None, max_length=LONG_TEXT_LENGTH)
    focal_length: Optional[str] = Field(None, max_length=SHORT_TEXT_LENGTH)
    aperture: Optional[str] = Field(None, max_length=SHORT_TEXT_LENGTH)
    exposure_time: Optional[str] = Field(None, max_length=SHORT_TEXT_LENGTH)
    sensitivity: Optional[str] = Field(None, max_length=SHORT_TEXT_LENGTH)

    @field_validator(*NOT_NULL_FIELDS)
    @classmethod
    def reject_null(cls, value: Optional[str], info) -> str:
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class PhotoRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    filename: Optional[str] = None
    uid: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    color: str
    title: str
    date_taken: str
    camera_model: str
    lens_model: str
    focal_length: str
    aperture: str
    exposure_time: str
    sensitivity: str
