import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import piexif

from photodb.models.photo import DEFAULT_COLOR, FILENAME_LENGTH, LONG_TEXT_LENGTH, SHORT_TEXT_LENGTH
from photodb.schemas.photo import PhotoCreate
from photodb.utils.fileIO import read_bytes
from photodb.utils.image import read_image_info

logger = logging.getLogger(__name__)

# Headers of the containers piexif can read: JPEG, TIFF (both byte orders), WebP
JPEG_MAGIC = b"\xff\xd8"
TIFF_MAGICS = (b"II*\x00", b"MM\x00*")

EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"
DATE_TAKEN_FORMAT = "%Y-%m-%d %H:%M"


class MetadataExtractor:
    async def extract(self, image_path: str) -> PhotoCreate:
        """Asynchronously reads an image file and extracts its photo record."""
        content = await read_bytes(image_path)
        return await asyncio.to_thread(self.extract_from_bytes, content, image_path)

    def extract_from_bytes(self, content: bytes, file_name: str) -> PhotoCreate:
        """Extracts a photo record directly from image bytes."""
        exif = self._export_exif_sync(content)
        info = read_image_info(content)

        exif_0th = exif.get("0th", {}) if exif else {}
        exif_exif = exif.get("Exif", {}) if exif else {}

        return PhotoCreate(
            filename=Path(file_name).name[:FILENAME_LENGTH],
            width=info.width if info else None,
            height=info.height if info else None,
            color=info.color if info else DEFAULT_COLOR,
            date_taken=self._parse_date_taken(exif_0th, exif_exif),
            camera_model=self._decode_text(exif_0th.get(piexif.ImageIFD.Model))[:LONG_TEXT_LENGTH],
            lens_model=self._decode_text(exif_exif.get(piexif.ExifIFD.LensModel))[:LONG_TEXT_LENGTH],
            focal_length=self._format_focal_length(exif_exif.get(piexif.ExifIFD.FocalLength))[:SHORT_TEXT_LENGTH],
            aperture=self._format_aperture(exif_exif.get(piexif.ExifIFD.FNumber))[:SHORT_TEXT_LENGTH],
            exposure_time=self._format_exposure_time(exif_exif.get(piexif.ExifIFD.ExposureTime))[:SHORT_TEXT_LENGTH],
            sensitivity=self._format_sensitivity(exif_exif.get(piexif.ExifIFD.ISOSpeedRatings))[:SHORT_TEXT_LENGTH],
        )

    def _export_exif_sync(self, content: bytes) -> Optional[dict]:
        """Synchronous helper for loading EXIF data from image bytes."""
        if not self._has_exif_container(content):
            return None
        try:
            return piexif.load(content)
        except Exception as e:
            logger.warning(f"Failed to load EXIF from input: {e}")
            return None

    def _decode_text(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, bytes):
            try:
                value = value.decode()
            except UnicodeDecodeError:
                value = value.decode("latin-1")
        return str(value).strip("\x00").strip()

    def _rational_to_float(self, value: Any) -> Optional[float]:
        if value is None:
            return None
        try:
            if isinstance(value, (int, float)):
                return float(value)
            if isinstance(value, tuple) and len(value) == 2:
                num, den = value
                if den == 0: return None
                return float(num) / float(den)
            if isinstance(value, (list, tuple)) and len(value) > 0:
                return self._rational_to_float(value[0])
        except (ValueError, TypeError, ZeroDivisionError):
            return None
        return None

    def _format_number(self, value: float) -> str:
        # 35.0 -> "35", 4.2 -> "4.2"
        return f"{round(value, 1):g}"

    def _format_focal_length(self, value: Any) -> str:
        focal = self._rational_to_float(value)
        if not focal:
            return ""
        return f"{self._format_number(focal)}mm"

    def _format_aperture(self, value: Any) -> str:
        f_number = self._rational_to_float(value)
        if not f_number:
            return ""
        return f"f/{self._format_number(f_number)}"

    def _format_exposure_time(self, value: Any) -> str:
        seconds = self._rational_to_float(value)
        if not seconds or seconds < 0:
            return ""
        if seconds < 1:
            denominator = 1 / seconds
            # 1/N only for exposures that are close to a whole fraction
            if seconds <= 0.3 or abs(denominator - round(denominator)) < 0.05:
                return f"1/{round(denominator)}"
        return f"{self._format_number(seconds)}s"

    def _format_sensitivity(self, value: Any) -> str:
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        if not isinstance(value, int) or value <= 0:
            return ""
        return str(value)

    def _parse_date_taken(self, exif_0th: dict, exif_exif: dict) -> str:
        raw = exif_exif.get(piexif.ExifIFD.DateTimeOriginal) or exif_0th.get(piexif.ImageIFD.DateTime)
        text = self._decode_text(raw)
        if not text:
            return ""
        try:
            taken = datetime.strptime(text, EXIF_DATETIME_FORMAT)
        except ValueError:
            logger.warning(f"Invalid EXIF date: {text!r}")
            return ""
        return taken.strftime(DATE_TAKEN_FORMAT)

    def _has_exif_container(self, content: bytes) -> bool:
        # piexif treats any other input as a file path
        if content[:2] == JPEG_MAGIC or content[:4] in TIFF_MAGICS:
            return True
        return content[:4] == b"RIFF" and content[8:12] == b"WEBP"
