"""Cover thumbnail generation.

Every thumbnail is written to the same file in the system temp directory,
so there is never more than one on disk.
"""

import logging
import os
import tempfile
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QImageReader

logger = logging.getLogger(__name__)

THUMBNAIL_NAME = "mpdthumb"
THUMBNAIL_WIDTH = 80


def thumbnail_path() -> Path:
    """Return the fixed location thumbnails are written to."""
    return Path(tempfile.gettempdir()) / THUMBNAIL_NAME


def _resize(image: QImage, width: int, height: int) -> QImage:
    """Nearest-neighbor resize; a zero dimension keeps the aspect ratio."""
    mode = Qt.TransformationMode.FastTransformation
    if width == 0 and height == 0:
        return image.copy()
    if height == 0:
        return image.scaledToWidth(width, mode)
    if width == 0:
        return image.scaledToHeight(height, mode)
    return image.scaled(width, height, Qt.AspectRatioMode.IgnoreAspectRatio, mode)


def generate_thumbnail(
    source: str | os.PathLike[str],
    width: int = THUMBNAIL_WIDTH,
    height: int = 0,
    output: str | os.PathLike[str] | None = None,
) -> Path | None:
    """Write a resized copy of an image.

    The copy is encoded in the same format as the source.

    Args:
        source: Path of the image to shrink.
        width: Target width in pixels (0 to derive it from height).
        height: Target height in pixels (0 to derive it from width).
        output: Destination path; defaults to thumbnail_path().

    Returns:
        Path of the written thumbnail, or None if decoding or encoding failed.
    """
    reader = QImageReader(str(source))
    image_format = reader.format().data().decode()
    image = reader.read()
    if image.isNull():
        logger.warning("Couldn't decode cover %s: %s", source, reader.errorString())
        return None

    thumb = _resize(image, width, height)
    target = Path(output) if output is not None else thumbnail_path()
    if not thumb.save(str(target), image_format or None):
        logger.warning("Couldn't write thumbnail %s (format %r)", target, image_format)
        return None

    logger.debug(
        "Thumbnail %s: %dx%d -> %dx%d",
        target,
        image.width(),
        image.height(),
        thumb.width(),
        thumb.height(),
    )
    return target
