"""Image downsizing for inlined attachments."""

import io
import logging

from PIL import Image, UnidentifiedImageError

log = logging.getLogger(__name__)


def downsize_image(data: bytes, scale_factor: float) -> bytes:
    """Re-encode an image at ``scale_factor`` of its size in its own format.

    Images are never enlarged; undecodable data is returned unchanged.
    """
    if scale_factor >= 1 or not data:
        return data

    try:
        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format
            width, height = image.size
            size = (
                max(1, round(width * scale_factor)),
                max(1, round(height * scale_factor)),
            )
            resized = image.resize(size, Image.Resampling.LANCZOS)
            buffer = io.BytesIO()
            resized.save(buffer, format=image_format)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        log.debug("Keeping image at original size: %s", e)
        return data

    return buffer.getvalue()
