"""
Module: builder.images.compressor

Purpose:
    Re-encode decoded images as JPEG for embedding in the PDF.
    Quality is the user's 0.1-1.0 factor mapped onto Pillow's scale.

Key Functions:
    - compress_to_jpeg(): Encode a PIL image as JPEG bytes
    - to_rgb(): Flatten any mode to RGB on a white background

Dependencies:
    - PIL: Image conversion and JPEG encoding
"""

from __future__ import annotations

import io

from PIL import Image

# Background used where source pixels are transparent
BACKGROUND_RGB = (255, 255, 255)


def jpeg_quality(quality: float) -> int:
    """Map a 0-1 quality factor onto Pillow's 1-100 JPEG scale."""
    return max(1, min(100, round(quality * 100)))


def to_rgb(image: Image.Image) -> Image.Image:
    """
    Convert an image to RGB, compositing transparency onto white.

    Returns the image itself if it is already RGB.
    """
    if image.mode == "RGB":
        return image

    has_alpha = image.mode in ("RGBA", "LA") or (
        image.mode == "P" and "transparency" in image.info
    )
    if has_alpha:
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, BACKGROUND_RGB)
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background

    return image.convert("RGB")


def compress_to_jpeg(image: Image.Image, quality: float) -> bytes:
    """
    Encode an image as JPEG.

    Args:
        image: Decoded PIL image in any mode
        quality: Quality factor in [0, 1]

    Returns:
        JPEG-encoded bytes

    Example:
        >>> data = compress_to_jpeg(Image.new("RGBA", (10, 10)), 0.8)
        >>> data[:2]
        b'\\xff\\xd8'
    """
    buf = io.BytesIO()
    to_rgb(image).save(buf, format="JPEG", quality=jpeg_quality(quality))
    return buf.getvalue()
