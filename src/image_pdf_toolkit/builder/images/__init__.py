"""
Module: builder.images

Purpose:
    Image access for the generation pipeline.
    Decodes user images and re-encodes them as JPEG for embedding.

Key Classes:
    - ImageDecoder: Abstract decoder interface
    - PillowImageDecoder: Standard decoder
    - DecodedImage: Decoded pixels plus dimensions

Key Functions:
    - decode_all(): Ordered, all-or-nothing concurrent decode
    - compress_to_jpeg(): JPEG re-encoding at a quality factor

Dependencies:
    - PIL: Image decoding and encoding
"""

from .decoder import DecodedImage, ImageDecoder, PillowImageDecoder, decode_all
from .compressor import compress_to_jpeg, jpeg_quality, to_rgb

__all__ = [
    "DecodedImage",
    "ImageDecoder",
    "PillowImageDecoder",
    "decode_all",
    "compress_to_jpeg",
    "jpeg_quality",
    "to_rgb",
]
