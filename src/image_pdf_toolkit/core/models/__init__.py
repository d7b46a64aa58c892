"""
Core Models Package

Immutable, validated data models shared by the layout engine, the size
estimator and the PDF emitter.

All models in this package are frozen dataclasses, so they are safe to
hand to worker threads and can never be mutated mid-generation.
"""

from .images import ImageAsset, new_image_id
from .options import (
    LayoutOptions,
    Orientation,
    PageFormat,
    SUPPORTED_IMAGES_PER_PAGE,
    load_options,
)

__all__ = [
    "ImageAsset",
    "new_image_id",
    "LayoutOptions",
    "Orientation",
    "PageFormat",
    "SUPPORTED_IMAGES_PER_PAGE",
    "load_options",
]
