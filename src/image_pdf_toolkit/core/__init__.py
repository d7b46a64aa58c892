"""
Image PDF Toolkit Core Package

Shared data models used by every builder stage. Models are frozen
dataclasses: a generation run never mutates its inputs, and any change
produces a new instance.
"""

from .models import ImageAsset, LayoutOptions, Orientation, PageFormat, load_options

__all__ = [
    "ImageAsset",
    "LayoutOptions",
    "Orientation",
    "PageFormat",
    "load_options",
]
