"""
Module: builder.sizing

Purpose:
    Rough output-size and page-count estimates shown to the user before
    generating. Approximations only; no guarantee against the real file.

Key Functions:
    - estimate_pdf_size(): Human-readable size string
    - estimate_pdf_bytes(): Raw byte estimate
    - estimate_page_count(): Pages needed for n images
    - format_size(): Render a byte count as "N KB" / "N.N MB"

Used By:
    - builder.session: Live estimate for the current image list
    - cli: --estimate
"""

from __future__ import annotations

import math
from typing import Sequence

from image_pdf_toolkit.core.models import ImageAsset, LayoutOptions

# Allowance for document structure per embedded image
PER_IMAGE_OVERHEAD_BYTES = 1024

KIB = 1024
MIB = 1024 * 1024


def estimate_pdf_bytes(images: Sequence[ImageAsset], options: LayoutOptions) -> float:
    """
    Approximate output size in bytes.

    avg * count * quality + count * 1KB. The caller must not pass an
    empty list.
    """
    count = len(images)
    avg_bytes = sum(image.byte_size for image in images) / count
    return avg_bytes * count * options.quality + count * PER_IMAGE_OVERHEAD_BYTES


def estimate_pdf_size(images: Sequence[ImageAsset], options: LayoutOptions) -> str:
    """
    Approximate output size as a display string.

    Example:
        >>> estimate_pdf_size([asset_of_100_kib], LayoutOptions(quality=0.5))
        '51 KB'
    """
    return format_size(estimate_pdf_bytes(images, options))


def format_size(size_bytes: float) -> str:
    """Whole KB below 1 MiB, otherwise MB to one decimal place."""
    if size_bytes < MIB:
        # Half-up rounding, not banker's rounding
        return f"{math.floor(size_bytes / KIB + 0.5)} KB"
    return f"{size_bytes / MIB:.1f} MB"


def estimate_page_count(image_count: int, images_per_page: int) -> int:
    """Pages needed: ceil(image_count / images_per_page)."""
    return math.ceil(image_count / images_per_page)
