"""
Module: builder.layout.planner

Purpose:
    Assign images to pages and compute where each one is drawn.
    Fixed-size grid cells on fixed-size pages, one image per cell.

Key Functions:
    - plan(): Main layout function
    - fit_within(): Aspect-preserving fit of an image into a box

Algorithm:
    1. Derive page geometry from format, orientation and margin
    2. Chunk images into consecutive groups of images_per_page
    3. One image per page: the cell is the whole content area
       Otherwise: grid cell j at (j // cols, j % cols), inset 2mm per side
    4. Fit width-first, clamp by height, centre in the cell

    A short last page keeps the full-page grid: with 4 per page, a fifth
    image lands in cell 0 of page 2, not in the whole content area.

    Pure and deterministic: no I/O, inputs are never modified, and the
    same inputs always give the same LayoutResult.

Dependencies:
    - builder.layout.config: PageGeometry, GridSpec
    - builder.layout.models: Placement, PagePlan, LayoutResult

Used By:
    - builder.controller: Main generation pipeline
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from image_pdf_toolkit.core.models import ImageAsset, LayoutOptions

from ..errors import LayoutError
from .config import CELL_INSET_MM, GridSpec, PageGeometry
from .models import LayoutResult, PagePlan, Placement

logger = logging.getLogger(__name__)


def plan(
    images: Sequence[ImageAsset],
    options: LayoutOptions,
) -> LayoutResult:
    """
    Lay out images onto pages.

    Every asset must carry its intrinsic dimensions (decode first).
    An empty list yields an empty layout; rejecting empty input is the
    caller's job.

    Args:
        images: Assets in page-fill order
        options: Layout options

    Returns:
        LayoutResult with one PagePlan per chunk of images_per_page

    Raises:
        LayoutError: If an asset has no dimensions

    Example:
        >>> result = plan(five_images, LayoutOptions(images_per_page=4))
        >>> [p.placement_count for p in result.pages]
        [4, 1]
    """
    geometry = PageGeometry.from_options(options)
    per_page = options.images_per_page

    pages: List[PagePlan] = []
    for page_index, start in enumerate(range(0, len(images), per_page)):
        chunk = images[start:start + per_page]
        pages.append(PagePlan(
            index=page_index,
            placements=tuple(_plan_page(chunk, geometry, per_page)),
        ))

    logger.debug(
        f"Planned {len(images)} images onto {len(pages)} pages "
        f"({per_page} per page, {geometry.page_width_mm:g}x{geometry.page_height_mm:g}mm)"
    )

    return LayoutResult(pages=tuple(pages), geometry=geometry, options=options)


def _plan_page(
    chunk: Sequence[ImageAsset],
    geometry: PageGeometry,
    images_per_page: int,
) -> List[Placement]:
    """Compute placements for one page's worth of images."""
    margin = geometry.margin_mm

    if images_per_page == 1:
        return [
            _place(asset, margin, margin, geometry.content_width_mm, geometry.content_height_mm)
            for asset in chunk
        ]

    grid = GridSpec.for_count(images_per_page)
    cell_width = geometry.content_width_mm / grid.cols
    cell_height = geometry.content_height_mm / grid.rows

    placements = []
    for j, asset in enumerate(chunk):
        row, col = grid.cell_position(j)
        x = margin + col * cell_width
        y = margin + row * cell_height
        placements.append(_place(
            asset,
            x + CELL_INSET_MM,
            y + CELL_INSET_MM,
            cell_width - 2 * CELL_INSET_MM,
            cell_height - 2 * CELL_INSET_MM,
        ))
    return placements


def _place(
    asset: ImageAsset,
    box_x: float,
    box_y: float,
    box_width: float,
    box_height: float,
) -> Placement:
    """Fit an asset into a box and centre it on both axes."""
    if not asset.has_dimensions:
        raise LayoutError(f"Image {asset.name!r} has no dimensions; decode it before planning")

    width, height = fit_within(asset.aspect_ratio, box_width, box_height)
    return Placement(
        asset=asset,
        x=box_x + (box_width - width) / 2,
        y=box_y + (box_height - height) / 2,
        width=width,
        height=height,
    )


def fit_within(aspect_ratio: float, max_width: float, max_height: float) -> tuple[float, float]:
    """
    Largest (width, height) with the given ratio that fits the box.

    Width-first: take the full width, and clamp by height if that
    overflows.

    Example:
        >>> fit_within(4 / 3, 190, 277)
        (190, 142.5)
    """
    width = max_width
    height = width / aspect_ratio
    if height > max_height:
        height = max_height
        width = height * aspect_ratio
    return width, height
