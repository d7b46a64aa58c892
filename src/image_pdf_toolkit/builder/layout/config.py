"""
Module: builder.layout.config

Purpose:
    Page geometry for the layout engine.
    Maps named page formats to millimetre dimensions and derives the
    content area and grid for a set of LayoutOptions.

Key Classes:
    - PageGeometry: Immutable page + content dimensions
    - GridSpec: Columns/rows for an images-per-page count

Dependencies:
    - dataclasses (std)
    - math (std)

Used By:
    - builder.layout.planner: Placement computation
    - builder.output.renderer: Page size for the PDF canvas
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from image_pdf_toolkit.core.models import LayoutOptions, Orientation, PageFormat


# Portrait (width, height) in millimetres
PAGE_FORMATS_MM: dict[PageFormat, tuple[float, float]] = {
    PageFormat.A4: (210.0, 297.0),
    PageFormat.LETTER: (216.0, 279.0),
    PageFormat.LEGAL: (216.0, 356.0),
}

# Gap kept on every side of a cell when several images share a page
CELL_INSET_MM = 2.0


def page_dimensions_mm(page_format: PageFormat, orientation: Orientation) -> tuple[float, float]:
    """
    Get (width, height) in mm for a format and orientation.

    Example:
        >>> page_dimensions_mm(PageFormat.A4, Orientation.LANDSCAPE)
        (297.0, 210.0)
    """
    width, height = PAGE_FORMATS_MM[PageFormat.parse(page_format)]
    if Orientation.parse(orientation) is Orientation.LANDSCAPE:
        return height, width
    return width, height


@dataclass(frozen=True)
class PageGeometry:
    """
    Page and content-area dimensions in millimetres (immutable).

    Attributes:
        page_width_mm: Full page width
        page_height_mm: Full page height
        margin_mm: Margin on every side

    Example:
        >>> geo = PageGeometry(210, 297, 10)
        >>> geo.content_width_mm, geo.content_height_mm
        (190, 277)
    """

    page_width_mm: float
    page_height_mm: float
    margin_mm: float = 0.0

    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        if self.page_width_mm <= 0:
            raise ValueError(f"page_width_mm must be positive: {self.page_width_mm}")
        if self.page_height_mm <= 0:
            raise ValueError(f"page_height_mm must be positive: {self.page_height_mm}")
        if self.margin_mm < 0:
            raise ValueError(f"margin_mm must be non-negative: {self.margin_mm}")
        if self.content_width_mm <= 0:
            raise ValueError("Margins exceed page width")
        if self.content_height_mm <= 0:
            raise ValueError("Margins exceed page height")

    @classmethod
    def from_options(cls, options: LayoutOptions) -> PageGeometry:
        """Derive geometry from format, orientation and margin."""
        width, height = page_dimensions_mm(options.page_format, options.orientation)
        return cls(page_width_mm=width, page_height_mm=height, margin_mm=options.margin_mm)

    @property
    def content_width_mm(self) -> float:
        """Width available for content (excluding margins)."""
        return self.page_width_mm - 2 * self.margin_mm

    @property
    def content_height_mm(self) -> float:
        """Height available for content (excluding margins)."""
        return self.page_height_mm - 2 * self.margin_mm


@dataclass(frozen=True)
class GridSpec:
    """
    Grid used when several images share a page.

    cols = ceil(sqrt(n)), rows = ceil(n / cols), so cols * rows >= n.

    Example:
        >>> GridSpec.for_count(6)
        GridSpec(cols=3, rows=2)
    """

    cols: int
    rows: int

    @classmethod
    def for_count(cls, images_per_page: int) -> GridSpec:
        """Build the grid for an images-per-page count."""
        if images_per_page < 1:
            raise ValueError(f"images_per_page must be positive: {images_per_page}")
        cols = math.ceil(math.sqrt(images_per_page))
        rows = math.ceil(images_per_page / cols)
        return cls(cols=cols, rows=rows)

    @property
    def capacity(self) -> int:
        """Number of cells in the grid."""
        return self.cols * self.rows

    def cell_position(self, index: int) -> tuple[int, int]:
        """Get (row, col) for a 0-indexed cell, filled row by row."""
        return divmod(index, self.cols)
