"""
Module: builder.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses representing placements and pages.

Key Classes:
    - Placement: Image positioned on a page (mm, top-left origin)
    - PagePlan: Complete page layout
    - LayoutResult: Final layout output

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.planner: Creates PagePlans
    - builder.output.renderer: Draws PagePlans
"""

from __future__ import annotations

from dataclasses import dataclass

from image_pdf_toolkit.core.models import ImageAsset, LayoutOptions

from .config import PageGeometry


@dataclass(frozen=True)
class Placement:
    """
    An image positioned on a page.

    Coordinates are millimetres from the page's top-left corner.

    Attributes:
        asset: The ImageAsset to place
        x: Left edge
        y: Top edge
        width: Drawn width
        height: Drawn height

    Example:
        >>> placement = Placement(asset, x=10, y=77.25, width=190, height=142.5)
        >>> placement.bottom
        219.75
    """

    asset: ImageAsset
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        """Right X coordinate (x + width)."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom Y coordinate (y + height)."""
        return self.y + self.height

    @property
    def aspect_ratio(self) -> float:
        """Drawn width / height."""
        return self.width / self.height


@dataclass(frozen=True)
class PagePlan:
    """
    Complete layout plan for a single page.

    Attributes:
        index: Page number (0-indexed)
        placements: Tuple of Placements in fill order
    """

    index: int
    placements: tuple[Placement, ...]

    @property
    def placement_count(self) -> int:
        """Number of images on this page."""
        return len(self.placements)

    @property
    def is_empty(self) -> bool:
        """Check if page has no placements."""
        return len(self.placements) == 0

    @property
    def assets(self) -> tuple[ImageAsset, ...]:
        """Assets on this page, in fill order."""
        return tuple(p.asset for p in self.placements)


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output.

    Attributes:
        pages: Tuple of PagePlans
        geometry: Page geometry shared by every page
        options: Options the layout was computed from

    Example:
        >>> result = plan(images, LayoutOptions(images_per_page=4))
        >>> result.page_count
        2
    """

    pages: tuple[PagePlan, ...]
    geometry: PageGeometry
    options: LayoutOptions

    @property
    def page_count(self) -> int:
        """Number of pages in layout."""
        return len(self.pages)

    @property
    def total_placements(self) -> int:
        """Total number of placements across all pages."""
        return sum(p.placement_count for p in self.pages)

    def iter_placements(self):
        """Yield (page_index, placement) in page then fill order."""
        for page in self.pages:
            for placement in page.placements:
                yield page.index, placement
