"""
Module: builder.layout

Purpose:
    Page layout for image documents.
    Converts an ordered image list into positioned page plans.

Key Functions:
    - plan(): Arrange images onto pages
    - fit_within(): Aspect-preserving box fit

Key Classes:
    - PageGeometry: Page and content dimensions (mm)
    - GridSpec: Grid for an images-per-page count
    - Placement: Image positioned on a page
    - PagePlan: Single page layout plan
    - LayoutResult: All pages

Dependencies:
    - image_pdf_toolkit.core.models: ImageAsset, LayoutOptions

Used By:
    - builder.controller: Generation pipeline
    - builder.output.renderer: PDF emission
"""

from .config import PageGeometry, GridSpec, PAGE_FORMATS_MM, CELL_INSET_MM, page_dimensions_mm
from .models import Placement, PagePlan, LayoutResult
from .planner import plan, fit_within

__all__ = [
    # Config
    "PageGeometry",
    "GridSpec",
    "PAGE_FORMATS_MM",
    "CELL_INSET_MM",
    "page_dimensions_mm",
    # Models
    "Placement",
    "PagePlan",
    "LayoutResult",
    # Functions
    "plan",
    "fit_within",
]
