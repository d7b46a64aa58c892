"""
Module: builder

Purpose:
    Pipeline for turning an ordered list of images into a paginated PDF.
    Decodes the images, plans a grid layout per page, re-encodes each
    image as JPEG and renders the pages with ReportLab.

Key Functions:
    - generate_pdf(): Main entry point for PDF generation
    - plan(): Pure layout planner
    - estimate_pdf_size(): Pre-generation size estimate

Key Classes:
    - GenerateConfig: Output settings
    - GenerateResult: Generation result
    - ImageSession: Editable image list with preview ownership
    - GenerationError: Base of all pipeline errors

Dependencies:
    - PIL: Image decoding and JPEG encoding
    - reportlab: PDF generation
    - image_pdf_toolkit.core.models: ImageAsset, LayoutOptions

Used By:
    - image_pdf_toolkit.cli: Command-line interface
"""

from .config import GenerateConfig
from .errors import (
    GenerationError,
    EmptyInputError,
    LayoutError,
    DecodeError,
    EncodingError,
    SaveError,
)
from .layout import plan, LayoutResult
from .sizing import estimate_pdf_size, estimate_page_count
from .controller import generate_pdf, GenerateResult
from .session import ImageSession

__all__ = [
    # Config
    "GenerateConfig",
    # Errors
    "GenerationError",
    "EmptyInputError",
    "LayoutError",
    "DecodeError",
    "EncodingError",
    "SaveError",
    # Layout
    "plan",
    "LayoutResult",
    # Sizing
    "estimate_pdf_size",
    "estimate_page_count",
    # Controller
    "generate_pdf",
    "GenerateResult",
    # Session
    "ImageSession",
]
