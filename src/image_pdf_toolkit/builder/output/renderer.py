"""
Module: builder.output.renderer

Purpose:
    Render a LayoutResult to PDF using ReportLab.
    Each PagePlan becomes one PDF page with images re-encoded as JPEG
    and drawn at their planned rectangles.

Key Functions:
    - emit_document(): Decode, encode and save a layout

Key Classes:
    - PdfDocumentEncoder: Page-by-page builder over a ReportLab canvas

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling (via builder.images)
    - builder.layout.models: LayoutResult, Placement

Used By:
    - builder.controller: Pipeline orchestration
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Dict, Optional, Sequence

from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from image_pdf_toolkit.builder.images import (
    DecodedImage,
    ImageDecoder,
    compress_to_jpeg,
    decode_all,
)
from image_pdf_toolkit.builder.images.decoder import DEFAULT_MAX_WORKERS
from image_pdf_toolkit.builder.layout.config import PageGeometry
from image_pdf_toolkit.builder.layout.models import LayoutResult, Placement

from ..errors import EmptyInputError, EncodingError, SaveError
from .sink import SaveSink

logger = logging.getLogger(__name__)

PDF_EXTENSION = ".pdf"


def _get_creator() -> str:
    """Creator string with current version number."""
    from image_pdf_toolkit import __version__
    return f"Image PDF Toolkit v{__version__}"


class PdfDocumentEncoder:
    """
    Stateful PDF builder in millimetre, top-left coordinates.

    The first page exists implicitly; start_page() ends the previous page
    before every page after the first.

    Usage:
        encoder = PdfDocumentEncoder(geometry, title="holiday")
        encoder.start_page()
        encoder.place_image(jpeg_bytes, 10, 10, 190, 142.5)
        blob = encoder.serialize()
    """

    def __init__(self, geometry: PageGeometry, *, title: Optional[str] = None) -> None:
        self._buffer = io.BytesIO()
        self._page_width_pt = geometry.page_width_mm * mm
        self._page_height_pt = geometry.page_height_mm * mm
        self._canvas = canvas.Canvas(
            self._buffer,
            pagesize=(self._page_width_pt, self._page_height_pt),
        )
        self._canvas.setCreator(_get_creator())
        if title:
            self._canvas.setTitle(title)
        self._page_count = 0

    @property
    def page_count(self) -> int:
        """Pages started so far."""
        return self._page_count

    def start_page(self) -> None:
        """Begin a new page."""
        if self._page_count > 0:
            self._canvas.showPage()
        self._page_count += 1

    def place_image(
        self,
        jpeg_bytes: bytes,
        x_mm: float,
        y_mm: float,
        width_mm: float,
        height_mm: float,
    ) -> None:
        """
        Draw a JPEG at a rectangle on the current page.

        Args:
            jpeg_bytes: Encoded JPEG data (embedded as-is)
            x_mm: Left edge from page left
            y_mm: Top edge from page top
            width_mm: Drawn width
            height_mm: Drawn height
        """
        if self._page_count == 0:
            raise EncodingError("place_image() called before start_page()")

        self._canvas.drawImage(
            ImageReader(io.BytesIO(jpeg_bytes)),
            x_mm * mm,
            _transform_y(self._page_height_pt, y_mm, height_mm),
            width=width_mm * mm,
            height=height_mm * mm,
        )

    def serialize(self) -> bytes:
        """Finish the document and return the PDF bytes."""
        self._canvas.save()
        return self._buffer.getvalue()


def emit_document(
    layout: LayoutResult,
    filename: str,
    *,
    sink: SaveSink,
    decoded: Optional[Sequence[DecodedImage]] = None,
    decoder: Optional[ImageDecoder] = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> Path:
    """
    Render a layout to PDF and hand it to the save sink.

    One transaction: either the whole document is serialized and saved,
    or an error is raised and the sink is never called.

    Args:
        layout: Layout result from the planner
        filename: Output file stem (".pdf" is appended)
        sink: Where the finished document goes
        decoded: Already-decoded images for the layout's assets. If None,
            they are decoded here and released afterwards.
        decoder: Decoder used when decoded is None
        max_workers: Decode threads used when decoded is None

    Returns:
        Path reported by the sink

    Raises:
        EmptyInputError: If the layout has no pages
        DecodeError: If an image cannot be decoded
        EncodingError: If ReportLab or JPEG re-encoding fails
        SaveError: If the sink rejects the document

    Example:
        >>> emit_document(layout, "holiday", sink=FileSaveSink(Path("out")))
        PosixPath('out/holiday.pdf')
    """
    if layout.page_count == 0:
        raise EmptyInputError()

    owns_pixels = decoded is None
    if owns_pixels:
        assets = [placement.asset for _, placement in layout.iter_placements()]
        decoded = decode_all(assets, decoder, max_workers=max_workers)

    try:
        pixels = {d.asset.id: d for d in decoded}
        blob = _encode(layout, pixels, title=filename)
    finally:
        if owns_pixels:
            for d in decoded:
                d.close()

    logger.info(f"Rendered {layout.page_count} pages ({len(blob)} bytes)")

    try:
        return sink.save(blob, f"{filename}{PDF_EXTENSION}")
    except SaveError:
        raise
    except OSError as e:
        raise SaveError(f"Failed to save {filename}{PDF_EXTENSION}: {e}") from e


def _encode(
    layout: LayoutResult,
    pixels: Dict[str, DecodedImage],
    *,
    title: str,
) -> bytes:
    """Draw every page in order and serialize."""
    quality = layout.options.quality
    try:
        encoder = PdfDocumentEncoder(layout.geometry, title=title)
        for page in layout.pages:
            encoder.start_page()
            for placement in page.placements:
                _draw_placement(encoder, placement, pixels, quality)
        return encoder.serialize()
    except EncodingError:
        raise
    except Exception as e:
        raise EncodingError(f"Failed to encode PDF: {e}") from e


def _draw_placement(
    encoder: PdfDocumentEncoder,
    placement: Placement,
    pixels: Dict[str, DecodedImage],
    quality: float,
) -> None:
    """Re-encode one image and draw it at its placement."""
    decoded = pixels.get(placement.asset.id)
    if decoded is None:
        raise EncodingError(f"No pixel data for image {placement.asset.name!r}")

    jpeg = compress_to_jpeg(decoded.image, quality)
    encoder.place_image(jpeg, placement.x, placement.y, placement.width, placement.height)
    logger.debug(
        f"Placed {placement.asset.name} at ({placement.x:.2f}, {placement.y:.2f}) "
        f"{placement.width:.2f}x{placement.height:.2f}mm, {len(jpeg)} bytes"
    )


def _transform_y(page_height_pt: float, y_mm_top: float, height_mm: float) -> float:
    """
    Convert a top-down mm Y coordinate to bottom-up PDF points.

    Args:
        page_height_pt: Page height in points
        y_mm_top: Distance of the element's top edge from the page top
        height_mm: Element height

    Returns:
        Y of the element's bottom edge from the page bottom, in points
    """
    return page_height_pt - (y_mm_top + height_mm) * mm
