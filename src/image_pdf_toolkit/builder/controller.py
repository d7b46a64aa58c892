"""
Module: builder.controller

Purpose:
    Orchestrate the complete generation pipeline.
    Validate → Decode → Plan → Render → Save

Key Functions:
    - generate_pdf(): Main entry point for building a PDF

Key Classes:
    - GenerateResult: Complete generation result

Dependencies:
    - builder.images: Decoding
    - builder.layout: Planning
    - builder.output: PDF rendering and saving

Used By:
    - builder.session: ImageSession.generate()
    - cli
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from image_pdf_toolkit.core.models import ImageAsset, LayoutOptions

from .config import GenerateConfig
from .errors import EmptyInputError
from .images import ImageDecoder, decode_all
from .layout import plan
from .output import FileSaveSink, SaveSink, emit_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerateResult:
    """
    Complete generation result (immutable).

    Attributes:
        output_path: Where the sink saved the PDF
        page_count: Number of pages generated
        image_count: Number of images placed
        elapsed_seconds: Wall time for the run

    Example:
        >>> result = generate_pdf(assets, LayoutOptions(images_per_page=4))
        >>> print(f"Generated {result.page_count} pages")
    """

    output_path: Path
    page_count: int
    image_count: int
    elapsed_seconds: float


def generate_pdf(
    images: Sequence[ImageAsset],
    options: Optional[LayoutOptions] = None,
    config: Optional[GenerateConfig] = None,
    *,
    sink: Optional[SaveSink] = None,
    decoder: Optional[ImageDecoder] = None,
) -> GenerateResult:
    """
    Build a PDF from start to finish.

    Pipeline:
    1. Reject empty input
    2. Decode every image (concurrently, all-or-nothing)
    3. Plan pages from decoded dimensions
    4. Render pages to PDF bytes
    5. Save through the sink

    Nothing reaches the sink unless every earlier step succeeded.

    Args:
        images: Assets in page-fill order
        options: Layout options (defaults if None)
        config: Output settings (defaults if None)
        sink: Save destination (FileSaveSink(config.output_dir) if None)
        decoder: Image decoder (Pillow if None)

    Returns:
        GenerateResult with the saved path and counts

    Raises:
        EmptyInputError: If images is empty
        DecodeError: If any image cannot be decoded
        EncodingError: If PDF encoding fails
        SaveError: If saving fails

    Example:
        >>> result = generate_pdf(
        ...     [ImageAsset.from_path(p) for p in paths],
        ...     LayoutOptions(images_per_page=4, margin_mm=10),
        ...     GenerateConfig(filename="holiday", output_dir=Path("out")),
        ... )
    """
    options = options or LayoutOptions()
    config = config or GenerateConfig()
    sink = sink or FileSaveSink(config.output_dir)

    # 1. Validate
    if not images:
        raise EmptyInputError()

    start_time = time.perf_counter()
    logger.info(
        f"Generating {config.filename}.pdf from {len(images)} images "
        f"({options.page_format.value}, {options.orientation.value}, "
        f"{options.images_per_page} per page)"
    )

    # 2. Decode
    decoded = decode_all(images, decoder, max_workers=config.max_workers)

    try:
        # 3. Plan
        layout = plan([d.sized_asset() for d in decoded], options)
        logger.info(f"Planned {layout.page_count} pages")

        # 4 + 5. Render and save
        output_path = emit_document(layout, config.filename, sink=sink, decoded=decoded)
    finally:
        for d in decoded:
            d.close()

    elapsed = time.perf_counter() - start_time
    logger.info(f"PDF generation completed in {elapsed:.2f}s")

    return GenerateResult(
        output_path=output_path,
        page_count=layout.page_count,
        image_count=layout.total_placements,
        elapsed_seconds=elapsed,
    )
