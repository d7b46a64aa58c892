"""
Module: cli

Purpose:
    Command-line front end: collect images from files and folders, apply
    layout options (flags override an optional JSON options file), then
    either print an estimate or generate the PDF.

Key Functions:
    - main(): Entry point, returns a process exit code
    - build_parser(): Argument parser

Exit codes:
    0 success, 1 generation/options failure, 2 bad arguments (argparse)
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from image_pdf_toolkit import __version__
from image_pdf_toolkit.builder import GenerateConfig, GenerationError, ImageSession
from image_pdf_toolkit.builder.config import DEFAULT_FILENAME
from image_pdf_toolkit.core.models import (
    LayoutOptions,
    Orientation,
    PageFormat,
    SUPPORTED_IMAGES_PER_PAGE,
    load_options,
)

logger = logging.getLogger("image_pdf_toolkit")

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="image-pdf-toolkit",
        description="Combine images into a single paginated PDF.",
    )
    parser.add_argument("inputs", nargs="+", type=Path, help="Image files or folders of images")
    parser.add_argument("-o", "--output", default=DEFAULT_FILENAME, help="Output file name without .pdf")
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory for the PDF (default: cwd)")
    parser.add_argument("--options-file", type=Path, default=None, help="JSON file with layout options")
    parser.add_argument("--format", dest="page_format", choices=[f.value for f in PageFormat])
    parser.add_argument("--orientation", choices=[o.value for o in Orientation])
    parser.add_argument("--quality", type=float, help="JPEG quality, 0.1 to 1.0")
    parser.add_argument("--margin", dest="margin_mm", type=float, help="Margin in mm, 0 to 30")
    parser.add_argument("--per-page", dest="images_per_page", type=int, choices=SUPPORTED_IMAGES_PER_PAGE)
    parser.add_argument("--workers", type=int, default=None, help="Parallel image decodes")
    parser.add_argument("--estimate", action="store_true", help="Print page count and size estimate, then exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_options(args: argparse.Namespace) -> LayoutOptions:
    """Options file (if any) with command-line flags applied on top."""
    base = load_options(args.options_file) if args.options_file else LayoutOptions()
    return base.with_overrides(
        page_format=args.page_format,
        orientation=args.orientation,
        quality=args.quality,
        margin_mm=args.margin_mm,
        images_per_page=args.images_per_page,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        options = resolve_options(args)
        config_kwargs = {"filename": args.output, "output_dir": args.output_dir}
        if args.workers is not None:
            config_kwargs["max_workers"] = args.workers
        config = GenerateConfig(**config_kwargs)
    except (ValueError, OSError) as e:
        logger.error(f"Invalid options: {e}")
        return 1

    with ImageSession(make_previews=False) as session:
        for path in args.inputs:
            if path.is_dir():
                session.add_folder(path)
            elif path.exists():
                session.add_files([path])
            else:
                logger.warning(f"Skipping missing path: {path}")

        if args.estimate:
            print(f"Images: {len(session)}")
            print(f"Estimated pages: {session.estimated_pages(options)}")
            print(f"Estimated size: {session.estimated_size(options)}")
            return 0

        try:
            result = session.generate(options, config)
        except GenerationError as e:
            logger.error(f"Error generating PDF: {e}")
            return 1

    print(f"Wrote {result.output_path} ({result.page_count} pages, {result.image_count} images)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
