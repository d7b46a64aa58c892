"""
Module: builder.config

Purpose:
    Configuration dataclass for one generation run: where the PDF goes and
    how much parallelism decoding may use. Layout choices live separately
    in LayoutOptions.

Key Classes:
    - GenerateConfig: Output and execution settings

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - builder.controller: generate_pdf()
    - builder.session: ImageSession.generate()
    - cli
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .images.decoder import DEFAULT_MAX_WORKERS

DEFAULT_FILENAME = "my-images"


@dataclass(frozen=True)
class GenerateConfig:
    """
    Configuration for generating a PDF (immutable).

    Attributes:
        filename: Output file stem; ".pdf" is appended
        output_dir: Directory for the PDF (current directory if None)
        max_workers: Maximum concurrent image decodes

    Example:
        >>> config = GenerateConfig(filename="holiday", output_dir=Path("out"))
    """

    filename: str = DEFAULT_FILENAME
    output_dir: Optional[Path] = None
    max_workers: int = DEFAULT_MAX_WORKERS

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.filename or not self.filename.strip():
            raise ValueError("filename must not be empty")
        if "/" in self.filename or "\\" in self.filename:
            raise ValueError(f"filename must not contain path separators: {self.filename!r}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be positive: {self.max_workers}")
