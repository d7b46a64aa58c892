"""
Module: builder.output.sink

Purpose:
    Persist a finished PDF blob. The sink only ever receives a complete,
    serialized document; a failure here leaves no partial file behind.

Key Classes:
    - SaveSink: Abstract save interface
    - FileSaveSink: Atomic write into a directory
    - MemorySaveSink: Keep blobs in memory (embedding, tests)

Dependencies:
    - tempfile (std): Atomic write via temp file + replace

Used By:
    - builder.output.renderer: emit_document()
    - builder.controller: generate_pdf()
"""

from __future__ import annotations

import logging
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..errors import SaveError

logger = logging.getLogger(__name__)


class SaveSink(ABC):
    """Destination for a serialized document."""

    @abstractmethod
    def save(self, blob: bytes, filename: str) -> Path:
        """
        Persist the blob under the given file name.

        Args:
            blob: Complete PDF bytes
            filename: File name including extension

        Returns:
            Path the document was saved to

        Raises:
            SaveError: If the environment refuses the write
        """


class FileSaveSink(SaveSink):
    """
    Sink that writes into a directory.

    Writes go to a temporary file in the target directory which then
    replaces the destination, so readers never see a half-written PDF.

    Example:
        >>> sink = FileSaveSink(Path("output"))
        >>> sink.save(pdf_bytes, "holiday.pdf")
        PosixPath('output/holiday.pdf')
    """

    def __init__(self, output_dir: Optional[Path] = None) -> None:
        """
        Initialize sink.

        Args:
            output_dir: Target directory (current directory if None)
        """
        self.output_dir = Path(output_dir) if output_dir is not None else Path.cwd()

    def save(self, blob: bytes, filename: str) -> Path:
        """Atomically write blob to output_dir / filename."""
        target = self.output_dir / _safe_name(filename)
        temp_path: Optional[Path] = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="wb",
                suffix=".part",
                dir=target.parent,
                delete=False,
            ) as f:
                temp_path = Path(f.name)
                f.write(blob)
            temp_path.replace(target)
        except OSError as e:
            _discard(temp_path)
            raise SaveError(f"Failed to save {target}: {e}") from e

        logger.info(f"Saved {len(blob)} bytes to {target}")
        return target


class MemorySaveSink(SaveSink):
    """Sink that keeps saved documents in a dict keyed by file name."""

    def __init__(self) -> None:
        self.files: Dict[str, bytes] = {}

    def save(self, blob: bytes, filename: str) -> Path:
        """Store blob in memory."""
        name = _safe_name(filename)
        self.files[name] = blob
        logger.debug(f"Stored {len(blob)} bytes as {name}")
        return Path(name)


def _safe_name(filename: str) -> str:
    """Reject names that are empty or would escape the target directory."""
    name = Path(filename).name
    if not name or name != filename or name in (".", ".."):
        raise SaveError(f"Invalid output file name: {filename!r}")
    return name


def _discard(path: Optional[Path]) -> None:
    """Remove a leftover temp file, ignoring a missing one."""
    if path is not None:
        path.unlink(missing_ok=True)
