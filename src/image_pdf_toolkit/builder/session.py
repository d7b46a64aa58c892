"""
Module: builder.session

Purpose:
    The working image list a user builds up before generating: add files
    or folders, reorder, remove, clear, see live estimates, then generate.
    Owns one preview thumbnail per image as a scoped resource.

Key Classes:
    - PreviewHandle: Thumbnail tied to one image's lifetime in the session
    - ImageSession: Ordered image list with preview ownership

Dependencies:
    - PIL: Preview thumbnails
    - builder.controller: generate_pdf()
    - builder.sizing: Estimates

Used By:
    - cli
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from PIL import Image, ImageOps

from image_pdf_toolkit.core.models import ImageAsset, LayoutOptions, new_image_id

from .config import GenerateConfig
from .controller import GenerateResult, generate_pdf
from .images import ImageDecoder
from .output import SaveSink
from .sizing import estimate_page_count, estimate_pdf_size

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".gif", ".bmp", ".webp"})
PREVIEW_SIZE = (256, 256)


def is_supported_image(path: Path) -> bool:
    """True if the file extension is an accepted raster format."""
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


class PreviewHandle:
    """
    Thumbnail for one image, held until released.

    release() is idempotent; the thumbnail is None afterwards.
    """

    def __init__(self, image: Optional[Image.Image]) -> None:
        self._image = image

    @classmethod
    def acquire(cls, asset: ImageAsset, size: tuple[int, int] = PREVIEW_SIZE) -> PreviewHandle:
        """
        Create a thumbnail for an asset.

        Unreadable files get an empty handle; the decode error surfaces
        when generating.
        """
        try:
            data = io.BytesIO(asset.source) if isinstance(asset.source, bytes) else asset.source
            with Image.open(data) as source:
                thumb = ImageOps.exif_transpose(source)
            thumb.thumbnail(size)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            logger.warning(f"No preview for {asset.name}: {e}")
            return cls(None)
        return cls(thumb)

    @property
    def image(self) -> Optional[Image.Image]:
        """The thumbnail, or None if unavailable or released."""
        return self._image

    @property
    def is_released(self) -> bool:
        """True once release() has been called or no preview was made."""
        return self._image is None

    def release(self) -> None:
        """Free the thumbnail."""
        if self._image is not None:
            self._image.close()
            self._image = None


class ImageSession:
    """
    Ordered list of images awaiting conversion.

    Previews are acquired on add and released on remove, clear and
    close, including when the session is used as a context manager and
    generation raises.

    Usage:
        with ImageSession() as session:
            session.add_folder(Path("holiday"))
            session.move(3, 0)
            print(session.estimated_size(options))
            session.generate(options, GenerateConfig(filename="holiday"))
    """

    def __init__(self, *, make_previews: bool = True, preview_size: tuple[int, int] = PREVIEW_SIZE) -> None:
        self._assets: List[ImageAsset] = []
        self._previews: Dict[str, PreviewHandle] = {}
        self._make_previews = make_previews
        self._preview_size = preview_size

    # ─────────────────────────────────────────────────────────────────────────
    # Adding
    # ─────────────────────────────────────────────────────────────────────────

    def add_files(self, paths: Iterable[Path]) -> List[ImageAsset]:
        """
        Append image files in the given order.

        Files with unsupported extensions are skipped with a warning.

        Returns:
            The assets that were added
        """
        added = []
        for path in map(Path, paths):
            if not is_supported_image(path):
                logger.warning(f"Skipping unsupported file: {path.name}")
                continue
            asset = ImageAsset.from_path(path, image_id=self._unique_id())
            self._assets.append(asset)
            if self._make_previews:
                self._previews[asset.id] = PreviewHandle.acquire(asset, self._preview_size)
            added.append(asset)

        if added:
            logger.info(f"Added {len(added)} images ({len(self._assets)} total)")
        return added

    def add_folder(self, folder: Path) -> List[ImageAsset]:
        """Append every supported file in a folder, sorted by name."""
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(f"Not a folder: {folder}")
        return self.add_files(sorted(p for p in folder.iterdir() if p.is_file()))

    # ─────────────────────────────────────────────────────────────────────────
    # Editing
    # ─────────────────────────────────────────────────────────────────────────

    def remove(self, image_id: str) -> bool:
        """Remove an image and release its preview. False if not found."""
        for i, asset in enumerate(self._assets):
            if asset.id == image_id:
                del self._assets[i]
                self._release(image_id)
                logger.debug(f"Removed {asset.name}")
                return True
        return False

    def move(self, from_index: int, to_index: int) -> None:
        """
        Move an image to a new position.

        to_index is clamped to the list bounds.

        Raises:
            IndexError: If from_index is out of range
        """
        if not 0 <= from_index < len(self._assets):
            raise IndexError(f"No image at position {from_index}")
        to_index = max(0, min(len(self._assets) - 1, to_index))
        asset = self._assets.pop(from_index)
        self._assets.insert(to_index, asset)

    def clear(self) -> None:
        """Remove every image and release all previews."""
        for image_id in list(self._previews):
            self._release(image_id)
        self._assets.clear()
        logger.debug("Cleared all images")

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def assets(self) -> tuple[ImageAsset, ...]:
        """Images in display (and page-fill) order."""
        return tuple(self._assets)

    def __len__(self) -> int:
        return len(self._assets)

    def preview(self, image_id: str) -> Optional[Image.Image]:
        """Thumbnail for an image, if one is held."""
        handle = self._previews.get(image_id)
        return handle.image if handle else None

    def estimated_size(self, options: LayoutOptions) -> str:
        """Approximate PDF size for the current images."""
        if not self._assets:
            return "0 KB"
        return estimate_pdf_size(self._assets, options)

    def estimated_pages(self, options: LayoutOptions) -> int:
        """Pages the current images will need."""
        return estimate_page_count(len(self._assets), options.images_per_page)

    # ─────────────────────────────────────────────────────────────────────────
    # Generation
    # ─────────────────────────────────────────────────────────────────────────

    def generate(
        self,
        options: Optional[LayoutOptions] = None,
        config: Optional[GenerateConfig] = None,
        *,
        sink: Optional[SaveSink] = None,
        decoder: Optional[ImageDecoder] = None,
    ) -> GenerateResult:
        """Generate a PDF from the current images. See generate_pdf()."""
        return generate_pdf(self.assets, options, config, sink=sink, decoder=decoder)

    # ─────────────────────────────────────────────────────────────────────────
    # Resource management
    # ─────────────────────────────────────────────────────────────────────────

    def close(self) -> None:
        """Release all previews and empty the session."""
        self.clear()

    def __enter__(self) -> ImageSession:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _release(self, image_id: str) -> None:
        handle = self._previews.pop(image_id, None)
        if handle is not None:
            handle.release()

    def _unique_id(self) -> str:
        taken = {a.id for a in self._assets}
        image_id = new_image_id()
        while image_id in taken:
            image_id = new_image_id()
        return image_id
