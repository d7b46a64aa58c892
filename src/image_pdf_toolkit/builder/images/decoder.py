"""
Module: builder.images.decoder

Purpose:
    Decode image sources into pixel data.
    Provides an abstract decoder interface, the standard Pillow decoder,
    and an all-or-nothing concurrent decode that keeps input order.

Key Classes:
    - DecodedImage: Decoded pixels plus dimensions
    - ImageDecoder: Abstract decoder interface
    - PillowImageDecoder: Standard decoder (Pillow)

Key Functions:
    - decode_all(): Decode many assets in a thread pool

Dependencies:
    - PIL: Image decoding
    - concurrent.futures: Thread pool execution

Used By:
    - builder.controller: Decode before planning
    - builder.output.renderer: Decode when not supplied by caller
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

from PIL import Image, ImageOps

from image_pdf_toolkit.core.models import ImageAsset

from ..errors import DecodeError

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class DecodedImage:
    """
    Decoded pixel data for one asset.

    Attributes:
        asset: The source asset
        image: Fully loaded PIL Image
    """

    asset: ImageAsset
    image: Image.Image

    @property
    def width(self) -> int:
        """Pixel width."""
        return self.image.width

    @property
    def height(self) -> int:
        """Pixel height."""
        return self.image.height

    def sized_asset(self) -> ImageAsset:
        """The asset with its decoded dimensions filled in."""
        return self.asset.with_dimensions(self.width, self.height)

    def close(self) -> None:
        """Release the pixel buffer."""
        self.image.close()


class ImageDecoder(ABC):
    """
    Abstract interface for decoding image assets.

    Implementations must be safe to call from worker threads.
    """

    @abstractmethod
    def decode(self, asset: ImageAsset) -> DecodedImage:
        """
        Decode an asset's source into pixels.

        Args:
            asset: Asset to decode

        Returns:
            DecodedImage with pixels loaded

        Raises:
            DecodeError: If the source is not a readable raster image
        """


class PillowImageDecoder(ImageDecoder):
    """
    Decoder backed by Pillow.

    Accepts file paths or in-memory bytes. Pixels are loaded eagerly so
    that corrupt data fails here, not later during encoding.
    """

    def decode(self, asset: ImageAsset) -> DecodedImage:
        """Open and fully load an asset's source."""
        source = io.BytesIO(asset.source) if isinstance(asset.source, bytes) else asset.source
        try:
            image = Image.open(source)
            image.load()
            image = _upright(image)
        except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
            # UnidentifiedImageError and truncated files are OSErrors
            raise DecodeError(asset.name, str(e)) from e

        logger.debug(f"Decoded {asset.name}: {image.width}x{image.height} {image.mode}")
        return DecodedImage(asset=asset, image=image)


def _upright(image: Image.Image) -> Image.Image:
    """
    Apply the EXIF Orientation tag so pixels are in display orientation.

    Camera photos are often stored sideways with a rotation tag; layout
    and drawing must both see the displayed width and height.
    """
    transposed = ImageOps.exif_transpose(image)
    if transposed is not image:
        image.close()
    return transposed


def decode_all(
    assets: Sequence[ImageAsset],
    decoder: Optional[ImageDecoder] = None,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> List[DecodedImage]:
    """
    Decode assets concurrently, all-or-nothing.

    Results come back in input order regardless of completion order.
    The first failure (in input order) cancels pending work, closes
    anything already decoded and is re-raised.

    Args:
        assets: Assets to decode
        decoder: Decoder to use (PillowImageDecoder if None)
        max_workers: Maximum decode threads

    Returns:
        DecodedImages, one per asset, same order

    Raises:
        DecodeError: If any asset fails to decode

    Example:
        >>> decoded = decode_all(assets)
        >>> [d.asset.id for d in decoded] == [a.id for a in assets]
        True
    """
    if not assets:
        return []

    decoder = decoder or PillowImageDecoder()
    results: List[DecodedImage] = []
    failure: Optional[BaseException] = None

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(assets)))) as pool:
        futures = [pool.submit(decoder.decode, asset) for asset in assets]
        for future in futures:
            try:
                results.append(future.result())
            except Exception as e:
                failure = e
                break
        if failure is not None:
            for future in futures:
                future.cancel()

    if failure is not None:
        # Pool has drained; release everything that did decode
        for decoded in _completed_results(futures):
            decoded.close()
        logger.error(f"Decode failed: {failure}")
        raise failure

    logger.info(f"Decoded {len(results)} images")
    return results


def _completed_results(futures: Sequence[Future]) -> List[DecodedImage]:
    """Results of futures that finished without error."""
    return [
        f.result()
        for f in futures
        if f.done() and not f.cancelled() and f.exception() is None
    ]
