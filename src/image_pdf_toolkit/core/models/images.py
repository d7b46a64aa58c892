"""
Module: images

Purpose:
    Provides the ImageAsset dataclass - one user-supplied image in
    display order. The layout engine reads only id and intrinsic
    dimensions; the emission driver reads the source.

Key Classes:
    - ImageAsset: Frozen image record

Key Functions:
    - ImageAsset.from_path(path): Build an asset from a file on disk
    - ImageAsset.with_dimensions(w, h): Copy with decoded dimensions
    - new_image_id(): Random short identifier

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - builder.layout.planner
    - builder.images.decoder
    - builder.session
"""

from __future__ import annotations

import random
import string
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Union

ImageSource = Union[Path, bytes]

_ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9


def new_image_id() -> str:
    """Return a random 9-character base-36 identifier."""
    return "".join(random.choice(_ID_ALPHABET) for _ in range(ID_LENGTH))


@dataclass(frozen=True)
class ImageAsset:
    """
    One image to place in the document (immutable).

    Attributes:
        id: Stable unique identifier
        name: Display name (usually the file name), used in error messages
        source: File path or raw encoded bytes
        byte_size: Size of the encoded source in bytes
        width: Intrinsic pixel width (None until decoded)
        height: Intrinsic pixel height (None until decoded)

    Invariants:
        - byte_size >= 0
        - width and height are both None or both positive

    Example:
        >>> asset = ImageAsset("a1", "cat.jpg", Path("cat.jpg"), 2048, 1600, 1200)
        >>> asset.aspect_ratio
        1.3333333333333333
    """

    id: str
    name: str
    source: ImageSource = field(repr=False)
    byte_size: int = 0
    width: Optional[int] = None
    height: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate asset on construction."""
        if self.byte_size < 0:
            raise ValueError(f"byte_size must be >= 0: {self.byte_size}")
        if (self.width is None) != (self.height is None):
            raise ValueError("width and height must be set together")
        if self.width is not None and (self.width <= 0 or self.height <= 0):
            raise ValueError(f"dimensions must be positive: {self.width}x{self.height}")

    @property
    def has_dimensions(self) -> bool:
        """True once intrinsic width/height are known."""
        return self.width is not None

    @property
    def aspect_ratio(self) -> float:
        """Intrinsic width / height."""
        if not self.has_dimensions:
            raise ValueError(f"Image {self.name!r} has no dimensions yet")
        return self.width / self.height

    def with_dimensions(self, width: int, height: int) -> ImageAsset:
        """Return a copy carrying the decoded pixel dimensions."""
        return replace(self, width=width, height=height)

    @classmethod
    def from_path(cls, path: Path, *, image_id: Optional[str] = None) -> ImageAsset:
        """
        Create an asset for a file on disk.

        Dimensions are left unset; they are filled in by decoding.

        Args:
            path: Image file path
            image_id: Optional explicit id (random if omitted)
        """
        path = Path(path)
        return cls(
            id=image_id or new_image_id(),
            name=path.name,
            source=path,
            byte_size=path.stat().st_size,
        )

    @classmethod
    def from_bytes(cls, name: str, data: bytes, *, image_id: Optional[str] = None) -> ImageAsset:
        """Create an asset for an in-memory encoded image."""
        return cls(
            id=image_id or new_image_id(),
            name=name,
            source=data,
            byte_size=len(data),
        )
