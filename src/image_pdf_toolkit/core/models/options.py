"""
Module: options

Purpose:
    Provides LayoutOptions - the immutable set of user choices for one
    generation run (page format, orientation, quality, margin and grid
    density). Validated on construction so downstream code can trust it.

Key Classes:
    - Orientation: portrait / landscape
    - PageFormat: a4 / letter / legal
    - LayoutOptions: Frozen options dataclass

Key Functions:
    - LayoutOptions.from_dict(data): Build from JSON-style dict
    - LayoutOptions.to_dict(): Serialize for JSON
    - load_options(path): Read options from a JSON file

Dependencies:
    - dataclasses (std)
    - enum (std)
    - json (std)

Used By:
    - builder.layout.planner
    - builder.sizing
    - builder.controller
    - cli
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


# Supported ranges
MIN_QUALITY = 0.1
MAX_QUALITY = 1.0
MIN_MARGIN_MM = 0.0
MAX_MARGIN_MM = 30.0
SUPPORTED_IMAGES_PER_PAGE = (1, 2, 4, 6, 9)

# Defaults match the original web app
DEFAULT_QUALITY = 0.8
DEFAULT_MARGIN_MM = 10.0
DEFAULT_IMAGES_PER_PAGE = 1


class Orientation(str, Enum):
    """Page orientation. Landscape swaps the format's width and height."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    @classmethod
    def parse(cls, value: str | Orientation) -> Orientation:
        """Parse a case-insensitive name into an Orientation."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(o.value for o in cls)
            raise ValueError(f"Unknown orientation {value!r} (expected one of: {choices})") from None


class PageFormat(str, Enum):
    """Named paper size. Dimensions live in builder.layout.config."""

    A4 = "a4"
    LETTER = "letter"
    LEGAL = "legal"

    @classmethod
    def parse(cls, value: str | PageFormat) -> PageFormat:
        """Parse a case-insensitive name into a PageFormat."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown page format {value!r} (expected one of: {choices})") from None


@dataclass(frozen=True)
class LayoutOptions:
    """
    Options for one generation run (immutable).

    Quality only affects the size estimate and JPEG re-encoding, never
    layout geometry.

    Attributes:
        orientation: Portrait or landscape
        page_format: Paper size
        quality: JPEG quality factor in [0.1, 1.0]
        margin_mm: Page margin on every side, in [0, 30] mm
        images_per_page: Grid cell target, one of 1, 2, 4, 6, 9

    Example:
        >>> opts = LayoutOptions(images_per_page=4)
        >>> opts.page_format
        <PageFormat.A4: 'a4'>
        >>> LayoutOptions(images_per_page=3)
        Traceback (most recent call last):
        ValueError: images_per_page must be one of (1, 2, 4, 6, 9): 3
    """

    orientation: Orientation = Orientation.PORTRAIT
    page_format: PageFormat = PageFormat.A4
    quality: float = DEFAULT_QUALITY
    margin_mm: float = DEFAULT_MARGIN_MM
    images_per_page: int = DEFAULT_IMAGES_PER_PAGE

    def __post_init__(self) -> None:
        """Normalize enum fields and validate ranges."""
        # Frozen: normalize through object.__setattr__
        object.__setattr__(self, "orientation", Orientation.parse(self.orientation))
        object.__setattr__(self, "page_format", PageFormat.parse(self.page_format))

        if not (MIN_QUALITY <= self.quality <= MAX_QUALITY):
            raise ValueError(
                f"quality must be between {MIN_QUALITY} and {MAX_QUALITY}: {self.quality}"
            )
        if not (MIN_MARGIN_MM <= self.margin_mm <= MAX_MARGIN_MM):
            raise ValueError(
                f"margin_mm must be between {MIN_MARGIN_MM:g} and {MAX_MARGIN_MM:g}: {self.margin_mm}"
            )
        if self.images_per_page not in SUPPORTED_IMAGES_PER_PAGE:
            raise ValueError(
                f"images_per_page must be one of {SUPPORTED_IMAGES_PER_PAGE}: {self.images_per_page}"
            )

    def with_overrides(self, **changes: Any) -> LayoutOptions:
        """Return a copy with the given non-None fields replaced."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes) if changes else self

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dict."""
        return {
            "orientation": self.orientation.value,
            "page_format": self.page_format.value,
            "quality": self.quality,
            "margin_mm": self.margin_mm,
            "images_per_page": self.images_per_page,
        }

    @classmethod
    def from_dict(cls, data: dict) -> LayoutOptions:
        """
        Deserialize from dictionary.

        Missing keys fall back to defaults. Unknown keys are logged and
        ignored.

        Args:
            data: Dict with any subset of the option fields

        Returns:
            LayoutOptions instance

        Raises:
            ValueError: If a value is out of range or of the wrong type
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown option keys: {unknown}")

        kwargs = {k: v for k, v in data.items() if k in known}
        try:
            if "quality" in kwargs:
                kwargs["quality"] = float(kwargs["quality"])
            if "margin_mm" in kwargs:
                kwargs["margin_mm"] = float(kwargs["margin_mm"])
            if "images_per_page" in kwargs:
                kwargs["images_per_page"] = _whole_number(kwargs["images_per_page"])
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid option value: {e}") from e
        return cls(**kwargs)


def _whole_number(value: Any) -> int:
    """int() that refuses to truncate fractional values such as 4.7."""
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"images_per_page must be a whole number: {value!r}")
    return int(number)


def load_options(path: Path) -> LayoutOptions:
    """
    Load LayoutOptions from a JSON file.

    Args:
        path: Path to a JSON object with option fields

    Returns:
        Validated LayoutOptions

    Raises:
        ValueError: If the file is not valid JSON or not an object
        FileNotFoundError: If the file does not exist
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Options file is not valid JSON: {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Options file must contain a JSON object: {path}")

    logger.debug(f"Loaded options from {path}")
    return LayoutOptions.from_dict(data)
