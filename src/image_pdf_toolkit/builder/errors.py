"""
Module: builder.errors

Purpose:
    Exception hierarchy for the generation pipeline. Every failure that
    aborts a run derives from GenerationError so callers can present one
    user-facing message and reset their progress state.

Key Classes:
    - GenerationError: Base for all pipeline failures
    - EmptyInputError: No images supplied
    - LayoutError: Planner given an asset without dimensions
    - DecodeError: An image could not be decoded
    - EncodingError: PDF encoding or serialization failed
    - SaveError: The save sink rejected the document

Used By:
    - builder.controller
    - builder.layout.planner
    - builder.images.decoder
    - builder.output.renderer
    - builder.output.sink
"""

from __future__ import annotations


class GenerationError(Exception):
    """Error during PDF generation."""
    pass


class EmptyInputError(GenerationError):
    """No images were supplied."""

    def __init__(self, message: str = "No images provided") -> None:
        super().__init__(message)


class LayoutError(GenerationError):
    """Layout could not be computed for the given assets."""
    pass


class DecodeError(GenerationError):
    """An image's bytes could not be read as a raster image."""

    def __init__(self, image_name: str, reason: str = "") -> None:
        message = f"Failed to load image: {image_name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.image_name = image_name


class EncodingError(GenerationError):
    """The document encoder rejected a placement or serialization."""
    pass


class SaveError(GenerationError):
    """The save sink could not persist the document."""
    pass
