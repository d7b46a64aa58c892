"""
Module: builder.output

Purpose:
    PDF rendering and saving.
    Converts a LayoutResult into PDF bytes using ReportLab and hands
    them to a save sink.

Key Functions:
    - emit_document(): Render and save a layout

Key Classes:
    - PdfDocumentEncoder: Page-by-page PDF builder
    - SaveSink / FileSaveSink / MemorySaveSink: Destinations

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
"""

from .sink import SaveSink, FileSaveSink, MemorySaveSink
from .renderer import PdfDocumentEncoder, emit_document

__all__ = [
    "SaveSink",
    "FileSaveSink",
    "MemorySaveSink",
    "PdfDocumentEncoder",
    "emit_document",
]
