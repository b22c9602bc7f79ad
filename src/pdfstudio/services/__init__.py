"""
PDF Studio - Services Package

pikepdf-backed document services: rebuild, edit chaining, overlays,
merge and split.
"""

from pdfstudio.services.edit_chain import apply_content_edit
from pdfstudio.services.overlays import ImageOverlay, SignatureOverlay, TextOverlay
from pdfstudio.services.pdf_operations import (
    OperationResult,
    extract_range,
    merge_documents,
    split_session,
)
from pdfstudio.services.rebuild import rebuild_document, rebuild_session

__all__ = [
    "apply_content_edit",
    "ImageOverlay",
    "SignatureOverlay",
    "TextOverlay",
    "OperationResult",
    "extract_range",
    "merge_documents",
    "split_session",
    "rebuild_document",
    "rebuild_session",
]
