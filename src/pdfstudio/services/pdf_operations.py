"""
PDF Studio - PDF Operations Service

Pure-Python service for whole-document operations.
No UI dependencies - can be used from the CLI, a GUI, or scripts.

Supported operations:
  - Merge several documents into one
  - Extract a contiguous page range (split)
  - Export a session's pending edits to a file
  - Page count and metadata info

The byte-level functions (``merge_documents``, ``extract_range``) raise
typed errors. The file-level functions wrap them and report through
``OperationResult`` so callers can show a friendly message.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

import pikepdf

from pdfstudio.constants import MIN_MERGE_SOURCES
from pdfstudio.editor.page_model import EditSession
from pdfstudio.services.codec import append_page, count_pages, load_pdf, new_pdf, save_pdf
from pdfstudio.services.rebuild import rebuild_session
from pdfstudio.utils.exceptions import (
    CannotDeleteAllError,
    CodecError,
    FileTooLargeError,
    InsufficientInputsError,
    InvalidRangeError,
    PdfStudioError,
    SourceUnreadableError,
    StateCorruptionError,
    ValidationError,
)
from pdfstudio.utils.i18n import _

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """Error classification for PDF operations."""

    NONE = auto()
    FILE_NOT_FOUND = auto()
    PERMISSION_DENIED = auto()
    FILE_TOO_LARGE = auto()
    INVALID_INPUT = auto()
    INVALID_RANGE = auto()
    INSUFFICIENT_INPUTS = auto()
    CANNOT_DELETE_ALL = auto()
    CORRUPT_PDF = auto()
    CODEC_FAILURE = auto()
    STATE_CORRUPTION = auto()
    DISK_FULL = auto()
    UNKNOWN = auto()


def _classify_error(e: Exception) -> ErrorCode:
    """Classify an exception into an ErrorCode."""
    if isinstance(e, FileNotFoundError):
        return ErrorCode.FILE_NOT_FOUND
    if isinstance(e, PermissionError):
        return ErrorCode.PERMISSION_DENIED
    if isinstance(e, FileTooLargeError):
        return ErrorCode.FILE_TOO_LARGE
    if isinstance(e, InvalidRangeError):
        return ErrorCode.INVALID_RANGE
    if isinstance(e, ValidationError):
        return ErrorCode.INVALID_INPUT
    if isinstance(e, InsufficientInputsError):
        return ErrorCode.INSUFFICIENT_INPUTS
    if isinstance(e, CannotDeleteAllError):
        return ErrorCode.CANNOT_DELETE_ALL
    if isinstance(e, SourceUnreadableError):
        return ErrorCode.CORRUPT_PDF
    if isinstance(e, CodecError):
        return ErrorCode.CODEC_FAILURE
    if isinstance(e, StateCorruptionError):
        return ErrorCode.STATE_CORRUPTION
    if isinstance(e, OSError) and e.errno == 28:
        return ErrorCode.DISK_FULL
    return ErrorCode.UNKNOWN


def _friendly_error(e: Exception) -> str:
    """Map common exceptions to user-friendly messages."""
    if isinstance(e, FileNotFoundError):
        return _("Could not find the file. Was it moved or deleted?")
    if isinstance(e, PermissionError):
        return _("Cannot write to this folder. Choose a different location.")
    if isinstance(e, InvalidRangeError):
        return _("Invalid page range. Pages must be between 1 and {total}.").format(
            total=e.page_count
        )
    if isinstance(e, InsufficientInputsError):
        return _("Select at least two PDF files to merge.")
    if isinstance(e, CannotDeleteAllError):
        return _("Cannot delete all pages.")
    if isinstance(e, SourceUnreadableError):
        return _("The PDF file appears to be damaged or invalid: {error}").format(error=e)
    if isinstance(e, StateCorruptionError):
        return _("The editor state is inconsistent. Reload the document: {error}").format(
            error=e
        )
    return str(e)


def _fail(e: Exception) -> "OperationResult":
    """Create a failed OperationResult from an exception."""
    return OperationResult(
        success=False,
        message=_friendly_error(e),
        error_code=_classify_error(e),
    )


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class PDFInfo:
    """Basic information about a PDF file."""

    path: str
    page_count: int
    file_size_bytes: int
    encrypted: bool = False
    pdf_version: str = ""

    @property
    def file_size_mb(self) -> float:
        return self.file_size_bytes / (1024 * 1024)


@dataclass
class OperationResult:
    """Generic result for PDF operations."""

    success: bool
    message: str = ""
    output_path: str = ""
    pages_affected: int = 0
    error_code: ErrorCode = ErrorCode.NONE


# ---------------------------------------------------------------------------
# Merge (bytes)
# ---------------------------------------------------------------------------


def merge_documents(sources: list[bytes]) -> bytes:
    """Concatenate documents, each contributing all pages in its own order.

    Args:
        sources: PDF bytes in the order they should appear

    Returns:
        Serialized merged document

    Raises:
        InsufficientInputsError: With fewer than two sources
        SourceUnreadableError: If any source cannot be opened
        CodecError: If copying or saving fails
    """
    if len(sources) < MIN_MERGE_SOURCES:
        raise InsufficientInputsError(len(sources), MIN_MERGE_SOURCES)

    open_sources: list[pikepdf.Pdf] = []
    try:
        with new_pdf() as dst:
            for position, source in enumerate(sources, 1):
                src = load_pdf(source, operation=f"merge source {position}")
                open_sources.append(src)
                try:
                    for page in src.pages:
                        append_page(dst, page)
                except pikepdf.PdfError as e:
                    raise CodecError("merge", f"source {position}: {e}") from e
                logger.info("Merged %d pages from source %d", len(src.pages), position)

            total = len(dst.pages)
            data = save_pdf(dst, operation="merge")
    finally:
        for src in open_sources:
            src.close()

    logger.info("Merged %d documents → %d pages", len(sources), total)
    return data


# ---------------------------------------------------------------------------
# Extract range / split (bytes)
# ---------------------------------------------------------------------------


def extract_range(data: bytes, start: int, end: int) -> bytes:
    """Copy pages ``start..end`` (1-indexed, inclusive) into a new document.

    Raises:
        InvalidRangeError: Unless ``1 <= start <= end <= page_count``
        SourceUnreadableError: If ``data`` cannot be opened
        CodecError: If copying or saving fails
    """
    with load_pdf(data, operation="split") as src:
        total = len(src.pages)
        if (
            isinstance(start, bool)
            or isinstance(end, bool)
            or not isinstance(start, int)
            or not isinstance(end, int)
            or not 1 <= start <= end <= total
        ):
            raise InvalidRangeError(start, end, total)

        with new_pdf() as dst:
            try:
                for pn in range(start - 1, end):
                    append_page(dst, src.pages[pn])
            except pikepdf.PdfError as e:
                raise CodecError("split", str(e)) from e
            result = save_pdf(dst, operation="split")

    logger.info("Extracted pages %d-%d of %d", start, end, total)
    return result


def split_session(session: EditSession, start: int, end: int) -> bytes:
    """Extract a range from the session as the user currently sees it.

    Pending reorders, rotations and deletions are rebuilt first; the
    session itself is not modified.
    """
    return extract_range(rebuild_session(session), start, end)


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


def read_pdf_file(pdf_path: str | Path, max_bytes: int | None = None) -> bytes:
    """Read a PDF file into memory, enforcing an optional size limit.

    Raises:
        FileNotFoundError: If the file does not exist
        FileTooLargeError: If the file is larger than ``max_bytes``
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.is_file():
        raise FileNotFoundError(f"File not found: {pdf_path}")

    size = pdf_path.stat().st_size
    if max_bytes is not None and size > max_bytes:
        raise FileTooLargeError(size, max_bytes)

    return pdf_path.read_bytes()


def write_pdf_file(output_path: str | Path, data: bytes) -> Path:
    """Write PDF bytes, creating the parent directory if needed."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(data)
    return output_path


def get_pdf_info(pdf_path: str | Path) -> PDFInfo:
    """Get basic information about a PDF file.

    Raises:
        FileNotFoundError: If the file does not exist.
        SourceUnreadableError: If the file is not a valid PDF.
    """
    pdf_path = str(pdf_path)
    if not os.path.isfile(pdf_path):
        raise FileNotFoundError(f"File not found: {pdf_path}")

    file_size = os.path.getsize(pdf_path)
    with open(pdf_path, "rb") as f:
        data = f.read()

    with load_pdf(data, operation="info") as pdf:
        return PDFInfo(
            path=pdf_path,
            page_count=len(pdf.pages),
            file_size_bytes=file_size,
            pdf_version=str(pdf.pdf_version),
            encrypted=pdf.is_encrypted,
        )


def merge_pdfs(
    input_paths: list[str | Path],
    output_path: str | Path,
    *,
    max_bytes: int | None = None,
) -> OperationResult:
    """Merge multiple PDF files into one.

    Args:
        input_paths: List of PDF file paths to merge (in order).
        output_path: Path for the merged output PDF.
        max_bytes: Optional per-file size limit.

    Returns:
        OperationResult.
    """
    try:
        sources = [read_pdf_file(p, max_bytes) for p in input_paths]
        data = merge_documents(sources)
        write_pdf_file(output_path, data)
        total_pages = count_pages(data)
    except (OSError, PdfStudioError) as e:
        logger.error("Merge failed: %s", e)
        return _fail(e)

    logger.info("Merged PDF saved: %s (%d pages)", output_path, total_pages)
    return OperationResult(
        success=True,
        message=_("Merged {count} files → {pages} pages").format(
            count=len(input_paths), pages=total_pages
        ),
        output_path=str(output_path),
        pages_affected=total_pages,
    )


def split_range(
    pdf_path: str | Path,
    output_path: str | Path,
    start: int,
    end: int,
    *,
    max_bytes: int | None = None,
) -> OperationResult:
    """Extract pages ``start..end`` (1-indexed, inclusive) of a file.

    Returns:
        OperationResult.
    """
    try:
        data = extract_range(read_pdf_file(pdf_path, max_bytes), start, end)
        write_pdf_file(output_path, data)
    except (OSError, PdfStudioError) as e:
        logger.error("Split failed: %s", e)
        return _fail(e)

    pages = end - start + 1
    logger.info("Extracted pages %d-%d → %s", start, end, output_path)
    return OperationResult(
        success=True,
        message=_("Extracted pages {start}-{end}").format(start=start, end=end),
        output_path=str(output_path),
        pages_affected=pages,
    )


def export_session(session: EditSession, output_path: str | Path) -> OperationResult:
    """Rebuild a session's pending edits and write them to a file.

    The session is not committed; it can keep being edited afterwards.
    With no structural edit pending the snapshot bytes are written as is.
    """
    try:
        if session.is_identity():
            session.ensure_usable()
            data = session.snapshot.data
        else:
            data = rebuild_session(session)
        write_pdf_file(output_path, data)
    except (OSError, PdfStudioError) as e:
        logger.error("Export failed: %s", e)
        return _fail(e)

    logger.info("Exported %d pages → %s", session.page_count, output_path)
    return OperationResult(
        success=True,
        message=_("Saved {pages} pages").format(pages=session.page_count),
        output_path=str(output_path),
        pages_affected=session.page_count,
    )
