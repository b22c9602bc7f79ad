"""
PDF Studio - Document Codec

Thin boundary around pikepdf: open bytes, create empty documents, read and
write page rotation, and serialize back to bytes. pikepdf exceptions are
translated into CodecError / SourceUnreadableError here so nothing above this
module needs to know about them.
"""

import io
import logging

import pikepdf

from pdfstudio.constants import VALID_ROTATIONS
from pdfstudio.utils.exceptions import CodecError, SourceUnreadableError

logger = logging.getLogger(__name__)


def load_pdf(data: bytes, *, operation: str = "load") -> pikepdf.Pdf:
    """Open PDF bytes as a pikepdf document.

    The caller owns the returned handle and must close it.

    Raises:
        SourceUnreadableError: If the bytes are not a readable PDF or the
            document needs a password.
    """
    if not data:
        raise SourceUnreadableError(operation, "document is empty")
    try:
        return pikepdf.open(io.BytesIO(data))
    except pikepdf.PasswordError as e:
        raise SourceUnreadableError(operation, "document is password-protected") from e
    except (pikepdf.PdfError, ValueError) as e:
        raise SourceUnreadableError(operation, str(e)) from e


def new_pdf() -> pikepdf.Pdf:
    """Create an empty destination document."""
    return pikepdf.Pdf.new()


def count_pages(data: bytes) -> int:
    """Return the number of pages in PDF bytes."""
    with load_pdf(data, operation="count pages") as pdf:
        return len(pdf.pages)


def normalize_rotation(angle: int) -> int:
    """Fold an angle into 0/90/180/270, rounding odd values to the nearest step."""
    angle = int(angle) % 360
    if angle not in VALID_ROTATIONS:
        angle = round(angle / 90) * 90 % 360
    return angle


def page_rotation(page: pikepdf.Page) -> int:
    """Resolve the effective /Rotate of a page, including inherited values.

    Pages without a rotation, with an unreadable one, or whose /Parent
    chain loops back on itself, report 0.
    """
    seen: set[tuple[int, int]] = set()
    try:
        node = page.obj
        while node is not None:
            if "/Rotate" in node:
                return normalize_rotation(int(node["/Rotate"]))
            if node.is_indirect:
                if node.objgen in seen:
                    logger.warning("Page tree /Parent chain is cyclic, treating rotation as 0")
                    return 0
                seen.add(node.objgen)
            node = node.get("/Parent")
    except (TypeError, ValueError, pikepdf.PdfError):
        logger.debug("Unreadable /Rotate value, treating as 0")
    return 0


def set_page_rotation(page: pikepdf.Page, angle: int) -> None:
    """Write an absolute rotation on the page itself (0 removes the key)."""
    angle = normalize_rotation(angle)
    if angle != 0:
        page.Rotate = angle
    elif "/Rotate" in page:
        del page["/Rotate"]


def save_pdf(pdf: pikepdf.Pdf, *, operation: str = "save") -> bytes:
    """Serialize a document to bytes.

    Output never carries encryption, and document IDs are derived from
    content so identical inputs give identical bytes.

    Raises:
        CodecError: If pikepdf cannot write the document.
    """
    buffer = io.BytesIO()
    try:
        pdf.save(buffer, deterministic_id=True, encryption=False)
    except (pikepdf.PdfError, ValueError, OSError) as e:
        raise CodecError(operation, str(e)) from e
    return buffer.getvalue()


def append_page(dst: pikepdf.Pdf, src_page: pikepdf.Page, extra_rotation: int = 0) -> int:
    """Append a page from another document, keeping its effective rotation.

    Inherited /Rotate does not survive the copy, so the final angle
    (intrinsic + extra) is always written on the new page itself.

    Returns:
        The intrinsic rotation read from the source page
    """
    intrinsic = page_rotation(src_page)
    dst.pages.append(src_page)
    set_page_rotation(dst.pages[-1], intrinsic + extra_rotation)
    return intrinsic
