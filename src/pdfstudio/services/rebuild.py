"""
PDF Studio - Rebuild Engine

Turns a committed snapshot plus the pending order table and rotation ledger
into new PDF bytes. ``rebuild_document`` is pure: it either returns a
complete document or raises, and no partial file is ever produced.
"""

import logging
from collections.abc import Mapping, Sequence

import pikepdf

from pdfstudio.editor.page_model import DocumentSnapshot, EditSession
from pdfstudio.services.codec import append_page, load_pdf, new_pdf, save_pdf
from pdfstudio.utils.exceptions import CodecError, StateCorruptionError

logger = logging.getLogger(__name__)


def validate_order(order: Sequence[int], page_count: int) -> None:
    """Check that ``order`` holds distinct integers in ``[0, page_count)``.

    Raises:
        StateCorruptionError: On the first entry that breaks the rule
    """
    seen: set[int] = set()
    for position, index in enumerate(order):
        if isinstance(index, bool) or not isinstance(index, int):
            raise StateCorruptionError(f"entry {position} is not an integer: {index!r}", order)
        if not 0 <= index < page_count:
            raise StateCorruptionError(
                f"entry {position} = {index} is outside 0..{page_count - 1}", order
            )
        if index in seen:
            raise StateCorruptionError(f"entry {position} = {index} is duplicated", order)
        seen.add(index)


def rebuild_document(
    snapshot: DocumentSnapshot,
    order: Sequence[int],
    rotations: Mapping[int, int],
) -> bytes:
    """Build a new PDF with the pages of ``snapshot`` in ``order``.

    Args:
        snapshot: Committed document
        order: Original page indices in output order
        rotations: Extra rotation per original index (absent means 0)

    Returns:
        Serialized PDF whose page k is source page ``order[k]`` rotated by
        ``rotations.get(order[k], 0)`` on top of its own rotation

    Raises:
        StateCorruptionError: If ``order`` is invalid (no codec call is made)
        SourceUnreadableError: If the snapshot bytes cannot be opened
        CodecError: If copying or saving fails
    """
    validate_order(order, snapshot.page_count)

    with load_pdf(snapshot.data, operation="rebuild") as src, new_pdf() as dst:
        for index in order:
            delta = int(rotations.get(index, 0) or 0)
            try:
                intrinsic = append_page(dst, src.pages[index], delta)
            except (pikepdf.PdfError, IndexError, ValueError) as e:
                raise CodecError("copy page", f"page {index + 1}: {e}") from e

            if delta:
                logger.debug(
                    "Page %d rotation: source=%d + editor=%d = %d",
                    index + 1,
                    intrinsic,
                    delta,
                    (intrinsic + delta) % 360,
                )

        data = save_pdf(dst, operation="rebuild")

    logger.info("Rebuilt document: %d page(s), %d bytes", len(order), len(data))
    return data


def rebuild_session(session: EditSession) -> bytes:
    """Materialize every pending structural edit of a session (no commit).

    A StateCorruptionError marks the session as unusable for further edits.
    """
    session.ensure_usable()
    try:
        return rebuild_document(session.snapshot, session.order, session.rotations)
    except StateCorruptionError:
        session.corrupted = True
        logger.error("Order table failed validation; session is no longer usable")
        raise
