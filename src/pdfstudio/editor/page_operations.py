"""
PDF Studio - Page Operations

Functions for editing the pending state of a session: ingest, reordering,
rotation, deletion and selection. Nothing here touches PDF bytes except
``ingest``, which only counts pages.
"""

from collections.abc import Iterable

from pdfstudio.constants import ROTATION_STEPS
from pdfstudio.editor.page_model import DocumentSnapshot, EditSession
from pdfstudio.services.codec import count_pages
from pdfstudio.utils.exceptions import (
    CannotDeleteAllError,
    FileTooLargeError,
    ValidationError,
)
from pdfstudio.utils.format_utils import format_file_size
from pdfstudio.utils.logger import logger


def ingest(data: bytes, *, max_bytes: int | None = None) -> EditSession:
    """Open PDF bytes as a fresh editing session.

    Args:
        data: Raw PDF bytes
        max_bytes: Optional size limit; larger inputs are rejected

    Returns:
        New EditSession with identity order and empty ledger/selection

    Raises:
        FileTooLargeError: If ``data`` exceeds ``max_bytes``
        SourceUnreadableError: If the bytes are not a readable PDF
    """
    if max_bytes is not None and len(data) > max_bytes:
        raise FileTooLargeError(len(data), max_bytes)

    total = count_pages(data)
    session = EditSession(snapshot=DocumentSnapshot(data=data, page_count=total))
    logger.info(
        f"Loaded document with {total} page(s), {format_file_size(session.snapshot.size)}"
    )
    return session


def page_count(session: EditSession) -> int:
    """Number of pages the next rebuild will produce."""
    return session.page_count


def rotation_delta(session: EditSession, original_index: int) -> int:
    """Pending extra rotation for an original page index."""
    return session.rotations.get(original_index, 0)


def _check_position(session: EditSession, position: int, field: str = "position") -> None:
    if isinstance(position, bool) or not isinstance(position, int):
        raise ValidationError(field, position, "position must be an integer")
    if not 0 <= position < len(session.order):
        raise ValidationError(
            field, position, f"position must be between 0 and {len(session.order) - 1}"
        )


def _checked_positions(session: EditSession, positions: Iterable[int]) -> set[int]:
    selected = set(positions)
    if not selected:
        raise ValidationError("selection", reason="no pages selected")
    for position in selected:
        _check_position(session, position, "selection")
    return selected


def reorder(session: EditSession, from_position: int, to_position: int) -> None:
    """Move the page at ``from_position`` so it ends up at ``to_position``.

    Example: ``[0, 1, 2, 3]`` with 0 -> 2 becomes ``[1, 2, 0, 3]``.
    """
    session.ensure_usable()
    _check_position(session, from_position, "from_position")
    _check_position(session, to_position, "to_position")

    moved = session.order.pop(from_position)
    session.order.insert(to_position, moved)
    session.selection.clear()
    logger.info(f"Moved page from position {from_position} to {to_position}")


def rotate(session: EditSession, positions: Iterable[int], degrees: int) -> None:
    """Add a quarter turn to every selected page.

    Args:
        session: The session to modify
        positions: Order positions to rotate
        degrees: -90 (counter-clockwise) or 90 (clockwise)
    """
    session.ensure_usable()
    if degrees not in ROTATION_STEPS:
        raise ValidationError("degrees", degrees, "rotation must be -90 or 90")
    selected = _checked_positions(session, positions)

    for position in selected:
        original = session.order[position]
        delta = (session.rotations.get(original, 0) + degrees) % 360
        if delta:
            session.rotations[original] = delta
        else:
            session.rotations.pop(original, None)

    session.selection.clear()
    logger.info(f"Rotated {len(selected)} page(s) by {degrees}°")


def delete(session: EditSession, positions: Iterable[int]) -> None:
    """Drop the selected positions from the output order.

    Rotation entries for the removed pages stay in the ledger; they are
    never read again because rebuild only looks at indices still in order.

    Raises:
        CannotDeleteAllError: If the selection covers every remaining page
    """
    session.ensure_usable()
    selected = _checked_positions(session, positions)
    if len(selected) >= len(session.order):
        raise CannotDeleteAllError(len(selected), len(session.order))

    for position in sorted(selected, reverse=True):
        del session.order[position]

    session.selection.clear()
    session.clamp_current_page()
    logger.info(f"Deleted {len(selected)} page(s), {len(session.order)} remaining")


def set_current_page(session: EditSession, page_number: int) -> None:
    """Point the session at a 1-indexed page."""
    if not 1 <= page_number <= session.page_count:
        raise ValidationError(
            "page_number", page_number, f"page must be between 1 and {session.page_count}"
        )
    session.current_page = page_number


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def select(session: EditSession, position: int) -> None:
    _check_position(session, position)
    session.selection.add(position)


def deselect(session: EditSession, position: int) -> None:
    session.selection.discard(position)


def toggle_selection(session: EditSession, position: int) -> bool:
    """Flip one position in the selection.

    Returns:
        True if the position is selected afterwards
    """
    if position in session.selection:
        session.selection.discard(position)
        return False
    select(session, position)
    return True


def select_all(session: EditSession) -> None:
    session.selection = set(range(len(session.order)))


def clear_selection(session: EditSession) -> None:
    session.selection.clear()


def rotate_selection(session: EditSession, degrees: int) -> None:
    """Rotate whatever is currently selected."""
    rotate(session, set(session.selection), degrees)


def delete_selection(session: EditSession) -> None:
    """Delete whatever is currently selected."""
    delete(session, set(session.selection))
