"""
PDF Studio - Edit Chaining

Layers a content edit (text, image, signature) on top of the pending
structural edits of a session and commits the result as the new baseline.

Steps, in order:
  1. rebuild the pending order/rotations into baseline bytes
  2. reopen the baseline with pikepdf
  3. run the mutator on the open document
  4. serialize the mutated document
  5. install it as the session's snapshot (identity order, empty ledger)

Any failure before step 5 leaves the session exactly as it was.
"""

import logging
from collections.abc import Callable
from contextlib import ExitStack

import pikepdf

from pdfstudio.editor.page_model import DocumentSnapshot, EditSession
from pdfstudio.services.codec import load_pdf, save_pdf
from pdfstudio.services.rebuild import rebuild_session
from pdfstudio.utils.exceptions import CodecError, ContentEditError, PdfStudioError

logger = logging.getLogger(__name__)

# A mutator edits an open document in place. Auxiliary documents it opens
# (overlay pages, embedded files) go on the ExitStack so they stay alive
# until the result has been serialized.
Mutator = Callable[[pikepdf.Pdf, ExitStack], None]


def _operation_name(mutator: Mutator) -> str:
    return getattr(mutator, "operation", None) or getattr(
        mutator, "__name__", type(mutator).__name__
    )


def apply_content_edit(session: EditSession, mutator: Mutator) -> bytes:
    """Apply a content mutation and commit it as the new snapshot.

    Args:
        session: Session whose pending edits form the baseline
        mutator: Callable that edits the reopened baseline in place. If it
            has a ``validate(page_count)`` method, that runs first, before
            any codec work.

    Returns:
        The committed PDF bytes

    Raises:
        ValidationError: If the mutator rejects its own input
        StateCorruptionError: If the pending order table is invalid
        SourceUnreadableError / CodecError: On pikepdf failures
        ContentEditError: If the mutator fails for any other reason
    """
    operation = _operation_name(mutator)

    validate = getattr(mutator, "validate", None)
    if callable(validate):
        validate(session.page_count)

    baseline = rebuild_session(session)

    with load_pdf(baseline, operation=operation) as pdf, ExitStack() as resources:
        try:
            mutator(pdf, resources)
        except PdfStudioError:
            raise
        except pikepdf.PdfError as e:
            raise CodecError(operation, str(e)) from e
        except Exception as e:
            raise ContentEditError(operation, str(e)) from e

        new_page_count = len(pdf.pages)
        committed = save_pdf(pdf, operation=operation)

    session.install(DocumentSnapshot(data=committed, page_count=new_page_count))
    logger.info(
        "Committed '%s': %d page(s), %d bytes", operation, new_page_count, len(committed)
    )
    return committed
