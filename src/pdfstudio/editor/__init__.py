"""
PDF Studio - Editor Package

Edit-state model (snapshot, order table, rotation ledger, selection) and
the operations that change it.
"""

from pdfstudio.editor.page_model import DocumentSnapshot, EditSession
from pdfstudio.editor.page_operations import (
    clear_selection,
    delete,
    delete_selection,
    deselect,
    ingest,
    page_count,
    reorder,
    rotate,
    rotate_selection,
    rotation_delta,
    select,
    select_all,
    set_current_page,
    toggle_selection,
)

__all__ = [
    "DocumentSnapshot",
    "EditSession",
    "clear_selection",
    "delete",
    "delete_selection",
    "deselect",
    "ingest",
    "page_count",
    "reorder",
    "rotate",
    "rotate_selection",
    "rotation_delta",
    "select",
    "select_all",
    "set_current_page",
    "toggle_selection",
]
