"""
PDF Studio - Page Model

Data models for the committed document snapshot and the pending edit state
of one editing session.
"""

import threading
from dataclasses import dataclass, field

from pdfstudio.utils.exceptions import StateCorruptionError


@dataclass(frozen=True)
class DocumentSnapshot:
    """The document as currently committed.

    Attributes:
        data: Raw PDF bytes
        page_count: Number of pages in ``data``
    """

    data: bytes = field(repr=False)
    page_count: int

    def __post_init__(self) -> None:
        if self.page_count < 0:
            raise ValueError(f"page_count must be >= 0, got {self.page_count}")

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class EditSession:
    """Pending structural edits against one immutable snapshot.

    ``order`` and ``rotations`` are keyed by original index (the page's
    position inside ``snapshot``). ``selection`` is keyed by position inside
    ``order``, which shifts on every reorder or delete.

    Attributes:
        snapshot: Committed document
        order: Original page indices in output order
        rotations: Extra rotation per original index (absent means 0)
        selection: Selected order positions for the next batch rotate/delete
        current_page: 1-indexed page shown to the user
        corrupted: Set once the order table failed validation
    """

    snapshot: DocumentSnapshot
    order: list[int] = field(default_factory=list)
    rotations: dict[int, int] = field(default_factory=dict)
    selection: set[int] = field(default_factory=set)
    current_page: int = 1
    corrupted: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Start from the identity order if none was given."""
        if not self.order:
            self.order = list(range(self.snapshot.page_count))
        self.current_page = self._clamp_page(self.current_page)

    @property
    def page_count(self) -> int:
        """Number of pages the output would have right now."""
        return len(self.order)

    def _clamp_page(self, page_number: int) -> int:
        return max(1, min(page_number, max(self.page_count, 1)))

    def clamp_current_page(self) -> None:
        self.current_page = self._clamp_page(self.current_page)

    def install(self, snapshot: DocumentSnapshot) -> None:
        """Replace the committed snapshot and reset every derived table.

        Original indices are renumbered by each commit, so ledger keys from
        the previous snapshot would point at the wrong pages.
        """
        with self._lock:
            self.snapshot = snapshot
            self.order = list(range(snapshot.page_count))
            self.rotations = {}
            self.selection = set()
            self.clamp_current_page()

    def ensure_usable(self) -> None:
        """Refuse to work on a session whose state is known to be broken."""
        if self.corrupted:
            raise StateCorruptionError("session was marked corrupted by an earlier failure")

    def is_identity(self) -> bool:
        """True when no structural edit is pending."""
        return self.order == list(range(self.snapshot.page_count)) and not any(
            self.rotations.get(i, 0) for i in self.order
        )
