"""Tests for edit chaining (content edits committed on top of pending edits)."""

import pikepdf
import pytest
from conftest import build_pdf, page_rotations, page_widths

from pdfstudio.editor import delete, ingest, reorder, rotate, select
from pdfstudio.services.edit_chain import apply_content_edit
from pdfstudio.services.overlays import TextOverlay
from pdfstudio.utils.exceptions import CodecError, ContentEditError, ValidationError


def _noop(pdf, resources):
    pass


class TestApplyContentEdit:
    def test_commits_pending_edits(self):
        s = ingest(build_pdf(4))
        reorder(s, 0, 2)
        rotate(s, [0], 90)
        delete(s, [3])

        committed = apply_content_edit(s, _noop)

        assert s.snapshot.data == committed
        assert s.snapshot.page_count == 3
        assert s.order == [0, 1, 2]
        assert s.rotations == {}
        assert page_widths(committed) == [601, 602, 600]
        assert page_rotations(committed) == [90, 0, 0]

    def test_resets_selection_and_clamps_page(self):
        s = ingest(build_pdf(4))
        s.current_page = 4
        delete(s, [0])
        select(s, 1)
        apply_content_edit(s, _noop)
        assert s.selection == set()
        assert s.current_page == 3

    def test_chained_edits_see_previous_commit(self):
        s = ingest(build_pdf(3))
        reorder(s, 2, 0)
        apply_content_edit(s, TextOverlay(1, "first", 10, 10))
        rotate(s, [0], 90)
        apply_content_edit(s, TextOverlay(1, "second", 10, 40))
        data = s.snapshot.data
        assert page_widths(data) == [602, 600, 601]
        assert page_rotations(data) == [90, 0, 0]

    def test_mutator_page_changes_are_committed(self):
        def drop_last(pdf, resources):
            del pdf.pages[-1]

        s = ingest(build_pdf(3))
        apply_content_edit(s, drop_last)
        assert s.snapshot.page_count == 2
        assert s.order == [0, 1]

    def test_failure_leaves_session_untouched(self):
        def boom(pdf, resources):
            raise RuntimeError("kaboom")

        s = ingest(build_pdf(3))
        reorder(s, 0, 1)
        rotate(s, [2], 90)
        before = s.snapshot

        with pytest.raises(ContentEditError) as exc_info:
            apply_content_edit(s, boom)

        assert exc_info.value.operation == "boom"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert s.snapshot is before
        assert s.order == [1, 0, 2]
        assert s.rotations == {2: 90}

    def test_pikepdf_error_becomes_codec_error(self):
        def broken(pdf, resources):
            raise pikepdf.PdfError("bad object")

        s = ingest(build_pdf(2))
        with pytest.raises(CodecError):
            apply_content_edit(s, broken)

    def test_validation_runs_before_rebuild(self, monkeypatch):
        from pdfstudio.services import edit_chain

        def _fail(session):
            raise AssertionError("rebuild must not run")

        monkeypatch.setattr(edit_chain, "rebuild_session", _fail)
        s = ingest(build_pdf(2))
        with pytest.raises(ValidationError):
            apply_content_edit(s, TextOverlay(3, "too far"))

    def test_validation_error_from_mutator_passes_through(self):
        def picky(pdf, resources):
            raise ValidationError("x", reason="nope")

        s = ingest(build_pdf(2))
        with pytest.raises(ValidationError):
            apply_content_edit(s, picky)
