"""Tests for pdf_operations module (merge, split, file-level services)."""

import os
import tempfile

import pytest
from conftest import build_pdf, page_rotations, page_widths

from pdfstudio.editor import delete, ingest, reorder, rotate
from pdfstudio.services import pdf_operations
from pdfstudio.services.pdf_operations import (
    ErrorCode,
    OperationResult,
    PDFInfo,
    export_session,
    extract_range,
    get_pdf_info,
    merge_documents,
    merge_pdfs,
    read_pdf_file,
    split_range,
    split_session,
)
from pdfstudio.utils.exceptions import (
    FileTooLargeError,
    InsufficientInputsError,
    InvalidRangeError,
    SourceUnreadableError,
    ValidationError,
)


def _create_test_pdf(path: str, num_pages: int = 3, base_width: int = 600) -> str:
    """Write a test PDF with the given number of pages."""
    with open(path, "wb") as f:
        f.write(build_pdf(num_pages, base_width=base_width))
    return path


class TestMergeDocuments:
    def test_merge_order(self):
        a = build_pdf(2, base_width=600)
        b = build_pdf(3, base_width=700)
        merged = merge_documents([a, b])
        assert page_widths(merged) == [600, 601, 700, 701, 702]

    def test_merge_three(self):
        merged = merge_documents(
            [build_pdf(1, base_width=300), build_pdf(1, base_width=400), build_pdf(2)]
        )
        assert page_widths(merged) == [300, 400, 600, 601]

    def test_merge_keeps_rotation(self):
        a = build_pdf(1, rotations={0: 90})
        b = build_pdf(1, inherited_rotation=270)
        assert page_rotations(merge_documents([a, b])) == [90, 270]

    @pytest.mark.parametrize("count", [0, 1])
    def test_insufficient_inputs(self, count):
        with pytest.raises(InsufficientInputsError):
            merge_documents([build_pdf(2)] * count)

    def test_unreadable_source(self):
        with pytest.raises(SourceUnreadableError):
            merge_documents([build_pdf(2), b"garbage"])


class TestExtractRange:
    def test_single_page(self):
        assert page_widths(extract_range(build_pdf(5), 1, 1)) == [600]

    def test_whole_document(self):
        assert page_widths(extract_range(build_pdf(5), 1, 5)) == [600, 601, 602, 603, 604]

    def test_middle(self):
        assert page_widths(extract_range(build_pdf(5), 2, 4)) == [601, 602, 603]

    @pytest.mark.parametrize("start,end", [(3, 2), (0, 1), (1, 6), (6, 6)])
    def test_invalid_range(self, start, end):
        with pytest.raises(InvalidRangeError) as exc_info:
            extract_range(build_pdf(5), start, end)
        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.page_count == 5

    def test_unreadable_source(self):
        with pytest.raises(SourceUnreadableError):
            extract_range(b"garbage", 1, 1)


class TestSplitSession:
    def test_uses_pending_edits(self):
        s = ingest(build_pdf(4))
        reorder(s, 3, 0)
        rotate(s, [0], 90)
        delete(s, [1])
        data = split_session(s, 1, 2)
        assert page_widths(data) == [603, 601]
        assert page_rotations(data) == [90, 0]
        assert s.order == [3, 1, 2]

    def test_range_checked_against_visible_pages(self):
        s = ingest(build_pdf(4))
        delete(s, [0])
        with pytest.raises(InvalidRangeError):
            split_session(s, 1, 4)


class TestGetPdfInfo:
    def test_basic_info(self):
        with tempfile.NamedTemporaryFile(suffix=".pdf", delete=False) as f:
            path = f.name
        try:
            _create_test_pdf(path, 5)
            info = get_pdf_info(path)
            assert isinstance(info, PDFInfo)
            assert info.page_count == 5
            assert info.file_size_bytes > 0
            assert info.path == path
            assert info.encrypted is False
        finally:
            os.unlink(path)

    def test_nonexistent_file_raises(self):
        with pytest.raises(FileNotFoundError):
            get_pdf_info("/nonexistent/file.pdf")


class TestReadPdfFile:
    def test_size_limit(self):
        with tempfile.TemporaryDirectory() as d:
            path = _create_test_pdf(os.path.join(d, "in.pdf"), 2)
            size = os.path.getsize(path)
            assert len(read_pdf_file(path, max_bytes=size)) == size
            with pytest.raises(FileTooLargeError):
                read_pdf_file(path, max_bytes=size - 1)


class TestMergePdfs:
    def test_merge_two_files(self):
        with tempfile.TemporaryDirectory() as d:
            a = _create_test_pdf(os.path.join(d, "a.pdf"), 2)
            b = _create_test_pdf(os.path.join(d, "b.pdf"), 3, base_width=700)
            out = os.path.join(d, "merged.pdf")
            result = merge_pdfs([a, b], out)
            assert isinstance(result, OperationResult)
            assert result.success
            assert result.pages_affected == 5
            assert result.output_path == out
            assert get_pdf_info(out).page_count == 5

    def test_single_file_fails(self):
        with tempfile.TemporaryDirectory() as d:
            a = _create_test_pdf(os.path.join(d, "a.pdf"), 2)
            result = merge_pdfs([a], os.path.join(d, "merged.pdf"))
            assert not result.success
            assert result.error_code == ErrorCode.INSUFFICIENT_INPUTS

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as d:
            a = _create_test_pdf(os.path.join(d, "a.pdf"), 2)
            result = merge_pdfs([a, os.path.join(d, "nope.pdf")], os.path.join(d, "m.pdf"))
            assert not result.success
            assert result.error_code == ErrorCode.FILE_NOT_FOUND
            assert not os.path.exists(os.path.join(d, "m.pdf"))

    def test_corrupt_file(self):
        with tempfile.TemporaryDirectory() as d:
            a = _create_test_pdf(os.path.join(d, "a.pdf"), 2)
            bad = os.path.join(d, "bad.pdf")
            with open(bad, "wb") as f:
                f.write(b"%PDF-1.4 broken")
            result = merge_pdfs([a, bad], os.path.join(d, "m.pdf"))
            assert result.error_code == ErrorCode.CORRUPT_PDF


class TestSplitRange:
    def test_extract(self):
        with tempfile.TemporaryDirectory() as d:
            src = _create_test_pdf(os.path.join(d, "in.pdf"), 5)
            out = os.path.join(d, "sub", "part.pdf")
            result = split_range(src, out, 2, 3)
            assert result.success
            assert result.pages_affected == 2
            assert get_pdf_info(out).page_count == 2

    def test_invalid_range(self):
        with tempfile.TemporaryDirectory() as d:
            src = _create_test_pdf(os.path.join(d, "in.pdf"), 5)
            result = split_range(src, os.path.join(d, "part.pdf"), 3, 2)
            assert not result.success
            assert result.error_code == ErrorCode.INVALID_RANGE
            assert "between 1 and 5" in result.message


class TestExportSession:
    def test_export(self):
        with tempfile.TemporaryDirectory() as d:
            s = ingest(build_pdf(3))
            reorder(s, 2, 0)
            out = os.path.join(d, "edited.pdf")
            result = export_session(s, out)
            assert result.success
            assert result.pages_affected == 3
            with open(out, "rb") as f:
                assert page_widths(f.read()) == [602, 600, 601]
            assert s.order == [2, 0, 1]

    def test_corrupted_session(self):
        with tempfile.TemporaryDirectory() as d:
            s = ingest(build_pdf(3))
            s.order = [0, 0]
            result = export_session(s, os.path.join(d, "edited.pdf"))
            assert not result.success
            assert result.error_code == ErrorCode.STATE_CORRUPTION
            assert s.corrupted

    def test_untouched_session_written_as_is(self, monkeypatch):
        def _no_rebuild(session):
            raise AssertionError("rebuild must not run")

        monkeypatch.setattr(pdf_operations, "rebuild_session", _no_rebuild)
        source = build_pdf(3)
        with tempfile.TemporaryDirectory() as d:
            s = ingest(source)
            out = os.path.join(d, "edited.pdf")
            assert export_session(s, out).success
            with open(out, "rb") as f:
                assert f.read() == source

    def test_untouched_corrupted_session_refused(self):
        with tempfile.TemporaryDirectory() as d:
            s = ingest(build_pdf(2))
            s.corrupted = True
            out = os.path.join(d, "edited.pdf")
            result = export_session(s, out)
            assert result.error_code == ErrorCode.STATE_CORRUPTION
            assert not os.path.exists(out)
