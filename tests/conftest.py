"""Pytest configuration for pdfstudio tests.

Test documents are built with pikepdf. Every page gets a distinct MediaBox
width (``base_width + index``) so tests can tell which source page ended up
where after a rebuild, merge or split.
"""

import io

import pikepdf
import pytest

from pdfstudio.utils import config_manager


def build_pdf(
    num_pages: int = 4,
    *,
    base_width: int = 600,
    rotations: dict[int, int] | None = None,
    inherited_rotation: int | None = None,
) -> bytes:
    """Create PDF bytes with ``num_pages`` identifiable pages.

    Args:
        num_pages: Number of pages
        base_width: MediaBox width of page 0; page i is ``base_width + i`` wide
        rotations: Optional /Rotate per page index, set on the page itself
        inherited_rotation: Optional /Rotate set on the page tree root
    """
    rotations = rotations or {}
    pdf = pikepdf.Pdf.new()
    for i in range(num_pages):
        page = pikepdf.Page(
            pikepdf.Dictionary(
                Type=pikepdf.Name.Page,
                MediaBox=[0, 0, base_width + i, 792],
                Contents=pdf.make_stream(f"BT /F1 12 Tf 100 700 Td (Page {i + 1}) Tj ET".encode()),
            )
        )
        pdf.pages.append(page)
        if i in rotations:
            pdf.pages[-1].Rotate = rotations[i]
    if inherited_rotation is not None:
        pdf.Root.Pages.Rotate = inherited_rotation

    buffer = io.BytesIO()
    pdf.save(buffer)
    pdf.close()
    return buffer.getvalue()


def page_widths(data: bytes) -> list[int]:
    """MediaBox width of every page, in document order."""
    with pikepdf.open(io.BytesIO(data)) as pdf:
        return [int(page.mediabox[2]) for page in pdf.pages]


def page_rotations(data: bytes) -> list[int]:
    """/Rotate stored on every page (0 when absent)."""
    with pikepdf.open(io.BytesIO(data)) as pdf:
        return [int(page.obj.get("/Rotate", 0)) for page in pdf.pages]


@pytest.fixture
def make_pdf():
    """Factory fixture for test PDF bytes."""
    return build_pdf


@pytest.fixture
def four_page_pdf() -> bytes:
    return build_pdf(4)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the global ConfigManager at a throwaway settings file."""
    manager = config_manager.ConfigManager(config_path=str(tmp_path / "config" / "settings.json"))
    monkeypatch.setattr(config_manager, "_config_manager", manager)
    return manager
