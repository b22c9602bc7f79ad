"""
PDF Studio - Content Overlays

Mutators for ``apply_content_edit``: text, image and signature stamps.

Each overlay is drawn with reportlab on a blank page the size of the
target page's MediaBox, then stamped on top of the target with
``pikepdf.Page.add_overlay``. Placement is given with a top-left origin (as
the user sees the page) and converted here to PDF's bottom-left origin.
"""

import io
import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import ClassVar

import pikepdf
from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from pdfstudio.constants import (
    DEFAULT_IMAGE_HEIGHT,
    DEFAULT_IMAGE_WIDTH,
    DEFAULT_SIGNATURE_HEIGHT,
    DEFAULT_SIGNATURE_WIDTH,
    DEFAULT_SIGNATURE_X,
    DEFAULT_SIGNATURE_Y,
    DEFAULT_TEXT_COLOR,
    DEFAULT_TEXT_SIZE,
    MIN_TEXT_SIZE,
    OVERLAY_FONT,
    OVERLAY_FONT_ENCODING,
)
from pdfstudio.utils.exceptions import ValidationError
from pdfstudio.utils.format_utils import hex_to_rgb

logger = logging.getLogger(__name__)

_EMBEDDABLE_FORMATS = ("PNG", "JPEG")


def _open_image(data: bytes, field_name: str, formats: tuple[str, ...]) -> Image.Image:
    """Decode image bytes with Pillow and check the container format."""
    if not data:
        raise ValidationError(field_name, reason="no image data")
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise ValidationError(field_name, reason=f"unreadable image: {e}") from e
    if img.format not in formats:
        raise ValidationError(
            field_name, img.format, f"supported formats are {', '.join(formats)}"
        )
    return img


def _is_blank(img: Image.Image) -> bool:
    """True when every RGBA channel of every pixel is zero."""
    return all(high == 0 for _low, high in img.convert("RGBA").getextrema())


class PageOverlay:
    """Base class: validate the target page, render, stamp."""

    operation: ClassVar[str] = "overlay"
    page_number: int

    def validate(self, page_count: int) -> None:
        """Reject a page number outside ``1..page_count``."""
        if isinstance(self.page_number, bool) or not isinstance(self.page_number, int):
            raise ValidationError("page_number", self.page_number, "page must be an integer")
        if not 1 <= self.page_number <= page_count:
            raise ValidationError(
                "page_number",
                self.page_number,
                f"page must be between 1 and {page_count}",
            )

    def draw(self, c: canvas.Canvas, page_height: float) -> None:
        raise NotImplementedError

    def render(self, width: float, height: float) -> bytes:
        """Render this overlay alone on a transparent page of the given size."""
        buffer = io.BytesIO()
        c = canvas.Canvas(buffer, pagesize=(width, height))
        self.draw(c, height)
        c.showPage()
        c.save()
        return buffer.getvalue()

    def __call__(self, pdf: pikepdf.Pdf, resources: ExitStack) -> None:
        self.validate(len(pdf.pages))
        page = pdf.pages[self.page_number - 1]

        x0, y0, x1, y1 = (float(v) for v in page.mediabox)
        width, height = x1 - x0, y1 - y0

        stamp_pdf = resources.enter_context(pikepdf.open(io.BytesIO(self.render(width, height))))
        stamp = pdf.copy_foreign(stamp_pdf.pages[0].as_form_xobject())
        page.add_overlay(stamp, pikepdf.Rectangle(x0, y0, x1, y1))
        logger.info("Applied %s on page %d", self.operation, self.page_number)


@dataclass
class TextOverlay(PageOverlay):
    """Draw a line of Helvetica text.

    Helvetica is a standard font with WinAnsi encoding, so only text that
    fits cp1252 can be drawn.

    ``y`` is the distance from the top of the page to the top of the text.
    """

    operation: ClassVar[str] = "add text"

    page_number: int
    text: str
    x: float = 0.0
    y: float = 0.0
    size: float = DEFAULT_TEXT_SIZE
    color: str = DEFAULT_TEXT_COLOR

    def __post_init__(self) -> None:
        self.text = self.text.strip()
        self.size = max(MIN_TEXT_SIZE, float(self.size or DEFAULT_TEXT_SIZE))

    def validate(self, page_count: int) -> None:
        if not self.text:
            raise ValidationError("text", reason="enter some text first")
        try:
            self.text.encode(OVERLAY_FONT_ENCODING)
        except UnicodeEncodeError as e:
            raise ValidationError(
                "text",
                self.text[e.start : e.end],
                f"characters not available in {OVERLAY_FONT}",
            ) from e
        super().validate(page_count)

    def draw(self, c: canvas.Canvas, page_height: float) -> None:
        c.setFont(OVERLAY_FONT, self.size)
        c.setFillColorRGB(*hex_to_rgb(self.color))
        c.drawString(self.x, page_height - self.y - self.size, self.text)


@dataclass
class ImageOverlay(PageOverlay):
    """Embed a PNG or JPEG image in a ``width`` x ``height`` box."""

    operation: ClassVar[str] = "add image"
    formats: ClassVar[tuple[str, ...]] = _EMBEDDABLE_FORMATS

    page_number: int
    image_data: bytes = field(repr=False)
    x: float = 0.0
    y: float = 0.0
    width: float = DEFAULT_IMAGE_WIDTH
    height: float = DEFAULT_IMAGE_HEIGHT

    def validate(self, page_count: int) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValidationError(
                "size", (self.width, self.height), "width and height must be positive"
            )
        self._decoded()
        super().validate(page_count)

    def _decoded(self) -> Image.Image:
        return _open_image(self.image_data, "image", self.formats)

    def draw(self, c: canvas.Canvas, page_height: float) -> None:
        c.drawImage(
            ImageReader(self._decoded()),
            self.x,
            page_height - self.y - self.height,
            width=self.width,
            height=self.height,
            mask="auto",
        )


@dataclass
class SignatureOverlay(ImageOverlay):
    """Embed a hand-drawn signature captured as a transparent PNG."""

    operation: ClassVar[str] = "add signature"
    formats: ClassVar[tuple[str, ...]] = ("PNG",)

    page_number: int
    image_data: bytes = field(repr=False)
    x: float = DEFAULT_SIGNATURE_X
    y: float = DEFAULT_SIGNATURE_Y
    width: float = DEFAULT_SIGNATURE_WIDTH
    height: float = DEFAULT_SIGNATURE_HEIGHT

    def _decoded(self) -> Image.Image:
        img = _open_image(self.image_data, "signature", self.formats)
        if _is_blank(img):
            raise ValidationError("signature", reason="draw a signature first")
        return img
