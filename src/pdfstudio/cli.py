#!/usr/bin/env python3
"""
PDF Studio CLI - restructure and annotate PDF files from the terminal.

Usage:
    python -m pdfstudio.cli <command> [options]

Commands:
    info        Show PDF metadata and page count
    merge       Merge multiple PDFs into one
    split       Extract a page range to a new PDF
    edit        Reorder, rotate, delete pages and stamp text/images/signatures

Examples:
    # Info
    pdfstudio-cli info document.pdf

    # Merge
    pdfstudio-cli merge a.pdf b.pdf c.pdf -o merged.pdf

    # Split
    pdfstudio-cli split input.pdf --from 3 --to 7 -o part.pdf

    # Edit (moves, then rotations, then deletions, then stamps)
    pdfstudio-cli edit input.pdf -o out.pdf --move 1:3 --rotate-right 2,4 --delete 5
    pdfstudio-cli edit input.pdf -o out.pdf --text "1:72:72:Approved" --text-color "#cc0000"
    pdfstudio-cli edit input.pdf -o out.pdf --signature 2:400:700:sig.png
    pdfstudio-cli edit input.pdf -o out.pdf --signature 2:sig.png
"""

import argparse
import logging
import sys
from pathlib import Path

from pdfstudio.config import (
    APP_DESCRIPTION,
    APP_NAME,
    APP_VERSION,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    SPLIT_NAME_TEMPLATE,
)
from pdfstudio.utils.exceptions import PdfStudioError
from pdfstudio.utils.i18n import _

# ---------------------------------------------------------------------------
# Argument value parsers
# ---------------------------------------------------------------------------


def _parse_page_list(text: str) -> list[int]:
    """Parse a page specification string into a sorted list of page numbers.

    Supports: "3", "1-5", "1,3,7", "1-3,7,10-12"

    Args:
        text: Page specification string.

    Returns:
        Sorted list of 1-indexed page numbers.
    """
    pages: set[int] = set()
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            if "-" in part:
                start_s, end_s = part.split("-", 1)
                s, e = int(start_s.strip()), int(end_s.strip())
                pages.update(range(s, e + 1))
            else:
                pages.add(int(part))
        except ValueError:
            raise ValueError(
                f"Invalid page specification '{part}'. "
                "Use numbers and ranges like '1-5' or '1,3,7'."
            ) from None
    return sorted(p for p in pages if p >= 1)


def _parse_move(text: str) -> tuple[int, int]:
    """Parse "FROM:TO" (1-indexed page positions)."""
    try:
        src, dst = text.split(":", 1)
        return int(src), int(dst)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid move '{text}'. Use FROM:TO, e.g. '1:3'."
        ) from None


def _parse_placement(text: str) -> tuple[int, float, float, str]:
    """Parse "PAGE:X:Y:VALUE"; VALUE may itself contain colons."""
    try:
        page_s, x_s, y_s, value = text.split(":", 3)
        return int(page_s), float(x_s), float(y_s), value
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid placement '{text}'. Use PAGE:X:Y:VALUE, e.g. '1:72:72:Hello'."
        ) from None


def _parse_signature(text: str) -> tuple[int, float | None, float | None, str]:
    """Parse "PAGE:X:Y:PATH" or "PAGE:PATH" (position then comes from config)."""
    try:
        return _parse_placement(text)
    except argparse.ArgumentTypeError:
        pass
    try:
        page_s, path = text.split(":", 1)
        return int(page_s), None, None, path
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid signature '{text}'. Use PAGE:X:Y:PATH or PAGE:PATH."
        ) from None


# ---------------------------------------------------------------------------
# Argument parser construction
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with subcommands."""
    p = argparse.ArgumentParser(
        prog="pdfstudio-cli",
        description=f"{APP_NAME} - {APP_DESCRIPTION}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-v", "--verbose", action="store_true", help=_("Verbose logging (DEBUG)"))
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    sub = p.add_subparsers(dest="command", help=_("Available commands"))

    # --- info ---
    info_p = sub.add_parser("info", help=_("Show PDF info"))
    info_p.add_argument("input", type=Path, help=_("Input PDF file"))

    # --- merge ---
    merge_p = sub.add_parser("merge", help=_("Merge PDFs into one"))
    merge_p.add_argument("inputs", type=Path, nargs="+", help=_("Input PDF files (in order)"))
    merge_p.add_argument(
        "-o", "--output", type=Path, default=None, help=_("Output PDF file")
    )

    # --- split ---
    split_p = sub.add_parser("split", help=_("Extract a page range to a new PDF"))
    split_p.add_argument("input", type=Path, help=_("Input PDF file"))
    split_p.add_argument(
        "--from", dest="start", type=int, required=True, metavar="N", help=_("First page")
    )
    split_p.add_argument(
        "--to", dest="end", type=int, required=True, metavar="M", help=_("Last page")
    )
    split_p.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help=_("Output PDF file (default: pages_N-M.pdf)"),
    )

    # --- edit ---
    edit_p = sub.add_parser("edit", help=_("Edit pages and stamp content"))
    edit_p.add_argument("input", type=Path, help=_("Input PDF file"))
    edit_p.add_argument("-o", "--output", type=Path, default=None, help=_("Output PDF file"))

    pages_g = edit_p.add_argument_group(_("Page operations"))
    pages_g.add_argument(
        "--move",
        type=_parse_move,
        action="append",
        default=[],
        metavar="FROM:TO",
        help=_("Move the page at FROM to TO (repeatable)"),
    )
    pages_g.add_argument(
        "--rotate-left", type=str, default=None, metavar="PAGES", help=_("Rotate 90° left")
    )
    pages_g.add_argument(
        "--rotate-right", type=str, default=None, metavar="PAGES", help=_("Rotate 90° right")
    )
    pages_g.add_argument(
        "--delete", type=str, default=None, metavar="PAGES", help=_("Pages to delete")
    )

    content_g = edit_p.add_argument_group(_("Content"))
    content_g.add_argument(
        "--text",
        type=_parse_placement,
        action="append",
        default=[],
        metavar="PAGE:X:Y:TEXT",
        help=_("Add text; X/Y are points from the top-left corner (repeatable)"),
    )
    content_g.add_argument("--text-size", type=float, default=None, help=_("Font size"))
    content_g.add_argument(
        "--text-color", type=str, default=None, help=_("Text colour as #rrggbb")
    )
    content_g.add_argument(
        "--image",
        type=_parse_placement,
        action="append",
        default=[],
        metavar="PAGE:X:Y:PATH",
        help=_("Add a PNG or JPEG image (repeatable)"),
    )
    content_g.add_argument(
        "--signature",
        type=_parse_signature,
        action="append",
        default=[],
        metavar="PAGE[:X:Y]:PATH",
        help=_("Add a signature PNG; X/Y default to the configured position (repeatable)"),
    )

    return p


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_info(args, _logger) -> int:
    """Handle the 'info' command."""
    from pdfstudio.services.pdf_operations import get_pdf_info

    try:
        info = get_pdf_info(str(args.input))
    except (OSError, PdfStudioError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"File:       {info.path}")
    print(f"Pages:      {info.page_count}")
    print(f"Size:       {info.file_size_mb:.2f} MB ({info.file_size_bytes:,} bytes)")
    print(f"Version:    PDF {info.pdf_version}")
    print(f"Encrypted:  {'Yes' if info.encrypted else 'No'}")
    return 0


def _cmd_merge(args, logger) -> int:
    """Handle the 'merge' command."""
    from pdfstudio.services.pdf_operations import merge_pdfs
    from pdfstudio.utils.config_manager import get_config_manager

    for p in args.inputs:
        if not p.exists():
            print(f"Error: {p} not found", file=sys.stderr)
            return 1

    config = get_config_manager()
    output = args.output or Path(config.get("output.merged_name"))

    result = merge_pdfs(
        [str(p) for p in args.inputs], str(output), max_bytes=config.max_file_bytes
    )
    if result.success:
        print(f"Merged: {result.message} → {output}")
        return 0
    print(f"Error: {result.message}", file=sys.stderr)
    return 1


def _cmd_split(args, logger) -> int:
    """Handle the 'split' command."""
    from pdfstudio.services.pdf_operations import split_range
    from pdfstudio.utils.config_manager import get_config_manager

    output = args.output or Path(SPLIT_NAME_TEMPLATE.format(start=args.start, end=args.end))
    result = split_range(
        args.input,
        output,
        args.start,
        args.end,
        max_bytes=get_config_manager().max_file_bytes,
    )
    if result.success:
        print(f"Split: {result.message} → {output}")
        return 0
    print(f"Error: {result.message}", file=sys.stderr)
    return 1


def _build_overlays(args, config) -> list:
    """Turn --text/--image/--signature options into overlay mutators."""
    from pdfstudio.services.overlays import ImageOverlay, SignatureOverlay, TextOverlay

    overlays: list = []
    for page, x, y, text in args.text:
        overlays.append(
            TextOverlay(
                page,
                text,
                x,
                y,
                size=args.text_size or config.get("text.size"),
                color=args.text_color or config.get("text.color"),
            )
        )
    for page, x, y, path in args.image:
        overlays.append(
            ImageOverlay(
                page,
                Path(path).read_bytes(),
                x,
                y,
                width=config.get("image.width"),
                height=config.get("image.height"),
            )
        )
    for page, x, y, path in args.signature:
        overlays.append(
            SignatureOverlay(
                page,
                Path(path).read_bytes(),
                config.get("signature.x") if x is None else x,
                config.get("signature.y") if y is None else y,
                width=config.get("signature.width"),
                height=config.get("signature.height"),
            )
        )
    return overlays


def _cmd_edit(args, logger) -> int:
    """Handle the 'edit' command.

    Page numbers always refer to the document as it stands when that step
    runs, so a --delete after a --move uses the moved positions.
    """
    from pdfstudio.editor import delete, ingest, reorder, rotate
    from pdfstudio.services.edit_chain import apply_content_edit
    from pdfstudio.services.pdf_operations import export_session, read_pdf_file
    from pdfstudio.utils.config_manager import get_config_manager

    config = get_config_manager()
    output = args.output or Path(config.get("output.edited_name"))

    try:
        session = ingest(read_pdf_file(args.input, config.max_file_bytes))

        for src, dst in args.move:
            reorder(session, src - 1, dst - 1)
        if args.rotate_left:
            rotate(session, [p - 1 for p in _parse_page_list(args.rotate_left)], -90)
        if args.rotate_right:
            rotate(session, [p - 1 for p in _parse_page_list(args.rotate_right)], 90)
        if args.delete:
            delete(session, [p - 1 for p in _parse_page_list(args.delete)])

        for overlay in _build_overlays(args, config):
            apply_content_edit(session, overlay)
    except (OSError, ValueError, PdfStudioError) as e:
        logger.debug("Edit failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = export_session(session, output)
    if result.success:
        print(f"Saved: {result.message} → {output}")
        return 0
    print(f"Error: {result.message}", file=sys.stderr)
    return 1


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, force=True)
    logger = logging.getLogger("pdfstudio.cli")

    # Validate input file existence (merge checks its own 'inputs')
    if hasattr(args, "input") and args.input and not args.input.exists():
        print(f"Error: {args.input} not found", file=sys.stderr)
        return 1

    handlers = {
        "info": _cmd_info,
        "merge": _cmd_merge,
        "split": _cmd_split,
        "edit": _cmd_edit,
    }

    handler = handlers.get(args.command)
    if handler:
        return handler(args, logger)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
