"""
PDF Studio - Python package for restructuring PDF documents

Reorder, rotate and delete pages, stamp text, images and signatures,
merge documents and extract page ranges. Pending structural edits are
kept in an EditSession and materialized into new PDF bytes on demand.
"""

import sys

__version__ = "3.0.0"
__author__ = "PDF Studio Team"
__license__ = "GPL-3.0"


def main() -> int:
    """Main entry point for the application.

    Returns:
        The application exit code.
    """
    from pdfstudio.cli import main as cli_main

    return cli_main()


__all__ = ["main", "__version__", "__author__", "__license__"]


if __name__ == "__main__":
    sys.exit(main())
