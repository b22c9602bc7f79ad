#!/usr/bin/env python3
"""
PDF Studio - Entry point for python -m pdfstudio

This module allows the package to be run as a module:
    python -m pdfstudio
"""

import sys

from pdfstudio import main

if __name__ == "__main__":
    sys.exit(main())
