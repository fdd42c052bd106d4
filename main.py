#!/usr/bin/env python3
"""
Contentful Localizer - Main entry point

Exports translatable Contentful texts to an Excel workbook and imports the
translated workbook back into the entries.
"""

from contentful_localizer.cli import main

if __name__ == "__main__":
    main()
