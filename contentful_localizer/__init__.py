"""Contentful Localizer - Sync translatable Contentful texts with Excel workbooks."""

__version__ = "1.0.0"
__description__ = "Export Contentful entry texts to Excel for offline translation and import the translations back."

from .exporter import LabelExporter
from .importer import LabelImporter
from .cli import main

__all__ = ["LabelExporter", "LabelImporter", "main"]
