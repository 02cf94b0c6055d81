"""
Report export.

- csv_export: multi-section CSV documents with a UTF-8 BOM
- pdf_export: HTML report documents rendered to PDF with WeasyPrint
"""

from .csv_export import CSV_CONTENT_TYPE, build_export_filename, render_csv
from .pdf_export import PDF_CONTENT_TYPE, PdfRenderError, render_pdf

__all__ = [
    "CSV_CONTENT_TYPE",
    "PDF_CONTENT_TYPE",
    "PdfRenderError",
    "build_export_filename",
    "render_csv",
    "render_pdf",
]
