"""Print-ready document export."""

from .pdf_export import export_pdf, export_pdf_file, export_filename

__all__ = [
    'export_pdf',
    'export_pdf_file',
    'export_filename'
]
