"""Build a print-ready coloring book PDF with PyMuPDF."""

import html
import logging
import re
import unicodedata
from pathlib import Path
from typing import Optional, Sequence, Union

import fitz  # PyMuPDF

from ..coloring.generate_artwork import decode_data_uri
from ..coloring.models import ColoringPage, PageStatus
from ..exceptions import ExportError

logger = logging.getLogger(__name__)

PAPER_SIZE = "a4"
MARGIN = 36  # points (0.5 inch)
FOOTER_HEIGHT = 24
FAILED_PAGE_TEXT = "Generation Failed"


def export_filename(theme: str, ascii_only: bool = False) -> str:
    """
    File name for a downloaded book, e.g. space-dinosaurs-coloring-book.pdf.

    With ascii_only, accents are folded and other non-ASCII characters
    dropped, so the name is safe in a plain Content-Disposition filename.
    """
    text = theme.lower()
    flags = 0
    if ascii_only:
        text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
        flags = re.ASCII
    slug = re.sub(r'[^\w\s-]', '', text, flags=flags)
    slug = re.sub(r'[-\s_]+', '-', slug).strip('-')
    return f"{slug or 'my'}-coloring-book.pdf"


def _insert_text(
    page: fitz.Page,
    rect: fitz.Rect,
    text: str,
    font_size: int,
    bold: bool = False,
    color: Optional[str] = None
) -> None:
    """
    Write centered text into rect, shrinking it until it fits.

    insert_htmlbox falls back to MuPDF's Noto fonts for characters the
    base font lacks, so CJK, Cyrillic and Greek themes render as written.

    Raises:
        ExportError: If the text cannot be fitted into rect
    """
    css = (
        f"* {{font-family: sans-serif; text-align: center; font-size: {font_size}px;"
        f" font-weight: {'bold' if bold else 'normal'}; color: {color or '#000000'};}}"
    )
    spare_height, _scale = page.insert_htmlbox(rect, html.escape(text), css=css, scale_low=0)
    if spare_height < 0:
        raise ExportError(f"Text does not fit on page {page.number + 1}: {text[:40]!r}")


def _add_cover(doc: fitz.Document, theme: str) -> None:
    width, height = fitz.paper_size(PAPER_SIZE)
    page = doc.new_page(width=width, height=height)

    border = fitz.Rect(MARGIN, MARGIN, width - MARGIN, height - MARGIN)
    page.draw_rect(border, color=(0, 0, 0), width=2)

    center_y = height / 2
    _insert_text(
        page,
        fitz.Rect(MARGIN, center_y - 160, width - MARGIN, center_y - 60),
        "Coloring Book",
        font_size=36,
        bold=True
    )
    _insert_text(
        page,
        fitz.Rect(MARGIN, center_y - 50, width - MARGIN, center_y - 10),
        "Theme",
        font_size=14,
        color="#666666"
    )
    # Long themes are scaled down to fit this box
    _insert_text(
        page,
        fitz.Rect(MARGIN * 2, center_y, width - MARGIN * 2, height - MARGIN * 3),
        theme,
        font_size=24,
        bold=True
    )


def _add_failed_page(page: fitz.Page) -> None:
    width, height = page.rect.width, page.rect.height
    _insert_text(
        page,
        fitz.Rect(MARGIN, height / 2 - 30, width - MARGIN, height / 2 + 30),
        FAILED_PAGE_TEXT,
        font_size=18,
        bold=True,
        color="#cc3333"
    )


def _add_coloring_page(doc: fitz.Document, coloring_page: ColoringPage, number: int) -> None:
    width, height = fitz.paper_size(PAPER_SIZE)
    page = doc.new_page(width=width, height=height)

    image_rect = fitz.Rect(MARGIN, MARGIN, width - MARGIN, height - MARGIN - FOOTER_HEIGHT)
    drawn = False
    if coloring_page.status == PageStatus.COMPLETED and coloring_page.image_url:
        try:
            page.insert_image(
                image_rect,
                stream=decode_data_uri(coloring_page.image_url),
                keep_proportion=True
            )
            drawn = True
        except Exception as e:
            logger.warning(f"Could not embed image for page {coloring_page.id}: {e}")

    if not drawn:
        _add_failed_page(page)

    _insert_text(
        page,
        fitz.Rect(MARGIN, height - MARGIN - FOOTER_HEIGHT, width - MARGIN, height - MARGIN),
        str(number),
        font_size=10
    )


def export_pdf(theme: str, pages: Sequence[ColoringPage]) -> bytes:
    """
    Build the coloring book PDF.

    The document holds a cover page carrying the theme, followed by one
    page per coloring page in order. Pages that did not complete are kept
    and marked "Generation Failed".

    Args:
        theme: Book theme, printed on the cover
        pages: Coloring pages of the session

    Returns:
        PDF file contents

    Raises:
        ExportError: If PyMuPDF cannot build the document
    """
    logger.info(f"Exporting PDF for '{theme}' with {len(pages)} pages")
    doc = fitz.open()
    try:
        _add_cover(doc, theme)
        for number, coloring_page in enumerate(pages, start=1):
            _add_coloring_page(doc, coloring_page, number)
        return doc.tobytes(garbage=3, deflate=True)
    except Exception as e:
        raise ExportError(f"Failed to build PDF: {e}") from e
    finally:
        doc.close()


def export_pdf_file(theme: str, pages: Sequence[ColoringPage], output_path: Union[str, Path]) -> Path:
    """
    Build the PDF and write it to output_path.

    If output_path is a directory, export_filename(theme) is used inside it.
    """
    output_path = Path(output_path)
    if output_path.is_dir():
        output_path = output_path / export_filename(theme)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(export_pdf(theme, pages))
    logger.info(f"Saved PDF to {output_path}")
    return output_path
