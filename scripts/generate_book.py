#!/usr/bin/env python3
"""
Generate a printable coloring book from the command line.

This script:
1. Asks Gemini for scene descriptions for the theme
2. Renders each scene as black-and-white line art with Imagen
3. Writes the coloring book PDF to the output directory

Usage:
    python scripts/generate_book.py --theme "Space Dinosaurs"
    python scripts/generate_book.py --theme "Floral Patterns" --pages 5 --output output/books
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dreamcolor.coloring import GenerationSession, PageGenerationPipeline
from dreamcolor.config import get_page_count, get_max_concurrent_images
from dreamcolor.export import export_pdf_file
from dreamcolor.logging_config import setup_logging
from dreamcolor.util.gemini import configure_gemini

logger = setup_logging("generate_book")


async def log_progress(session: GenerationSession) -> None:
    """Log page statuses as the pipeline publishes them."""
    statuses = ", ".join(f"{page.id}:{page.status.value}" for page in session.pages)
    logger.debug(f"[{session.current_step.name}] {statuses}")


async def build_book(theme: str, pages: int, max_concurrent: int, output_dir: Path) -> int:
    """
    Run the pipeline and write the PDF.

    Returns:
        Process exit code (0 on success)
    """
    pipeline = PageGenerationPipeline(
        configure_gemini(),
        page_count=pages,
        max_concurrent=max_concurrent,
        on_update=log_progress
    )
    session = await pipeline.generate(GenerationSession(), theme)

    if session.error:
        logger.error(session.error)
        return 1

    logger.info(f"Completed {session.completed_count}/{len(session.pages)} pages")
    pdf_path = export_pdf_file(session.theme, session.pages, output_dir)
    logger.info(f"Coloring book written to {pdf_path}")
    return 0 if session.completed_count else 2


def positive_int(value: str) -> int:
    """argparse type accepting integers >= 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a whole number, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate an AI coloring book PDF")
    parser.add_argument("--theme", required=True, help="Book theme, e.g. 'Space Dinosaurs'")
    parser.add_argument("--pages", type=positive_int, default=None, help="Number of pages (default: DREAMCOLOR_PAGE_COUNT or 3)")
    parser.add_argument("--max-concurrent", type=positive_int, default=None, help="Parallel image requests (default: 1)")
    parser.add_argument("--output", type=Path, default=Path("output"), help="Output directory")
    parser.add_argument("--verbose", action="store_true", help="Log every page status change")
    return parser


def main() -> int:
    args = build_parser().parse_args()

    if args.verbose:
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            handler.setLevel(logging.DEBUG)

    setup_logging("dreamcolor", level=logging.DEBUG if args.verbose else logging.INFO)
    args.output.mkdir(parents=True, exist_ok=True)

    return asyncio.run(build_book(
        args.theme,
        args.pages if args.pages is not None else get_page_count(),
        args.max_concurrent if args.max_concurrent is not None else get_max_concurrent_images(),
        args.output
    ))


if __name__ == "__main__":
    sys.exit(main())
