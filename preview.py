#!/usr/bin/env python3
"""
Redacted Screensaver Preview CLI

Renders PDF pages with random words covered by redaction bars, the way the
redacted screensaver would show them, and writes PNG previews plus the
bar layout.

Usage:
    python preview.py --input book.pdf --output ./preview/ --page 3
"""

import sys
import logging
from pathlib import Path
from datetime import datetime
from typing import Optional

import click
import fitz
from tqdm import tqdm

from redacted_screensaver.engine import RedactionLayoutEngine
from redacted_screensaver.exceptions import ConfigurationError
from redacted_screensaver.models import LayoutParams, PageContext, PageLayout
from redacted_screensaver.output_writer import write_layout_csv, write_layout_json
from redacted_screensaver.pdf_lookup import PdfPageHandle, PdfWordLookup, estimate_font_size
from redacted_screensaver.random_source import seed_default_source
from redacted_screensaver.page_renderer import render_page_to_image, save_image
from redacted_screensaver.render import ImageSurface


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)


def validate_input_file(ctx, param, value):
    """Validate that the input file exists and is a PDF."""
    path = Path(value)
    if not path.exists():
        raise click.BadParameter(f"Input file does not exist: {value}")
    if not path.is_file():
        raise click.BadParameter(f"Input path is not a file: {value}")
    if path.suffix.lower() != ".pdf":
        raise click.BadParameter(f"Input file is not a PDF: {value}")
    return path


def preview_page(
    doc: fitz.Document,
    page_num: int,
    doc_id: str,
    engine: RedactionLayoutEngine,
    lookup: PdfWordLookup,
    dpi: int,
    output_dir: Path
) -> PageLayout:
    """
    Lay out and paint redactions for one page, saving the preview image.

    Args:
        doc: Open PyMuPDF document
        page_num: Page number (1-indexed)
        doc_id: Document identifier used in cache keys and filenames
        engine: Layout engine shared across pages
        lookup: Word-lookup collaborator
        dpi: Render resolution
        output_dir: Directory for preview images

    Returns:
        PageLayout for the page
    """
    page = doc[page_num - 1]
    zoom = dpi / 72.0

    image = render_page_to_image(page, dpi)
    surface = ImageSurface(image)

    context = PageContext(
        document=PdfPageHandle(page, zoom),
        document_id=doc_id,
        page_id=page_num,
        width=surface.width,
        height=surface.height,
        font_size=estimate_font_size(page, zoom),
        rotation=page.rotation,
    )

    layout = engine.calculate_redactions(context, lookup)
    engine.paint(surface, layout)

    safe_doc_id = "".join(c if c.isalnum() or c in "._-" else "_" for c in doc_id)
    image_path = output_dir / f"{safe_doc_id}_p{page_num}_redacted.png"
    if not save_image(surface.image, image_path):
        logger.warning(f"Preview image for page {page_num} was not saved")
        layout.error = f"failed to save {image_path.name}"
    return layout


@click.command()
@click.option(
    "--input", "-i",
    "input_file",
    required=True,
    callback=validate_input_file,
    help="PDF file to preview"
)
@click.option(
    "--output", "-o",
    "output_dir",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory for previews (PNG images, layout.json, layout.csv)"
)
@click.option(
    "--page", "-p",
    "pages",
    multiple=True,
    type=int,
    help="Page number to preview (1-indexed, repeatable). Default: all pages"
)
@click.option(
    "--dpi",
    default=150,
    type=int,
    help="DPI for rendering pages. Default: 150"
)
@click.option(
    "--seed",
    default=None,
    type=int,
    envvar="REDACTED_SEED",
    help="Seed for the random source (reproducible previews)"
)
@click.option(
    "--redaction-chance",
    default=0.35,
    type=float,
    envvar="REDACTED_CHANCE",
    help="Chance that a scanned word starts a redacted phrase. Default: 0.35"
)
@click.option(
    "--min-redactions",
    default=5,
    type=int,
    envvar="REDACTED_MIN",
    help="Minimum redacted words per page. Default: 5"
)
@click.option(
    "--max-redactions",
    default=50,
    type=int,
    envvar="REDACTED_MAX",
    help="Maximum redacted words per page. Default: 50"
)
@click.option(
    "--merge-gap",
    default=20.0,
    type=float,
    envvar="REDACTED_MERGE_GAP",
    help="Max gap in pixels bridged by a single bar. Default: 20"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output"
)
def main(
    input_file: Path,
    output_dir: Path,
    pages: tuple[int, ...],
    dpi: int,
    seed: Optional[int],
    redaction_chance: float,
    min_redactions: int,
    max_redactions: int,
    merge_gap: float,
    verbose: bool,
):
    """
    Preview the redacted screensaver on a PDF.

    Outputs:

    \b
    - <doc>_p<N>_redacted.png: Page with redaction bars painted
    - layout.json: Bars per page plus the parameters used
    - layout.csv: Flat CSV, one row per bar
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        params = LayoutParams(
            redaction_chance=redaction_chance,
            min_redactions=min_redactions,
            max_redactions=max_redactions,
            merge_gap_tolerance=merge_gap,
        )
    except ConfigurationError as e:
        click.echo(click.style(f"Error: {e}", fg="red"))
        sys.exit(1)

    if seed is not None:
        seed_default_source(seed)

    try:
        doc = fitz.open(str(input_file))
    except Exception as e:
        click.echo(click.style(f"Error opening {input_file}: {e}", fg="red"))
        sys.exit(1)

    page_numbers = list(pages) or list(range(1, len(doc) + 1))
    invalid = [p for p in page_numbers if not 1 <= p <= len(doc)]
    if invalid:
        click.echo(click.style(
            f"Error: page(s) out of range 1-{len(doc)}: {', '.join(map(str, invalid))}",
            fg="red"
        ))
        doc.close()
        sys.exit(1)

    click.echo(f"Previewing {len(page_numbers)} page(s) of {input_file.name}")

    output_dir.mkdir(parents=True, exist_ok=True)
    engine = RedactionLayoutEngine(params)
    lookup = PdfWordLookup()
    doc_id = input_file.stem

    start_time = datetime.now()
    layouts = []

    try:
        for page_num in tqdm(page_numbers, desc="Rendering pages", unit="page"):
            layouts.append(
                preview_page(doc, page_num, doc_id, engine, lookup, dpi, output_dir)
            )
    except KeyboardInterrupt:
        click.echo()
        click.echo(click.style("Processing interrupted by user", fg="yellow"))
        sys.exit(130)
    except Exception as e:
        click.echo(click.style(f"Error during processing: {e}", fg="red"))
        if verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)
    finally:
        doc.close()

    write_layout_json(doc_id, layouts, params, output_dir / "layout.json")
    write_layout_csv(doc_id, layouts, output_dir / "layout.csv")

    total_bars = sum(len(l.redactions) for l in layouts)
    empty_pages = sum(1 for l in layouts if l.is_empty)
    unsaved = sum(1 for l in layouts if l.error and l.error.startswith("failed to save"))

    click.echo(f"  Time elapsed: {datetime.now() - start_time}")
    click.echo(f"  Total bars:   {total_bars}")
    if empty_pages:
        click.echo(click.style(f"  Pages without redactions: {empty_pages}", fg="yellow"))
    if unsaved:
        click.echo(click.style(f"  Images not saved: {unsaved}", fg="yellow"))

    click.echo(click.style("Done!", fg="green"))


if __name__ == "__main__":
    main()
