"""
Output generation for layout.json and layout.csv.

Serializes the redaction bars laid out for each previewed page.
"""

import csv
import json
from datetime import datetime
from pathlib import Path

from .models import LayoutParams, PageLayout


CSV_FIELDS = ["document", "page_id", "bar_index", "x", "y", "w", "h", "text"]


def write_layout_json(
    document: str,
    layouts: list[PageLayout],
    params: LayoutParams,
    output_path: Path
) -> None:
    """
    Write all page layouts to JSON format.

    Args:
        document: Source document identifier
        layouts: Layouts in page order
        params: Layout parameters used
        output_path: Path to write JSON file
    """
    data = {
        "generated_at": datetime.now().isoformat(),
        "document": document,
        "parameters": params.to_dict(),
        "summary": {
            "total_pages": len(layouts),
            "pages_with_redactions": sum(1 for l in layouts if not l.is_empty),
            "total_bars": sum(len(l.redactions) for l in layouts),
        },
        "pages": [
            {
                "page_id": layout.page_id,
                "sampled_words": layout.sampled_count,
                "from_cache": layout.from_cache,
                "error": layout.error,
                "bars": [box.to_dict() for box in layout.redactions],
            }
            for layout in layouts
        ],
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def write_layout_csv(
    document: str,
    layouts: list[PageLayout],
    output_path: Path
) -> None:
    """
    Write the bars to CSV format (flat, one row per bar).

    Args:
        document: Source document identifier
        layouts: Layouts in page order
        output_path: Path to write CSV file
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for layout in layouts:
            for i, box in enumerate(layout.redactions):
                writer.writerow({
                    "document": document,
                    "page_id": layout.page_id,
                    "bar_index": i,
                    **box.to_dict(),
                })
