"""Plain-text sidecar writer with YAML frontmatter for extracted résumés.

Handles the filesystem side of batch extraction: writing the winning text
next to its source PDF with structured YAML frontmatter describing how it was
obtained.  Provides idempotency via ``should_extract`` -- if a sidecar
already exists and has content, the PDF is skipped on re-run.

Public API:
    should_extract(text_path)  -> bool
    write_text_file(...)       -> None
"""

from __future__ import annotations

import datetime
import logging
from pathlib import Path

import frontmatter

from resume_extractor.extractor.types import ExtractionResult

logger = logging.getLogger(__name__)


def should_extract(text_path: Path) -> bool:
    """Return False if *text_path* already exists with content, else True."""
    return not (text_path.exists() and text_path.stat().st_size > 0)


def write_text_file(
    text_path: Path,
    result: ExtractionResult,
    pdf_filename: str,
) -> None:
    """Write extracted text to disk with YAML frontmatter metadata.

    Frontmatter fields:

    - ``source_pdf``: Original PDF filename
    - ``extraction_method``: Strategy that won
    - ``extraction_date``: UTC ISO-8601 timestamp
    - ``quality_score`` / ``quality_bucket``: Readability assessment
    - ``char_count``: Length of the cleaned text

    Args:
        text_path: Destination path for the sidecar file.
        result: Winning extraction.
        pdf_filename: Source PDF filename (not full path).
    """
    post = frontmatter.Post(result.text)
    post.metadata["source_pdf"] = pdf_filename
    post.metadata["extraction_method"] = result.method.value
    post.metadata["extraction_date"] = (
        datetime.datetime.now(datetime.UTC).isoformat()
    )
    post.metadata["quality_score"] = result.quality_score
    post.metadata["quality_bucket"] = result.quality_bucket.value
    post.metadata["char_count"] = result.length

    text_path.parent.mkdir(parents=True, exist_ok=True)

    with open(text_path, "w", encoding="utf-8") as f:
        f.write(frontmatter.dumps(post))

    logger.info(
        "Wrote extraction to %s (%d chars, %s)",
        text_path.name,
        result.length,
        result.method.value,
    )
