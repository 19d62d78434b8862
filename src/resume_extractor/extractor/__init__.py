"""Résumé text extraction: single-document engine and file batch runner.

The engine (``extract_text``) turns PDF bytes into the best available plain
text.  ``extract_files`` runs it over PDFs on disk, writing a text sidecar
with YAML frontmatter next to each one.  Extraction tolerates individual
file failures -- one unreadable résumé does not block the others.

Public API:
    extract_text(document, settings, ocr_client=..., use_configured_ocr=...,
                 strategies=...)
        -> ExtractionResult            (raises ExtractionError)
    extract_files(pdf_paths, extraction_settings, ocr_settings, output_suffix)
        -> ExtractionBatchResult
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from resume_extractor.config.settings import ExtractionSettings, OcrSettings
from resume_extractor.extractor.ocr import OcrClient, build_ocr_client
from resume_extractor.extractor.output import should_extract, write_text_file
from resume_extractor.extractor.service import extract_text
from resume_extractor.extractor.types import (
    ExtractionError,
    ExtractionMethod,
    ExtractionResult,
    FailureHint,
    QualityBucket,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ExtractionBatchResult",
    "ExtractionError",
    "ExtractionMethod",
    "ExtractionResult",
    "FailureHint",
    "QualityBucket",
    "extract_files",
    "extract_text",
]


@dataclass
class ExtractionBatchResult:
    """Aggregated outcome of extracting text for multiple PDFs."""

    files_attempted: int = 0
    files_succeeded: int = 0
    files_failed: int = 0
    files_skipped: int = 0
    methods: dict[str, int] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)


def _extract_one(
    pdf_path: Path,
    text_path: Path,
    settings: ExtractionSettings,
    ocr_client: OcrClient | None,
) -> ExtractionResult:
    document = pdf_path.read_bytes()
    result = extract_text(
        document, settings, ocr_client=ocr_client, use_configured_ocr=False
    )
    write_text_file(text_path, result, pdf_path.name)
    return result


def extract_files(
    pdf_paths: Iterable[Path],
    extraction_settings: ExtractionSettings,
    ocr_settings: OcrSettings | None = None,
    output_suffix: str = ".txt",
) -> ExtractionBatchResult:
    """Extract text from each PDF and write a sidecar next to it.

    PDFs whose sidecar already exists with content are skipped.  Per-file
    error isolation ensures one failure does not block the others.

    Args:
        pdf_paths: PDF files to process.
        extraction_settings: Thresholds and scraper bounds.
        ocr_settings: OCR configuration; OCR is skipped when None or when it
            resolves to no backend.
        output_suffix: Suffix replacing ``.pdf`` for the sidecar file.

    Returns:
        ExtractionBatchResult with aggregated statistics.
    """
    batch = ExtractionBatchResult()
    ocr_client = build_ocr_client(ocr_settings)
    paths = list(pdf_paths)

    if ocr_client is None:
        logger.info("OCR not configured; scanned résumés may be unreadable")

    for idx, pdf_path in enumerate(paths, start=1):
        text_path = pdf_path.with_suffix(output_suffix)

        if not should_extract(text_path):
            logger.info(
                "Skipping %d/%d: already extracted (%s)",
                idx,
                len(paths),
                text_path.name,
            )
            batch.files_skipped += 1
            continue

        batch.files_attempted += 1
        try:
            result = _extract_one(pdf_path, text_path, extraction_settings, ocr_client)
        except ExtractionError as e:
            hint = e.diagnostics.failure_hint
            batch.files_failed += 1
            batch.errors.append(f"{pdf_path.name}: {hint.value if hint else e.kind.value}")
            logger.warning(
                "No readable text in %d/%d (%s): %s",
                idx,
                len(paths),
                pdf_path.name,
                e.diagnostics.to_dict(),
            )
            continue
        except OSError as e:
            batch.files_failed += 1
            batch.errors.append(f"{pdf_path.name}: {e}")
            logger.warning("Cannot read or write %s: %s", pdf_path.name, e)
            continue

        batch.files_succeeded += 1
        batch.methods[result.method.value] = batch.methods.get(result.method.value, 0) + 1
        logger.info(
            "Extracted %d/%d (%s) via %s: %d chars, score %d",
            idx,
            len(paths),
            pdf_path.name,
            result.method.value,
            result.length,
            result.quality_score,
        )

    logger.info(
        "Extraction batch complete: %d attempted, %d succeeded, %d failed, "
        "%d skipped",
        batch.files_attempted,
        batch.files_succeeded,
        batch.files_failed,
        batch.files_skipped,
    )
    return batch
