"""Résumé text extraction -- command-line entry point.

Usage:
    python main.py RESUME.pdf [MORE.pdf | DIRECTORY ...]

Startup sequence:
    1. Load pipeline configuration (needed for log_dir and output suffix)
    2. Setup logging (must happen before any code that logs)
    3. Load extraction and OCR configuration
    4. Collect PDFs (directories are searched for *.pdf)
    5. Extract each PDF and write a text sidecar next to it

Exits 0 when no file failed, 1 otherwise.
"""

import logging
import sys
from pathlib import Path

from resume_extractor.config import ExtractionSettings, OcrSettings, PipelineSettings
from resume_extractor.extractor import extract_files
from resume_extractor.logging import setup_logging

logger = logging.getLogger(__name__)


def _collect_pdfs(args: list[str]) -> list[Path]:
    pdfs: list[Path] = []
    for arg in args:
        path = Path(arg)
        if path.is_dir():
            pdfs.extend(sorted(path.glob("*.pdf")))
        elif path.is_file():
            pdfs.append(path)
        else:
            logger.warning("Not a file or directory, ignoring: %s", arg)
    return pdfs


def main(argv: list[str] | None = None) -> int:
    """Run extraction over the PDFs named on the command line."""
    args = sys.argv[1:] if argv is None else argv

    # 1. Load pipeline config first -- needed for logging
    pipeline = PipelineSettings()

    # 2. Setup logging BEFORE anything else logs
    setup_logging(
        log_dir=pipeline.log_dir,
        log_level_console=pipeline.log_level,
        max_bytes=pipeline.log_max_bytes,
        backup_count=pipeline.log_backup_count,
    )

    # 3. Load remaining configuration
    extraction = ExtractionSettings()
    ocr = OcrSettings()

    # Log non-sensitive config values (never log the OCR api_key)
    logger.info(
        "Config loaded -- thresholds: structural=%s, ocr=%s, manual=%s",
        extraction.structural_threshold,
        extraction.ocr_threshold,
        extraction.manual_threshold,
    )
    logger.info(
        "Config loaded -- ocr: provider=%s, endpoint=%s, key_set=%s, timeout=%ss",
        ocr.provider,
        ocr.endpoint,
        bool(ocr.api_key),
        ocr.timeout_seconds,
    )

    # 4. Collect inputs
    pdfs = _collect_pdfs(args)
    if not pdfs:
        logger.error("No PDF files given")
        return 1

    # 5. Extract
    batch = extract_files(pdfs, extraction, ocr, output_suffix=pipeline.output_suffix)

    logger.info("Run complete -- methods used: %s", batch.methods or "none")
    return 1 if batch.files_failed else 0


if __name__ == "__main__":
    sys.exit(main())
