"""Per-document text extraction service with multi-strategy selection.

Runs every applicable strategy over one PDF, scores each result and picks the
most trustworthy text:

1. **standard**  -- PyMuPDF whole-document decode.
2. **alternate** -- pdfplumber word-level decode.
3. **ocr**       -- external OCR, only when no structural candidate exists
   yet or all candidates so far are bucketed low.
4. **manual**    -- regex scraper over raw text-drawing operators.

Unlike a first-pass-wins fallback chain, every strategy that runs becomes an
attempt: its output is cleaned, scored, and accepted if it clears the
strategy's threshold (40 structural, 30 OCR, 25 manual by default).  The
winner is chosen by bucket, then by ``score * length`` (OCR weighted x1.2),
then by strategy priority.

Edge cases handled:
- A strategy that raises is logged and recorded; it never aborts the run.
- Empty input fails immediately.
- On total failure the document is inspected so the error can say whether the
  file is corrupted, encrypted, or image-only without OCR configured.
"""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable, Iterable, Mapping

from resume_extractor.config.settings import ExtractionSettings, OcrSettings
from resume_extractor.extractor.cleaner import clean
from resume_extractor.extractor.manual_extractor import scrape_text_operators
from resume_extractor.extractor.ocr import OcrClient, build_ocr_client, ocr_extract
from resume_extractor.extractor.pdfplumber_extractor import decode_alternate
from resume_extractor.extractor.pymupdf_extractor import decode_standard, inspect_document
from resume_extractor.extractor.quality import score_text
from resume_extractor.extractor.types import (
    ErrorKind,
    ExtractionAttempt,
    ExtractionDiagnostics,
    ExtractionError,
    ExtractionMethod,
    ExtractionResult,
    FailureHint,
    QualityBucket,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ExtractionError",
    "ExtractionMethod",
    "ExtractionResult",
    "StructuralStrategy",
    "default_strategies",
    "extract_text",
    "run_strategy",
    "select_winner",
]

StructuralStrategy = Callable[[bytes], str]

_STRUCTURAL = (ExtractionMethod.STANDARD, ExtractionMethod.ALTERNATE)


def default_strategies(settings: ExtractionSettings) -> dict[ExtractionMethod, StructuralStrategy]:
    """The structural strategies used when the caller supplies none."""
    return {
        ExtractionMethod.STANDARD: decode_standard,
        ExtractionMethod.ALTERNATE: decode_alternate,
        ExtractionMethod.MANUAL: functools.partial(
            scrape_text_operators,
            max_chars=settings.manual_max_chars,
            max_streams=settings.manual_max_streams,
            max_text_objects=settings.manual_max_text_objects,
        ),
    }


def _threshold_for(method: ExtractionMethod, settings: ExtractionSettings) -> int:
    if method is ExtractionMethod.OCR:
        return settings.ocr_threshold
    if method is ExtractionMethod.MANUAL:
        return settings.manual_threshold
    return settings.structural_threshold


def run_strategy(
    method: ExtractionMethod,
    strategy: StructuralStrategy,
    document: bytes,
    settings: ExtractionSettings,
) -> ExtractionAttempt:
    """Invoke one strategy, then clean and score its output.

    Any exception raised by *strategy* is caught and recorded on the attempt.

    Args:
        method: Identifier recorded on the attempt.
        strategy: Callable turning document bytes into raw text.
        document: Raw PDF bytes.
        settings: Thresholds and bucket cutoffs.

    Returns:
        ExtractionAttempt; ``accepted`` is True only if the cleaned text
        scored at or above the method's threshold.
    """
    attempt = ExtractionAttempt(method=method, threshold=_threshold_for(method, settings))
    started = time.perf_counter()

    try:
        raw_text = strategy(document) or ""
    except Exception as e:
        attempt.elapsed_seconds = time.perf_counter() - started
        attempt.error = str(e) or type(e).__name__
        logger.warning("Strategy %s failed: %s", method.value, attempt.error)
        return attempt

    attempt.elapsed_seconds = time.perf_counter() - started
    attempt.raw_text = raw_text
    attempt.cleaned_text = clean(raw_text)

    quality = score_text(
        attempt.cleaned_text,
        min_length=settings.min_text_length,
        high_cutoff=settings.high_bucket_cutoff,
        medium_cutoff=settings.medium_bucket_cutoff,
    )
    attempt.quality_score = quality.score
    attempt.quality_bucket = quality.bucket
    attempt.succeeded = bool(attempt.cleaned_text)
    attempt.accepted = attempt.succeeded and quality.score >= attempt.threshold

    if not attempt.succeeded:
        attempt.error = "no text recovered"

    logger.info(
        "Strategy %s: %d chars, score %d (%s), %s in %.2fs",
        method.value,
        attempt.length,
        attempt.quality_score,
        attempt.quality_bucket.value,
        "accepted" if attempt.accepted else f"rejected (threshold {attempt.threshold})",
        attempt.elapsed_seconds,
    )
    return attempt


def _combined_score(attempt: ExtractionAttempt, ocr_weight: float) -> float:
    weight = ocr_weight if attempt.method is ExtractionMethod.OCR else 1.0
    return attempt.quality_score * attempt.length * weight


def select_winner(
    attempts: Iterable[ExtractionAttempt],
    ocr_weight: float = 1.2,
) -> ExtractionAttempt | None:
    """Pick the best accepted attempt, or None if none was accepted.

    Ordering: quality bucket (high > medium > low), then
    ``quality_score * length`` with OCR multiplied by *ocr_weight*, then
    strategy priority (standard > alternate > ocr > manual).
    """
    accepted = [a for a in attempts if a.accepted]
    if not accepted:
        return None
    return min(
        accepted,
        key=lambda a: (
            -a.quality_bucket.rank,
            -_combined_score(a, ocr_weight),
            a.method.priority,
        ),
    )


def _ocr_warranted(candidates: list[ExtractionAttempt]) -> bool:
    return not candidates or all(
        c.quality_bucket is QualityBucket.LOW for c in candidates
    )


def _diagnose(
    document: bytes,
    diagnostics: ExtractionDiagnostics,
    attempts: list[ExtractionAttempt],
    ocr_client: OcrClient | None,
) -> FailureHint:
    info = inspect_document(document)
    diagnostics.page_count = info.page_count if info.openable else None
    diagnostics.encrypted = info.encrypted

    if info.encrypted:
        return FailureHint.ENCRYPTED
    if not info.openable:
        return FailureHint.CORRUPTED
    if any(a.cleaned_text for a in attempts):
        return FailureHint.LOW_QUALITY_TEXT
    if ocr_client is None:
        return FailureHint.IMAGE_ONLY_NO_OCR
    return FailureHint.OCR_UNAVAILABLE_OR_FAILED


def extract_text(
    document: bytes,
    settings: ExtractionSettings | None = None,
    *,
    ocr_client: OcrClient | None = None,
    use_configured_ocr: bool = True,
    strategies: Mapping[ExtractionMethod, StructuralStrategy] | None = None,
) -> ExtractionResult:
    """Extract the highest-confidence plain text from PDF bytes.

    Args:
        document: Raw PDF bytes; never modified.
        settings: Thresholds and cutoffs (defaults when None).
        ocr_client: OCR backend.  When None and *use_configured_ocr* is set,
            one is built from ``OcrSettings`` (environment, .env,
            config/ocr.yaml) the first time OCR is warranted.
        use_configured_ocr: Set False to skip OCR unless *ocr_client* is
            given.
        strategies: Replacements for the structural strategies, keyed by
            method (standard, alternate, manual).  Missing keys fall back to
            the defaults.

    Returns:
        ExtractionResult holding the winning cleaned text and diagnostics.

    Raises:
        ExtractionError: No strategy produced text clearing its threshold.
    """
    settings = settings or ExtractionSettings()
    diagnostics = ExtractionDiagnostics()

    if not document:
        diagnostics.failure_hint = FailureHint.EMPTY_DOCUMENT
        logger.error("Empty document, nothing to extract")
        raise ExtractionError(ErrorKind.NO_READABLE_TEXT, diagnostics)

    resolved = default_strategies(settings)
    if strategies:
        resolved.update(strategies)

    logger.info("Extracting text from %d-byte document", len(document))
    attempts: list[ExtractionAttempt] = []

    # --- Structural decodes ---

    for method in _STRUCTURAL:
        attempts.append(run_strategy(method, resolved[method], document, settings))

    # --- OCR (only if structural text is missing or poor) ---

    candidates = [a for a in attempts if a.accepted]
    warranted = _ocr_warranted(candidates)
    if warranted and ocr_client is None and use_configured_ocr:
        ocr_client = build_ocr_client(OcrSettings())

    if not warranted:
        diagnostics.ocr_skipped_reason = "structural text sufficient"
        logger.debug("Skipping OCR: structural candidate available")
    elif ocr_client is None:
        diagnostics.ocr_skipped_reason = "not configured"
        logger.info("OCR warranted but not configured, skipping")
    else:
        attempts.append(
            run_strategy(
                ExtractionMethod.OCR,
                functools.partial(ocr_extract, client=ocr_client),
                document,
                settings,
            )
        )

    # --- Manual operator scraper (most permissive, runs last) ---

    attempts.append(
        run_strategy(
            ExtractionMethod.MANUAL, resolved[ExtractionMethod.MANUAL], document, settings
        )
    )

    diagnostics.attempts = [a.summary() for a in attempts]
    winner = select_winner(attempts, settings.ocr_weight)

    if winner is None:
        diagnostics.failure_hint = _diagnose(document, diagnostics, attempts, ocr_client)
        logger.error(
            "No readable text (%s): %s",
            diagnostics.failure_hint.value,
            diagnostics.to_dict(),
        )
        raise ExtractionError(ErrorKind.NO_READABLE_TEXT, diagnostics)

    logger.info(
        "Extraction succeeded via %s: %d chars, score %d (%s)",
        winner.method.value,
        winner.length,
        winner.quality_score,
        winner.quality_bucket.value,
    )
    return ExtractionResult(
        text=winner.cleaned_text,
        method=winner.method,
        length=winner.length,
        quality_score=winner.quality_score,
        quality_bucket=winner.quality_bucket,
        diagnostics=diagnostics,
    )
