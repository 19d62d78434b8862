"""Shared types for the extraction pipeline.

Defines the strategy identifiers, quality buckets, per-strategy attempts,
the winning result, and the failure diagnostics used across all extractor
modules, quality scoring, and the orchestration service.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum


class ExtractionMethod(Enum):
    """Strategy used to extract text from a PDF.

    Declaration order is the tie-break priority: earlier members win ties.
    """

    STANDARD = "standard"
    ALTERNATE = "alternate"
    OCR = "ocr"
    MANUAL = "manual"

    @property
    def priority(self) -> int:
        """Position in the tie-break order (0 = highest priority)."""
        return list(ExtractionMethod).index(self)


class QualityBucket(Enum):
    """Coarse trustworthiness classification of extracted text."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return {"low": 0, "medium": 1, "high": 2}[self.value]


class FailureHint(Enum):
    """Best guess at why no strategy produced readable text."""

    EMPTY_DOCUMENT = "empty_document"
    CORRUPTED = "corrupted"
    ENCRYPTED = "encrypted"
    IMAGE_ONLY_NO_OCR = "image_only_no_ocr"
    OCR_UNAVAILABLE_OR_FAILED = "ocr_unavailable_or_failed"
    LOW_QUALITY_TEXT = "low_quality_text"


class ErrorKind(Enum):
    NO_READABLE_TEXT = "no_readable_text"


@dataclass(frozen=True)
class QualityScore:
    """Readability score (0-100) and its bucket."""

    score: int
    bucket: QualityBucket


@dataclass
class ExtractionAttempt:
    """Outcome of a single strategy invocation.

    Attributes:
        method: Strategy that produced this attempt.
        raw_text: Unprocessed strategy output (may be empty).
        cleaned_text: ``raw_text`` after the text cleaner.
        quality_score: Readability score of ``cleaned_text`` (0-100).
        quality_bucket: Bucket of ``quality_score``.
        succeeded: False if the strategy raised or returned nothing usable.
        threshold: Acceptance threshold applied to this attempt.
        accepted: Whether ``quality_score`` cleared ``threshold``.
        error: Failure reason if the strategy raised.
        elapsed_seconds: Wall time spent in the strategy.
    """

    method: ExtractionMethod
    raw_text: str = ""
    cleaned_text: str = ""
    quality_score: int = 0
    quality_bucket: QualityBucket = QualityBucket.LOW
    succeeded: bool = False
    threshold: int = 0
    accepted: bool = False
    error: str | None = None
    elapsed_seconds: float = 0.0

    @property
    def length(self) -> int:
        return len(self.cleaned_text)

    def summary(self) -> AttemptSummary:
        return AttemptSummary(
            method=self.method.value,
            text_length=self.length,
            score=self.quality_score,
            bucket=self.quality_bucket.value,
            accepted=self.accepted,
            error=self.error,
        )


@dataclass(frozen=True)
class AttemptSummary:
    """Diagnostic record of one attempt, safe to log or serialise."""

    method: str
    text_length: int
    score: int
    bucket: str
    accepted: bool
    error: str | None = None


@dataclass
class ExtractionDiagnostics:
    """What was tried during one extraction and why it ended as it did."""

    attempts: list[AttemptSummary] = field(default_factory=list)
    failure_hint: FailureHint | None = None
    ocr_skipped_reason: str | None = None
    page_count: int | None = None
    encrypted: bool = False

    def to_dict(self) -> dict:
        return {
            "attempts": [asdict(a) for a in self.attempts],
            "failure_hint": self.failure_hint.value if self.failure_hint else None,
            "ocr_skipped_reason": self.ocr_skipped_reason,
            "page_count": self.page_count,
            "encrypted": self.encrypted,
        }


@dataclass
class ExtractionResult:
    """The winning extraction handed to the field-extraction collaborator.

    Attributes:
        text: Cleaned text of the winning attempt.
        method: Strategy that won.
        length: ``len(text)``.
        quality_score: Score of the winning attempt.
        quality_bucket: Bucket of the winning attempt.
        diagnostics: Every attempt made during this extraction.
    """

    text: str
    method: ExtractionMethod
    length: int
    quality_score: int = 0
    quality_bucket: QualityBucket = QualityBucket.LOW
    diagnostics: ExtractionDiagnostics | None = None


class ExtractionError(Exception):
    """Raised when no strategy produced text clearing its threshold."""

    def __init__(
        self,
        kind: ErrorKind,
        diagnostics: ExtractionDiagnostics,
        message: str | None = None,
    ) -> None:
        self.kind = kind
        self.diagnostics = diagnostics
        hint = diagnostics.failure_hint.value if diagnostics.failure_hint else "unknown"
        super().__init__(message or f"{kind.value} ({hint})")


class StrategyError(Exception):
    """A single extraction strategy could not produce text."""


class EncryptedDocumentError(StrategyError):
    """The PDF is password protected."""


class OcrError(StrategyError):
    """The OCR backend rejected the document or returned no text."""
