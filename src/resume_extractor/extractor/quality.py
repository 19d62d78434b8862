"""Readability scoring for extracted résumé text.

Estimates how likely a cleaned string is genuine prose rather than format
noise.  The score (0-100) combines three signals:

1. **Readability ratio**: share of characters that are letters, digits,
   spaces or common punctuation, weighted up to 60 points.
2. **Keyword hits**: distinct résumé vocabulary terms present, 5 points each.
3. **Email pattern**: 15 points if an email address shape is present.

The score is then bucketed into low / medium / high.  Both functions are pure
so the orchestrator's selection is reproducible.
"""

from __future__ import annotations

import re

from resume_extractor.extractor.types import QualityBucket, QualityScore

_READABLE_CHAR = re.compile(r"[A-Za-z0-9 .,;:!?()@-]")
_EMAIL = re.compile(r"(?<![A-Za-z0-9._%+-])[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

RESUME_KEYWORDS = (
    "experience",
    "education",
    "skills",
    "work",
    "email",
    "phone",
    "name",
    "university",
    "degree",
    "project",
    "contact",
    "linkedin",
)

DEFAULT_MIN_LENGTH = 20
DEFAULT_HIGH_CUTOFF = 70
DEFAULT_MEDIUM_CUTOFF = 40


def bucket_for(
    score: int,
    high_cutoff: int = DEFAULT_HIGH_CUTOFF,
    medium_cutoff: int = DEFAULT_MEDIUM_CUTOFF,
) -> QualityBucket:
    if score >= high_cutoff:
        return QualityBucket.HIGH
    if score >= medium_cutoff:
        return QualityBucket.MEDIUM
    return QualityBucket.LOW


def score_text(
    text: str | bytes | None,
    *,
    min_length: int = DEFAULT_MIN_LENGTH,
    high_cutoff: int = DEFAULT_HIGH_CUTOFF,
    medium_cutoff: int = DEFAULT_MEDIUM_CUTOFF,
) -> QualityScore:
    """Score *text* for readability and bucket the result.

    Text that is empty or shorter than *min_length* scores 0.  Bytes are
    decoded as Latin-1, so the function never raises on arbitrary input.

    Args:
        text: Cleaned text to assess.
        min_length: Minimum length for a non-zero score.
        high_cutoff: Lowest score in the high bucket.
        medium_cutoff: Lowest score in the medium bucket.

    Returns:
        QualityScore with an integer score in [0, 100] and its bucket.
    """
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("latin-1")
    if not text or len(text) < min_length:
        return QualityScore(0, QualityBucket.LOW)

    readability_ratio = len(_READABLE_CHAR.findall(text)) / len(text)

    lowered = text.lower()
    keyword_hits = sum(1 for keyword in RESUME_KEYWORDS if keyword in lowered)

    has_email = _EMAIL.search(text) is not None

    raw = readability_ratio * 60 + keyword_hits * 5 + (15 if has_email else 0)
    score = min(100, int(raw))
    return QualityScore(score, bucket_for(score, high_cutoff, medium_cutoff))
