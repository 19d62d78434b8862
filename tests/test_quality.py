"""Tests for readability scoring and bucketing."""

import pytest

from resume_extractor.extractor.quality import bucket_for, score_text
from resume_extractor.extractor.types import QualityBucket


def test_empty_text_scores_zero():
    result = score_text("")
    assert result.score == 0
    assert result.bucket is QualityBucket.LOW


def test_text_below_min_length_scores_zero():
    assert score_text("experience email").score == 0


def test_control_characters_only_score_zero():
    result = score_text("\x01\x02\x03\x04" * 20)
    assert result.score == 0
    assert result.bucket is QualityBucket.LOW


@pytest.mark.parametrize(
    "raw", [b"\xff\xfe\xfd" * 30, b"\x80\x81abc\x00" * 10, "\ud800 lone surrogate " * 3]
)
def test_arbitrary_input_never_raises(raw):
    result = score_text(raw)
    assert 0 <= result.score <= 100


def test_score_formula():
    # All readable (ratio 1.0) -> 60, four keywords -> +20
    result = score_text("experience education skills work")
    assert result.score == 80
    assert result.bucket is QualityBucket.HIGH


def test_email_adds_fifteen_points():
    without = score_text("contact me at jane at acme dot com")
    with_email = score_text("contact me at jane@acme.com today")
    assert with_email.score - without.score == 15


def test_score_capped_at_100():
    text = (
        "name email phone experience education skills work university "
        "degree project contact linkedin jane@acme.com"
    )
    assert score_text(text).score == 100


def test_appending_keyword_does_not_decrease_score():
    base = "Jane Doe at Acme Corp in Boston since 2019"
    extended = base + " experience"
    assert score_text(extended).score >= score_text(base).score
    assert score_text(extended).score > score_text(base).score


def test_keywords_counted_once_each():
    once = score_text("experience in Python and SQL for many years")
    twice = score_text("experience experience in Python SQL years")
    assert once.score == twice.score == 65


def test_format_noise_scores_low():
    noise = "#$%^&*~`|\\{}[]<>=+_" * 5
    result = score_text(noise)
    assert result.score < 40
    assert result.bucket is QualityBucket.LOW


def test_scoring_is_deterministic():
    text = "Senior engineer, 5 years experience, email: jane@acme.com"
    assert score_text(text) == score_text(text)


@pytest.mark.parametrize(
    "score, bucket",
    [
        (100, QualityBucket.HIGH),
        (70, QualityBucket.HIGH),
        (69, QualityBucket.MEDIUM),
        (40, QualityBucket.MEDIUM),
        (39, QualityBucket.LOW),
        (0, QualityBucket.LOW),
    ],
)
def test_bucket_cutoffs(score, bucket):
    assert bucket_for(score) is bucket


def test_custom_cutoffs():
    assert bucket_for(55, high_cutoff=50, medium_cutoff=20) is QualityBucket.HIGH
    assert score_text("experience education skills work", high_cutoff=90).bucket is (
        QualityBucket.MEDIUM
    )
