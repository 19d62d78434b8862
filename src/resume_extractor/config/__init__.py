"""Configuration package -- typed, validated settings from YAML + .env."""

from .settings import ExtractionSettings, OcrSettings, PipelineSettings

__all__ = [
    "ExtractionSettings",
    "OcrSettings",
    "PipelineSettings",
]
