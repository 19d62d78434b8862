"""Logging configuration for the extraction engine."""

from .setup import setup_logging

__all__ = ["setup_logging"]
