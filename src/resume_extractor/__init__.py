"""Multi-strategy plain-text extraction for uploaded résumé PDFs."""

__version__ = "0.1.0"
