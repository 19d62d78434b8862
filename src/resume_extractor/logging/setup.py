"""Root logger configuration for command-line and smoke runs.

Two handlers are installed on the root logger:

- a size-rotated file handler writing one JSON object per record, which
  keeps every attempt's diagnostics machine-readable;
- a plain-text stream handler for whoever is watching the terminal.

Library modules only ever call ``logging.getLogger(__name__)``.  Services that
embed the extractor keep their own logging setup and never call this.
"""

import logging
import logging.handlers
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

LOG_FILENAME = "extraction.log"

# Third-party loggers that flood DEBUG output with per-object parser chatter
NOISY_LOGGERS = ("pdfminer", "httpx", "httpcore", "PIL")


def _json_file_handler(
    path: Path, level: int | str, max_bytes: int, backup_count: int
) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=str(path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        JsonFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
            rename_fields={"asctime": "ts", "levelname": "level", "name": "logger"},
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )
    return handler


def _console_handler(level: int | str) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-7s %(name)s | %(message)s", "%H:%M:%S")
    )
    return handler


def setup_logging(
    log_dir: str = "logs",
    log_level_file: int | str = logging.DEBUG,
    log_level_console: int | str = logging.INFO,
    max_bytes: int = 10_485_760,  # 10MB
    backup_count: int = 5,
) -> Path:
    """Install the JSON file handler and the console handler on the root logger.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.  Levels may be given as ints or names ("DEBUG").

    Returns:
        Path of the JSON log file.
    """
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / LOG_FILENAME

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.DEBUG)

    root.addHandler(_json_file_handler(log_path, log_level_file, max_bytes, backup_count))
    root.addHandler(_console_handler(log_level_console))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_path
