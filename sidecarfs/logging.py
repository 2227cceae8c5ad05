"""Logging for the sidecar service; every record is tagged with the served scheme."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

_LOGGER_NAME = "sidecarfs"
_NO_SCHEME = "-"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the sidecarfs hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class SchemeFilter(logging.Filter):
    """Stamps ``record.scheme`` so one log file can hold several sidecars."""

    def __init__(self, scheme: Optional[str]) -> None:
        super().__init__()
        self.scheme = scheme or _NO_SCHEME

    def filter(self, record: logging.LogRecord) -> bool:
        record.scheme = self.scheme
        return True


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    scheme: Optional[str] = None,
) -> logging.Logger:
    """Configure the sidecarfs logger.

    Console output is short; the optional file sink adds timestamps, logger
    names and the scheme this process serves.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    scheme_filter = SchemeFilter(scheme)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.addFilter(scheme_filter)
    stream_handler.setFormatter(
        logging.Formatter("[sidecarfs %(scheme)s] %(levelname)s %(message)s")
    )
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.addFilter(scheme_filter)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)s %(scheme)s %(name)s: %(message)s"
            )
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["SchemeFilter", "configure_logging", "get_logger"]
