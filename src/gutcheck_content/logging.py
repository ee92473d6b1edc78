"""Logging setup shared by the API process and scripts."""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"

# Third-party loggers that are noisy at INFO
_QUIET_LOGGERS = ("azure.core.pipeline.policies.http_logging_policy", "azure.cosmos", "httpx")


def configure_logging(level: str = "INFO", *, log_file: str | None = None) -> None:
    """Configure the root logger with a console handler and an optional file handler."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(_FORMAT)
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
