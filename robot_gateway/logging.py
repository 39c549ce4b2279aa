"""Logging configuration helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# aiohttp access-log atoms: peer, request line, status, body size, seconds.
ACCESS_LOG_FORMAT = '%a "%r" %s %b %Tfs'

ACCESS_LOGGER = "aiohttp.access"


def _resolve_level(level: str) -> int:
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    level: str = "INFO", *, log_path: Optional[Path] = None, log_access: bool = False
) -> None:
    """Install console and optional file handlers on the root logger.

    Unknown level names fall back to INFO. The per-request access log
    (one line per API call in :data:`ACCESS_LOG_FORMAT`) is emitted at INFO
    when ``log_access`` is set and held at WARNING otherwise, so a polling
    client does not flood the log with status requests.
    """

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(_resolve_level(level))

    logging.captureWarnings(True)
    logging.getLogger(ACCESS_LOGGER).setLevel(
        logging.INFO if log_access else logging.WARNING
    )
