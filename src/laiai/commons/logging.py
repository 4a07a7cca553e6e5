"""
Centralized logging.

stdlib logging, configured once. Feature modules share the `laiai` logger.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from laiai.core.settings import settings

# Per-request INFO lines from the HTTP stack drown out the app's own.
_NOISY = ("httpx", "httpcore", "google_genai")


@lru_cache
def initialize_logger() -> logging.Logger:
    level = getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=level,
    )
    for name in _NOISY:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return logging.getLogger("laiai")


logger = initialize_logger()
