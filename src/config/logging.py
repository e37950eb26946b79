"""Logging configuration for the bot process."""

from __future__ import annotations

import logging
import os

# Third-party loggers that are chatty at INFO.
_NOISY_LOGGERS: tuple[str, ...] = ("aiogram.event", "aiogram.dispatcher")


def configure_logging(level: str | None = None) -> None:
    """Configure Python logging for the process.

    `level` wins over the `LOG_LEVEL` environment variable; the default is INFO. Logs are internal
    diagnostics only: user message text, addresses and parse payloads are never logged and nothing
    here is ever sent back to the chat.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, logging.getLogger().level))
