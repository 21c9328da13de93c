"""
Logging configuration.

We use a YAML logging config (`src/roadsnap/config/logging.yaml`) and then apply
runtime overrides from settings (e.g., `ROADSNAP_LOG_LEVEL`).

Library modules only create loggers; entrypoints (the CLI) call `configure_logging()`.
"""

from __future__ import annotations

import copy
import logging.config

from roadsnap.config.settings import get_logging_config, get_settings


def configure_logging() -> None:
    """Configure the Python logging system based on packaged YAML config + settings."""
    settings = get_settings()
    # The loader is cached; never mutate the shared mapping.
    config = copy.deepcopy(get_logging_config())

    level = settings.app.log_level.upper()
    config.setdefault("root", {})["level"] = level
    for handler in config.get("handlers", {}).values():
        if isinstance(handler, dict) and "level" in handler:
            handler["level"] = level
    for logger in config.get("loggers", {}).values():
        if isinstance(logger, dict):
            logger["level"] = level

    logging.config.dictConfig(config)
