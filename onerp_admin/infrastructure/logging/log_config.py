"""Centralized logging configuration.

Applies per-category log levels from Settings so that noisy loggers
(e.g. httpx/httpcore transport chatter) can be silenced without affecting
the API adapter or the module state layer.

Usage:
    from onerp_admin.infrastructure.logging.log_config import setup_logging
    setup_logging()   # Call once at startup
"""

import logging
import sys

from onerp_admin.config import Settings, get_settings


# Logger-name -> Settings-field mapping. setup_logging() sets the level of
# each listed logger to the value of the corresponding setting.

_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_http": [
        "httpx",
        "httpcore",
    ],
    "log_level_api": [
        "onerp_admin.infrastructure.http",
    ],
    "log_level_cache": [
        "onerp_admin.application.state",
        "onerp_admin.infrastructure.notifications",
    ],
}


def setup_logging(settings: Settings | None = None) -> None:
    """Configure Python logging levels from the client settings."""
    settings = settings or get_settings()
    root_level = _parse_level(settings.log_level)

    root = logging.getLogger()
    root.setLevel(root_level)

    # Scripts and tests may run without any handler installed.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(levelname)-8s %(name)s: %(message)s",
            )
        )
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        raw_level: str = getattr(settings, settings_field, "INFO")
        level = _parse_level(raw_level)

        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s, http=%s, api=%s, cache=%s",
        settings.log_level,
        settings.log_level_http,
        settings.log_level_api,
        settings.log_level_cache,
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
