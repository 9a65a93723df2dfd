"""Logging setup for the dashboard process.

Each logger category gets its level from a Settings field, so the outbound
HTTP chatter of httpx/httpcore can stay quiet while the CMS API call trace
(``GatewayLogger``) stays visible.

Usage:
    from cms_admin.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from cms_admin.config import Settings, get_settings

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"

# Settings field → logger names it controls
_CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "log_level_http": ("httpx", "httpcore"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_gateway": ("cms_admin.infrastructure.http",),
}


def setup_logging(settings: Settings | None = None) -> None:
    """Apply the root and per-category levels; add a stderr handler if none exists."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
        root.addHandler(handler)

    applied = {}
    for field_name, logger_names in _CATEGORY_MAP.items():
        raw = getattr(settings, field_name, settings.log_level)
        for name in logger_names:
            logging.getLogger(name).setLevel(_parse_level(raw))
        applied[field_name.removeprefix("log_level_")] = raw

    logging.getLogger(__name__).debug("Logging configured — root=%s %s", settings.log_level, applied)


def _parse_level(raw: str) -> int:
    """Level name → logging constant; unknown names fall back to INFO."""
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO
