"""Logging setup for the lead-intake service.

Each logger family gets its own level from Settings, so SQL echo or the
access audit trail can be turned up without flooding the rest of the app.
Call ``setup_logging()`` once from the application lifespan.
"""

import logging
import sys

from lead_intake.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"

# Settings field -> logger names it controls
LOGGER_FAMILIES: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    # principal resolution and access-policy denials
    "log_level_access": ("lead_intake.access",),
}


def level_from_name(name: str | None, default: int = logging.INFO) -> int:
    """Map ``"debug"``/``"WARNING"``/... to a logging constant."""
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(level_from_name(settings.log_level))
    if not root.handlers:
        # uvicorn installs its own handlers; plain scripts and tests do not
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    for field_name, logger_names in LOGGER_FAMILIES.items():
        level = level_from_name(getattr(settings, field_name))
        for logger_name in logger_names:
            logging.getLogger(logger_name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Log levels: root=%s sql=%s uvicorn=%s access=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_uvicorn,
        settings.log_level_access,
    )
