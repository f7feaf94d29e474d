import logging
import os
from logging.handlers import RotatingFileHandler

from settings_service import SettingsService

LOGS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "logs")

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(filename)s:%(lineno)d %(funcName)s()] %(message)s"

# Loggers handed out by setup_logging(), so set_level() can reach them later
_configured_loggers: set[str] = set()
# Process-wide level forced by set_level(); None means follow settings.toml
_level_override: int | None = None


def resolve_level(level: int | str | None = None) -> int:
    """Turn a level name or number into a logging level.

    With no level, the override from set_level() wins, then
    `[env] log_level` in settings.toml. Unknown names fall back to INFO.
    """
    if level is None:
        if _level_override is not None:
            return _level_override
        level = SettingsService().log_level
    if isinstance(level, str):
        return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
    return level


def set_level(level: int | str | None) -> None:
    """Apply a level to every logger created through setup_logging().

    Loggers created afterwards pick it up too. Passing None drops the
    override and goes back to the settings.toml level.
    """
    global _level_override
    _level_override = None if level is None else resolve_level(level)
    effective = resolve_level()
    for name in _configured_loggers:
        logging.getLogger(name).setLevel(effective)


def setup_logging(name="edmkts", log_file="edmkts.log", level=None, max_bytes=5*1024*1024, backup_count=3):
    """Return a logger writing to ./logs/<log_file> and to stderr.

    An absolute log_file is used as is (tests pass tmpdir paths); a relative
    one is reduced to its file name under LOGS_DIR. Calling again for the
    same name replaces the handlers instead of stacking them.

    Example:
        logger = setup_logging(__name__, log_file="lookup_service.log")
    """
    logger = logging.getLogger(name)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    os.makedirs(LOGS_DIR, exist_ok=True)
    if os.path.isabs(log_file):
        log_path = log_file
    else:
        log_path = os.path.join(LOGS_DIR, os.path.basename(log_file))

    file_handler = RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8')
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    logger.setLevel(resolve_level(level))
    _configured_loggers.add(name)
    return logger
