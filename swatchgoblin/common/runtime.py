from __future__ import annotations

import logging
import os


EXTRACTOR_ENV = 'SWATCHGOBLIN_EXTRACTOR'
LOG_LEVEL_ENV = 'SWATCHGOBLIN_LOG_LEVEL'
DISABLE_DND_ENV = 'SWATCHGOBLIN_DISABLE_DND'
DEFAULT_EXTRACTOR = 'kmeans'
DEFAULT_LOG_LEVEL = 'WARNING'


def _is_truthy(value: str | None) -> bool:
    return str(value or '').strip().lower() in {'1', 'true', 'yes', 'on'}


def extractor_name() -> str:
    return str(os.getenv(EXTRACTOR_ENV) or DEFAULT_EXTRACTOR).strip().lower()


def set_extractor_name(name: str | None) -> None:
    if name:
        os.environ[EXTRACTOR_ENV] = name
    else:
        os.environ.pop(EXTRACTOR_ENV, None)


def log_level() -> int:
    name = str(os.getenv(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def set_log_level(name: str | None) -> None:
    if name:
        os.environ[LOG_LEVEL_ENV] = name.upper()
    else:
        os.environ.pop(LOG_LEVEL_ENV, None)


def is_dnd_disabled() -> bool:
    return _is_truthy(os.getenv(DISABLE_DND_ENV))


def set_dnd_disabled(disabled: bool) -> None:
    if disabled:
        os.environ[DISABLE_DND_ENV] = '1'
    else:
        os.environ.pop(DISABLE_DND_ENV, None)


def configure_logging() -> None:
    logging.basicConfig(
        level=log_level(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
