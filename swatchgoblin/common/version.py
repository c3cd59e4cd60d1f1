from __future__ import annotations

APP_NAME = 'Swatch Goblin'
APP_VERSION = 'v1.0.0'


def tool_title(tool_name: str = APP_NAME) -> str:
    return f'{tool_name} {APP_VERSION}'


def version_text() -> str:
    return APP_VERSION
