from .theme import SECTION_GAP, SPACE_8, SPACE_12, SPACE_16, SURFACE_PAD, SWATCH_COLUMNS, apply_suite_theme, get_theme_tokens
from .ui_helpers import ToastNotifier, bind_button_feedback
from .file_helpers import ask_directory, ask_image_file, read_file_bytes
from .shortcuts import ShortcutManager
from .jobs import BackgroundJobRunner, JobResult
from .runtime import (
    configure_logging,
    extractor_name,
    is_dnd_disabled,
    log_level,
    set_dnd_disabled,
    set_extractor_name,
    set_log_level,
)
from .version import APP_NAME, APP_VERSION, tool_title, version_text

__all__ = [
    'SECTION_GAP',
    'SURFACE_PAD',
    'SPACE_8',
    'SPACE_12',
    'SPACE_16',
    'SWATCH_COLUMNS',
    'apply_suite_theme',
    'get_theme_tokens',
    'ToastNotifier',
    'bind_button_feedback',
    'ask_directory',
    'ask_image_file',
    'read_file_bytes',
    'ShortcutManager',
    'BackgroundJobRunner',
    'JobResult',
    'configure_logging',
    'extractor_name',
    'is_dnd_disabled',
    'log_level',
    'set_dnd_disabled',
    'set_extractor_name',
    'set_log_level',
    'APP_NAME',
    'APP_VERSION',
    'tool_title',
    'version_text',
]
