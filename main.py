from __future__ import annotations

import argparse

from swatchgoblin.common import set_dnd_disabled, set_extractor_name, set_log_level, version_text
from swatchgoblin.picker import run


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Swatch Goblin palette picker')
    parser.add_argument('--extractor', choices=('kmeans', 'colorthief'), help='Dominant-color algorithm used by Prefill')
    parser.add_argument('--log-level', choices=('DEBUG', 'INFO', 'WARNING', 'ERROR'), type=str.upper, help='Logging verbosity')
    parser.add_argument('--no-dnd', action='store_true', help='Disable drag-and-drop image loading')
    parser.add_argument('--version', action='version', version=version_text())
    args = parser.parse_args()
    if args.extractor:
        set_extractor_name(args.extractor)
    if args.log_level:
        set_log_level(args.log_level)
    if args.no_dnd:
        set_dnd_disabled(True)
    run()
