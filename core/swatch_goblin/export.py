from __future__ import annotations

import io
import math
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from .color_math import contrast_color, display_hex, normalize_hex


EXPORT_COLUMNS = 7
CELL_SIZE = 100
BORDER_COLOR = '#333333'
BORDER_WIDTH = 2
BACKGROUND = '#ffffff'
LABEL_FONT_SIZE = 12
LABEL_FONTS = ('DejaVuSansMono-Bold.ttf', 'Menlo-Bold.ttf', 'consolab.ttf', 'courbd.ttf')
EXPORT_FILENAME = 'color-palette.png'


def export_text(colors) -> str:
    return ', '.join(display_hex(c) for c in colors)


def _label_font():
    for name in LABEL_FONTS:
        try:
            return ImageFont.truetype(name, LABEL_FONT_SIZE)
        except OSError:
            continue
    return ImageFont.load_default()


def render_palette_image(colors, columns=EXPORT_COLUMNS, cell_size=CELL_SIZE):
    """Draw the palette as a grid of labeled square cells in manual order."""
    colors = [normalize_hex(c) for c in colors]
    if not colors:
        raise ValueError('Palette is empty, nothing to export.')
    if columns < 1 or cell_size < 1:
        raise ValueError('Columns and cell size must be positive.')

    rows = math.ceil(len(colors) / columns)
    image = Image.new('RGB', (columns * cell_size, rows * cell_size), BACKGROUND)
    draw = ImageDraw.Draw(image)
    font = _label_font()

    for index, color in enumerate(colors):
        x = (index % columns) * cell_size
        y = (index // columns) * cell_size
        draw.rectangle(
            (x, y, x + cell_size - 1, y + cell_size - 1),
            fill=color,
            outline=BORDER_COLOR,
            width=BORDER_WIDTH,
        )
        label = display_hex(color)
        left, top, right, bottom = draw.textbbox((0, 0), label, font=font)
        tx = x + (cell_size - (right - left)) / 2 - left
        ty = y + (cell_size - (bottom - top)) / 2 - top
        draw.text((tx, ty), label, fill=contrast_color(color), font=font)

    return image


def encode_palette_png(colors, columns=EXPORT_COLUMNS, cell_size=CELL_SIZE) -> bytes:
    buf = io.BytesIO()
    render_palette_image(colors, columns=columns, cell_size=cell_size).save(buf, format='PNG')
    return buf.getvalue()


def save_palette_image(colors, path, columns=EXPORT_COLUMNS, cell_size=CELL_SIZE) -> Path:
    path = Path(path)
    if path.is_dir():
        path = path / EXPORT_FILENAME
    path.write_bytes(encode_palette_png(colors, columns=columns, cell_size=cell_size))
    return path
