from __future__ import annotations

import logging
import math

from .color_math import derive_variations, hex_to_rgb, rgb_to_hex, round_half_up
from .errors import ExtractionFailedError, OutOfBoundsError
from .extractors import get_extractor


LOG = logging.getLogger(__name__)

ADVANCED_MAIN_COLORS = 5
LEAD_VARIATIONS = 4
FOLLOW_VARIATIONS = 3


def sample_neighborhood(image, x, y, radius=1):
    """Average the in-bounds pixels of the square around (x, y).

    Neighbors falling outside the image are left out of both the sum and the
    count, so edge and corner samples average fewer pixels.
    """
    if radius < 0:
        raise ValueError(f'Radius must be >= 0, got {radius}')
    width, height = image.size
    if not (0 <= x < width and 0 <= y < height):
        raise OutOfBoundsError(f'Sample point ({x}, {y}) is outside {width}x{height} image')
    x = math.floor(x)
    y = math.floor(y)

    rgb = image if image.mode == 'RGB' else image.convert('RGB')
    pixels = rgb.load()
    r = g = b = count = 0
    for py in range(max(0, y - radius), min(height, y + radius + 1)):
        for px in range(max(0, x - radius), min(width, x + radius + 1)):
            pr, pg, pb = pixels[px, py][:3]
            r += pr
            g += pg
            b += pb
            count += 1

    return rgb_to_hex(round_half_up(r / count), round_half_up(g / count), round_half_up(b / count))


class Sampler:
    def __init__(self, extractor=None):
        self.extractor = extractor if extractor is not None else get_extractor()

    def sample_neighborhood(self, image, x, y, radius=1):
        return sample_neighborhood(image, x, y, radius=radius)

    def extract_dominant(self, image, count):
        count = int(count)
        if count < 1:
            raise ValueError(f'Color count must be >= 1, got {count}')
        try:
            raw = self.extractor.extract(image, count)
        except Exception as exc:
            LOG.warning('palette extractor %s failed: %s', type(self.extractor).__name__, exc)
            raise ExtractionFailedError(f'Failed to extract colors: {exc}') from exc
        if not raw:
            raise ExtractionFailedError('Extractor returned no colors.')
        try:
            colors = [rgb_to_hex(*rgb[:3]) for rgb in raw[:count]]
        except ValueError as exc:
            raise ExtractionFailedError(f'Extractor returned an invalid color: {exc}') from exc
        LOG.debug('extracted %d/%d dominant colors', len(colors), count)
        return colors

    def extract_advanced(self, image):
        """Five main colors, each followed by its variations.

        The top-ranked color gets four variations and the rest get three, so a
        full extraction yields 5 + 4 * 4 = 21 colors.
        """
        colors = []
        for rank, base in enumerate(self.extract_dominant(image, ADVANCED_MAIN_COLORS)):
            colors.append(base)
            count = LEAD_VARIATIONS if rank == 0 else FOLLOW_VARIATIONS
            colors.extend(derive_variations(*hex_to_rgb(base), count))
        return colors
