from __future__ import annotations

from collections import deque
import logging
import math

from .color_math import hue_of, normalize_hex
from .errors import InvalidFormatError
from .sampler import Sampler
from .viewport import canvas_to_image, contains


LOG = logging.getLogger(__name__)

MAX_COLORS = 21
HISTORY_LIMIT = 10
BASIC_PREFILL_COUNT = 20


class HistoryStack:
    """Bounded undo stack. Overflow drops the oldest snapshot."""

    def __init__(self, limit=HISTORY_LIMIT):
        self.limit = limit
        self._items = deque(maxlen=limit)

    def push(self, snapshot):
        self._items.append(list(snapshot))

    def pop(self):
        if not self._items:
            return None
        return self._items.pop()

    def clear(self):
        self._items.clear()

    def __len__(self):
        return len(self._items)


class PaletteStore:
    def __init__(self, sampler=None, max_colors=MAX_COLORS, history_limit=HISTORY_LIMIT):
        self.sampler = sampler if sampler is not None else Sampler()
        self.max_colors = max_colors
        self.history = HistoryStack(history_limit)
        self._colors: list[str] = []

    @property
    def colors(self) -> list[str]:
        return list(self._colors)

    @property
    def can_undo(self) -> bool:
        return len(self.history) > 0

    @property
    def is_full(self) -> bool:
        return len(self._colors) >= self.max_colors

    def __len__(self):
        return len(self._colors)

    def _snapshot(self):
        self.history.push(self._colors)

    def pick(self, image, canvas_point, viewport) -> bool:
        if self.is_full:
            LOG.debug('pick ignored: palette full (%d)', self.max_colors)
            return False
        ix, iy = canvas_to_image(canvas_point[0], canvas_point[1], viewport)
        if not contains(image.size, ix, iy):
            LOG.debug('pick ignored: (%.1f, %.1f) outside image', ix, iy)
            return False

        color = self.sampler.sample_neighborhood(image, math.floor(ix), math.floor(iy))
        self._snapshot()
        self._colors.append(color)
        LOG.info('picked %s at (%d, %d)', color, math.floor(ix), math.floor(iy))
        return True

    def _replace(self, colors, source):
        self._snapshot()
        self._colors = list(colors[:self.max_colors])
        LOG.info('%s prefill replaced palette with %d colors', source, len(self._colors))

    def prefill_basic(self, image):
        colors = self.sampler.extract_dominant(image, BASIC_PREFILL_COUNT)
        self._replace(colors, 'basic')
        return self.colors

    def prefill_advanced(self, image):
        colors = self.sampler.extract_advanced(image)
        self._replace(colors, 'advanced')
        return self.colors

    def remove(self, color, display_index=None) -> bool:
        """Remove the first occurrence of color in manual order.

        display_index only tells the renderer which swatch to animate.
        """
        try:
            target = normalize_hex(color)
        except InvalidFormatError:
            return False
        if target not in self._colors:
            return False
        self._snapshot()
        self._colors.remove(target)
        LOG.info('removed %s (display slot %s)', target, display_index)
        return True

    def clear(self) -> bool:
        if not self._colors:
            return False
        self._snapshot()
        self._colors = []
        LOG.info('palette cleared')
        return True

    def undo(self) -> bool:
        previous = self.history.pop()
        if previous is None:
            return False
        self._colors = previous
        LOG.info('undo restored %d colors, %d steps left', len(previous), len(self.history))
        return True

    def display_order(self) -> list[str]:
        return sorted(self._colors, key=hue_of)
