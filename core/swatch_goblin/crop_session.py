from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import math

from .errors import SelectionTooSmallError
from .viewport import canvas_to_image


LOG = logging.getLogger(__name__)

MIN_CROP_SIZE = 10
CROP_MODES = ('basic', 'advanced')


class CropState(Enum):
    IDLE = 'idle'
    SELECTING = 'selecting'
    COMPLETED = 'completed'


IDLE = CropState.IDLE
SELECTING = CropState.SELECTING
COMPLETED = CropState.COMPLETED


@dataclass
class CropSelection:
    mode: str
    anchor: tuple[float, float] | None = None
    current: tuple[float, float] | None = None


def normalize_rect(p1, p2) -> tuple[float, float, float, float]:
    return min(p1[0], p2[0]), min(p1[1], p2[1]), max(p1[0], p2[0]), max(p1[1], p2[1])


def canvas_rect_to_image(rect, viewport, image_size) -> tuple[int, int, int, int]:
    """Map a normalized canvas rectangle to a floor'd image box clamped to the image."""
    x1, y1, x2, y2 = rect
    ix1, iy1 = canvas_to_image(x1, y1, viewport)
    ix2, iy2 = canvas_to_image(x2, y2, viewport)
    width, height = image_size
    return (
        max(0, math.floor(ix1)),
        max(0, math.floor(iy1)),
        min(width, math.floor(ix2)),
        min(height, math.floor(iy2)),
    )


class CropSession:
    def __init__(self):
        self.state = IDLE
        self.selection: CropSelection | None = None

    @property
    def is_selecting(self) -> bool:
        return self.state == SELECTING

    @property
    def is_anchored(self) -> bool:
        return self.is_selecting and self.selection is not None and self.selection.anchor is not None

    @property
    def mode(self) -> str | None:
        return self.selection.mode if self.selection else None

    @property
    def rect(self):
        if not self.is_anchored:
            return None
        return normalize_rect(self.selection.anchor, self.selection.current)

    def begin(self, mode):
        if mode not in CROP_MODES:
            raise ValueError(f'Crop mode must be one of {CROP_MODES}, got {mode!r}')
        self.selection = CropSelection(mode=mode)
        self.state = SELECTING
        LOG.debug('crop armed (%s)', mode)

    def press(self, point):
        if not self.is_selecting:
            return
        self.selection.anchor = (point[0], point[1])
        self.selection.current = (point[0], point[1])

    def update(self, point):
        if not self.is_anchored:
            return
        self.selection.current = (point[0], point[1])

    def complete(self, point, image, viewport, store):
        """Finish the drag and prefill the palette from the selected region.

        Returns the store's new colors. Raises SelectionTooSmallError when the
        clamped region is narrower or shorter than MIN_CROP_SIZE.
        """
        if not self.is_anchored:
            return None
        self.update(point)
        rect = self.rect
        mode = self.selection.mode
        self.selection = None

        box = canvas_rect_to_image(rect, viewport, image.size)
        crop_w = box[2] - box[0]
        crop_h = box[3] - box[1]
        if crop_w < MIN_CROP_SIZE or crop_h < MIN_CROP_SIZE:
            self.state = IDLE
            LOG.debug('crop rejected: %dx%d below %d', crop_w, crop_h, MIN_CROP_SIZE)
            raise SelectionTooSmallError('Selection too small. Please try again.')

        self.state = COMPLETED
        region = image.crop(box)
        LOG.info('crop %s prefill over %s (%dx%d)', mode, box, crop_w, crop_h)
        if mode == 'basic':
            return store.prefill_basic(region)
        return store.prefill_advanced(region)

    def cancel(self):
        if self.state != IDLE:
            LOG.debug('crop cancelled')
        self.state = IDLE
        self.selection = None
