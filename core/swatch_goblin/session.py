from __future__ import annotations

from enum import Enum
import logging

from .crop_session import CropSession
from .errors import ExtractionFailedError, OutOfBoundsError, SelectionTooSmallError
from .export import export_text, save_palette_image
from .palette_store import PaletteStore
from .viewport import ViewportState, apply_pan, apply_zoom_delta, fit_to_pane


LOG = logging.getLogger(__name__)

DRAG_THRESHOLD = 2


class InteractionMode(Enum):
    IDLE = 'idle'
    PANNING = 'panning'
    SELECTING = 'selecting'


MODE_IDLE = InteractionMode.IDLE
MODE_PANNING = InteractionMode.PANNING
MODE_SELECTING = InteractionMode.SELECTING


class Renderer:
    """Display surface driven by PickerSession. Subclasses override what they draw."""

    def show_palette(self, colors):
        pass

    def show_viewport(self, state):
        pass

    def show_overlay(self, rect):
        pass

    def notify(self, message):
        pass


class NullRenderer(Renderer):
    pass


class PickerSession:
    """Owns the image, viewport, palette and crop gesture for one window.

    All pointer, wheel and key events go through here; `mode` decides which
    gesture a pointer event belongs to.
    """

    def __init__(self, renderer=None, store=None, sampler=None):
        self.renderer = renderer if renderer is not None else NullRenderer()
        self.store = store if store is not None else PaletteStore(sampler=sampler)
        self.crop = CropSession()
        self.image = None
        self.pane_size = (1, 1)
        self.viewport = ViewportState()
        self.mode = MODE_IDLE
        self._last_point = None
        self._dragged = False

    @property
    def has_image(self) -> bool:
        return self.image is not None

    def _publish(self):
        self.renderer.show_palette(self.store.display_order())

    def _reset_gesture(self):
        self.mode = MODE_IDLE
        self._last_point = None
        self._dragged = False

    def load_image(self, image, pane_size=None):
        if pane_size is not None:
            self.pane_size = pane_size
        self.image = image
        self.crop.cancel()
        self._reset_gesture()
        self.viewport = fit_to_pane(image.size, self.pane_size)
        LOG.info('image loaded %dx%d, zoom %.3f', image.width, image.height, self.viewport.zoom)
        self.renderer.show_overlay(None)
        self.renderer.show_viewport(self.viewport)
        self._publish()

    def resize_pane(self, pane_size):
        self.pane_size = pane_size
        self.fit()

    def fit(self):
        if not self.has_image:
            return
        self.viewport = fit_to_pane(self.image.size, self.pane_size)
        self.renderer.show_viewport(self.viewport)

    def wheel(self, direction):
        if not self.has_image:
            return
        self.viewport = apply_zoom_delta(self.viewport, direction)
        self.renderer.show_viewport(self.viewport)

    def pointer_down(self, x, y):
        if not self.has_image:
            return
        if self.mode == MODE_SELECTING:
            self.crop.press((x, y))
            self.renderer.show_overlay(self.crop.rect)
            return
        self.mode = MODE_PANNING
        self._last_point = (x, y)
        self._dragged = False

    def pointer_move(self, x, y):
        if not self.has_image:
            return
        if self.mode == MODE_SELECTING:
            if self.crop.is_anchored:
                self.crop.update((x, y))
                self.renderer.show_overlay(self.crop.rect)
            return
        if self.mode != MODE_PANNING:
            return

        dx = x - self._last_point[0]
        dy = y - self._last_point[1]
        if abs(dx) > DRAG_THRESHOLD or abs(dy) > DRAG_THRESHOLD:
            self._dragged = True
        self.viewport = apply_pan(self.viewport, dx, dy)
        self._last_point = (x, y)
        self.renderer.show_viewport(self.viewport)

    def pointer_up(self, x, y):
        if self.mode == MODE_SELECTING:
            if self.crop.is_anchored:
                self._complete_crop((x, y))
            return
        if self.mode != MODE_PANNING:
            return
        dragged = self._dragged
        self._reset_gesture()
        if not dragged:
            self.pick(x, y)

    def pointer_leave(self):
        if self.mode == MODE_PANNING:
            self._reset_gesture()
        elif self.mode == MODE_SELECTING and self.crop.is_anchored:
            self.cancel_crop()
            self.renderer.notify('Selection cancelled')

    def pick(self, x, y) -> bool:
        if not self.has_image:
            return False
        try:
            changed = self.store.pick(self.image, (x, y), self.viewport)
        except OutOfBoundsError as exc:
            LOG.warning('pick rejected: %s', exc)
            return False
        if changed:
            self._publish()
        return changed

    def start_crop(self, mode) -> bool:
        if not self.has_image or self.mode == MODE_SELECTING:
            return False
        self.crop.begin(mode)
        self.mode = MODE_SELECTING
        self.renderer.show_overlay(None)
        self.renderer.notify('Draw a rectangle to select the area for color extraction')
        return True

    def cancel_crop(self) -> bool:
        if self.mode != MODE_SELECTING:
            return False
        self.crop.cancel()
        self._reset_gesture()
        self.renderer.show_overlay(None)
        return True

    def _complete_crop(self, point):
        try:
            self.crop.complete(point, self.image, self.viewport, self.store)
        except SelectionTooSmallError as exc:
            self.renderer.notify(str(exc))
        except ExtractionFailedError as exc:
            LOG.warning('crop extraction failed: %s', exc)
            self.renderer.notify('Failed to extract colors. Make sure the image is loaded correctly.')
        else:
            self._publish()
        finally:
            self.crop.cancel()
            self._reset_gesture()
            self.renderer.show_overlay(None)

    def _prefill(self, action) -> bool:
        if not self.has_image:
            return False
        try:
            action(self.image)
        except ExtractionFailedError as exc:
            LOG.warning('prefill failed: %s', exc)
            self.renderer.notify('Failed to extract colors. Make sure the image is loaded correctly.')
            return False
        self._publish()
        return True

    def prefill_basic(self) -> bool:
        return self._prefill(self.store.prefill_basic)

    def prefill_advanced(self) -> bool:
        return self._prefill(self.store.prefill_advanced)

    def remove(self, color, display_index=None) -> bool:
        changed = self.store.remove(color, display_index)
        if changed:
            self._publish()
        return changed

    def clear(self) -> bool:
        changed = self.store.clear()
        if changed:
            self._publish()
        return changed

    def undo(self) -> bool:
        changed = self.store.undo()
        if changed:
            self._publish()
            self.renderer.notify('Undo successful')
        return changed

    def export_text(self) -> str:
        return export_text(self.store.colors)

    def export_image(self, path):
        colors = self.store.colors
        if not colors:
            return None
        out_path = save_palette_image(colors, path)
        LOG.info('palette image written to %s', out_path)
        self.renderer.notify('Palette image saved!')
        return out_path
