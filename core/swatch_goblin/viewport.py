from __future__ import annotations

from dataclasses import dataclass, replace


ZOOM_MIN = 0.1
ZOOM_MAX = 10.0
ZOOM_DELTA = 0.1


@dataclass(frozen=True)
class ViewportState:
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0


def clamp_zoom(zoom: float) -> float:
    return max(ZOOM_MIN, min(ZOOM_MAX, zoom))


def canvas_to_image(cx: float, cy: float, viewport: ViewportState) -> tuple[float, float]:
    zoom = viewport.zoom
    return (cx - viewport.pan_x * zoom) / zoom, (cy - viewport.pan_y * zoom) / zoom


def image_to_canvas(ix: float, iy: float, viewport: ViewportState) -> tuple[float, float]:
    zoom = viewport.zoom
    return (ix + viewport.pan_x) * zoom, (iy + viewport.pan_y) * zoom


def contains(image_size, ix: float, iy: float) -> bool:
    width, height = image_size
    return 0 <= ix < width and 0 <= iy < height


def fit_to_pane(image_size, pane_size) -> ViewportState:
    """Fill the pane with the image (edges may be cropped) and center it."""
    image_w, image_h = image_size
    pane_w, pane_h = pane_size
    if image_w <= 0 or image_h <= 0:
        raise ValueError(f'Image size must be positive, got {image_w}x{image_h}')
    pane_w = max(1, pane_w)
    pane_h = max(1, pane_h)

    zoom = clamp_zoom(max(pane_w / image_w, pane_h / image_h))
    return ViewportState(
        zoom=zoom,
        pan_x=(pane_w / zoom - image_w) / 2,
        pan_y=(pane_h / zoom - image_h) / 2,
    )


def apply_zoom_delta(viewport: ViewportState, direction: int) -> ViewportState:
    if direction > 0:
        factor = 1 + ZOOM_DELTA
    elif direction < 0:
        factor = 1 - ZOOM_DELTA
    else:
        return viewport
    return replace(viewport, zoom=clamp_zoom(viewport.zoom * factor))


def apply_pan(viewport: ViewportState, dx_screen: float, dy_screen: float) -> ViewportState:
    return replace(
        viewport,
        pan_x=viewport.pan_x + dx_screen / viewport.zoom,
        pan_y=viewport.pan_y + dy_screen / viewport.zoom,
    )
